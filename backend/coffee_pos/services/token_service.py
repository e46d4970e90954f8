# Overview: Service-layer operations for bearer tokens; issues and verifies signed credentials.

"""
Signed Bearer Token Service

WHY: Protected routes need a self-contained credential that can be checked
without any server-side session store. The token carries identity, role and
expiry, and is signed with a process-wide secret.

WIRE FORMAT:
    base64url(header) "." base64url(payload) "." base64url(signature)

- header:    {"alg": "HS256", "typ": "JWT"}
- payload:   {"id", "username", "role", "exp"}
- signature: HMAC-SHA256(secret, seg0 + "." + seg1)

All base64url segments are unpadded. The layout follows the common signed
claims convention, but only `exp` is interpreted.

SECURITY NOTES:
- No revocation list: expiry is the only way a token stops working
- Signature segments compared with hmac.compare_digest (constant time)
- Signature is checked before the payload is decoded
"""

from __future__ import annotations

import base64
import binascii
import enum
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from typing import Any, Callable


TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}
DEFAULT_TTL_SECONDS = 24 * 60 * 60
VALID_ROLES = frozenset({"admin", "manager", "staff"})


class TokenErrorKind(enum.Enum):
    MALFORMED_TOKEN = "MalformedToken"
    INVALID_SIGNATURE = "InvalidSignature"
    INVALID_PAYLOAD = "InvalidPayload"
    EXPIRED = "Expired"


class TokenError(Exception):
    """Raised by TokenCodec.verify when a token is rejected."""

    def __init__(self, kind: TokenErrorKind):
        self.kind = kind
        super().__init__(kind.value)


@dataclass(frozen=True)
class Credential:
    """
    Identity proven by a verified token.

    The issue time is implicit (expires_at minus the codec TTL) and is not
    carried on the wire.
    """
    subject_id: int | str
    username: str
    role: str
    expires_at: int

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.subject_id,
            "username": self.username,
            "role": self.role,
            "exp": self.expires_at,
        }

    @classmethod
    def from_payload(cls, payload: Any) -> "Credential":
        """Build from a decoded payload; raises ValueError when a claim is missing or mistyped."""
        if not isinstance(payload, dict):
            raise ValueError("payload must be a JSON object")

        subject_id = payload.get("id")
        username = payload.get("username")
        role = payload.get("role")
        exp = payload.get("exp")

        if isinstance(subject_id, bool) or not isinstance(subject_id, (int, str)):
            raise ValueError("id must be an integer or string")
        if not isinstance(username, str) or not isinstance(role, str):
            raise ValueError("username and role must be strings")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise ValueError("exp must be a number")

        return cls(subject_id=subject_id, username=username, role=role, expires_at=int(exp))


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of TokenCodec.decode: exactly one of credential / error is set."""
    credential: Credential | None = None
    error: TokenErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def b64url_decode(segment: str) -> bytes:
    padding = "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(segment + padding)


def _encode_json(obj: dict[str, Any]) -> str:
    return b64url_encode(json.dumps(obj, separators=(",", ":")).encode("utf-8"))


class TokenCodec:
    """
    Issues and verifies signed bearer tokens.

    The secret, TTL and clock are injected at construction time so that each
    Flask app (and each test) owns its own signing configuration.
    """

    def __init__(
        self,
        secret: str | bytes,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret.encode("utf-8") if isinstance(secret, str) else secret
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock())

    def _sign(self, signing_input: str) -> str:
        digest = hmac.new(self._secret, signing_input.encode("ascii"), hashlib.sha256).digest()
        return b64url_encode(digest)

    def issue(self, user: dict[str, Any], expires_at: int | None = None) -> str:
        """
        Issue a token for a user record with `id`, `username` and `role`.

        Raises ValueError if the role is not one of VALID_ROLES.
        """
        role = user.get("role")
        if role not in VALID_ROLES:
            raise ValueError(f"Unsupported role: {role!r}")

        if expires_at is None:
            expires_at = self._now() + self.ttl_seconds

        credential = Credential(
            subject_id=user["id"],
            username=user["username"],
            role=role,
            expires_at=expires_at,
        )

        signing_input = f"{_encode_json(TOKEN_HEADER)}.{_encode_json(credential.to_payload())}"
        return f"{signing_input}.{self._sign(signing_input)}"

    def decode(self, token: Any) -> DecodeResult:
        """
        Check a token and return a DecodeResult.

        Never raises for bad input; the error kind says why a token was rejected.
        """
        if not isinstance(token, str):
            return DecodeResult(error=TokenErrorKind.MALFORMED_TOKEN)

        parts = token.split(".")
        if len(parts) != 3 or not all(parts):
            return DecodeResult(error=TokenErrorKind.MALFORMED_TOKEN)

        header_b64, payload_b64, signature_b64 = parts

        try:
            expected = self._sign(f"{header_b64}.{payload_b64}")
        except UnicodeEncodeError:
            return DecodeResult(error=TokenErrorKind.INVALID_SIGNATURE)

        if not hmac.compare_digest(expected.encode("ascii"), signature_b64.encode("utf-8")):
            return DecodeResult(error=TokenErrorKind.INVALID_SIGNATURE)

        try:
            payload = json.loads(b64url_decode(payload_b64).decode("utf-8"))
            credential = Credential.from_payload(payload)
        except (binascii.Error, UnicodeDecodeError, ValueError, OverflowError):
            return DecodeResult(error=TokenErrorKind.INVALID_PAYLOAD)

        if credential.expires_at <= self._now():
            return DecodeResult(error=TokenErrorKind.EXPIRED)

        return DecodeResult(credential=credential)

    def verify(self, token: Any) -> Credential:
        """Return the verified Credential or raise TokenError."""
        result = self.decode(token)
        if result.error is not None:
            raise TokenError(result.error)
        return result.credential
