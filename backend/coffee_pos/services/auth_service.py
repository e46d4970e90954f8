# Overview: Service-layer operations for auth; checks demo user credentials.

"""
Demo User Authentication

WHY: The POS ships with a fixed set of demo accounts (admin, manager, staff).
They are provided as configuration when the app is created, never read from
a module-level list.

SECURITY NOTES:
- Plaintext passwords from config are hashed with bcrypt at startup and
  discarded; only the hashes are kept in memory
- Password checks go through bcrypt.checkpw (timing-safe)
- Unknown usernames still run one bcrypt check so response time does not
  reveal which accounts exist
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import bcrypt


@dataclass(frozen=True)
class DemoUser:
    id: int
    username: str
    role: str
    name: str
    password_hash: bytes

    def to_dict(self) -> dict[str, Any]:
        """Public representation (never includes the password hash)."""
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role,
            "name": self.name,
        }


def hash_password(password: str, rounds: int = 12) -> bytes:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt)


def verify_password(password: str, password_hash: bytes) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash)
    except ValueError:
        # Malformed hash
        return False


class UserDirectory:
    """In-memory directory of demo users keyed by username."""

    def __init__(self, users: Iterable[dict[str, Any]], bcrypt_rounds: int = 12):
        self._users: dict[str, DemoUser] = {}
        for record in users:
            user = DemoUser(
                id=record["id"],
                username=record["username"],
                role=record["role"],
                name=record.get("name", record["username"]),
                password_hash=hash_password(record["password"], rounds=bcrypt_rounds),
            )
            self._users[user.username] = user
        self._dummy_hash = hash_password("not-a-real-password", rounds=bcrypt_rounds)

    def authenticate(self, username: str, password: str) -> DemoUser | None:
        """
        Return the DemoUser if the credentials match, None otherwise.
        """
        user = self._users.get(username)
        if user is None:
            verify_password(password, self._dummy_hash)
            return None
        if verify_password(password, user.password_hash):
            return user
        return None
