# Overview: Request decorators for API routes.

from functools import wraps
from flask import request, jsonify, g, current_app

from .extensions import token_codec
from .services.token_service import TokenError


def bearer_token() -> str | None:
    """Token from an `Authorization: Bearer <token>` header, or None."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    token = auth_header.split(" ", 1)[1].strip()
    return token or None


def require_auth(f):
    """
    Require a valid bearer token.

    Sets g.current_user to the verified Credential.

    Returns 401 if no token is presented and 403 if the token is malformed,
    badly signed, unreadable or expired.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = bearer_token()
        if token is None:
            return jsonify({"success": False, "message": "Access token required"}), 401

        try:
            credential = token_codec().verify(token)
        except TokenError as e:
            current_app.logger.info(
                "Rejected token on %s %s: %s", request.method, request.path, e.kind.value
            )
            return jsonify({"success": False, "message": "Invalid or expired token"}), 403

        g.current_user = credential
        return f(*args, **kwargs)

    return decorated_function
