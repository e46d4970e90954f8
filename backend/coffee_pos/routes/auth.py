# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

# backend/coffee_pos/routes/auth.py
"""
Authentication API routes

- POST /api/auth/login issues a signed bearer token for a demo user
- POST /api/auth/logout acknowledges logout; tokens are stateless and simply
  expire, so there is nothing to revoke server-side
"""

from flask import Blueprint, request, jsonify, current_app, g

from ..decorators import require_auth
from ..extensions import token_codec, user_directory


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/login")
def login_route():
    """
    Authenticate a demo user and issue a token.

    Returns {success, token, user, message}; the user record never includes
    the password.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}
    username = data.get("username")
    password = data.get("password")

    if not username or not password or not isinstance(username, str) or not isinstance(password, str):
        return jsonify({"success": False, "message": "Username and password required"}), 400

    user = user_directory().authenticate(username, password)
    if not user:
        current_app.logger.warning("Failed login for username %r", username)
        return jsonify({"success": False, "message": "Invalid credentials"}), 401

    token = token_codec().issue(user.to_dict())
    current_app.logger.info("User %s logged in (role=%s)", user.username, user.role)

    return jsonify({
        "success": True,
        "token": token,
        "user": user.to_dict(),
        "message": "Login successful",
    }), 200


@auth_bp.post("/logout")
@require_auth
def logout_route():
    current_app.logger.info("User %s logged out", g.current_user.username)
    return jsonify({"success": True, "message": "Logged out successfully"}), 200
