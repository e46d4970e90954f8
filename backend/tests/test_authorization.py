"""
Authorization tests.

Verifies:
- Login issues a token for each demo user and rejects bad credentials
- Protected endpoints return 401 without a token
- Protected endpoints return 403 for malformed, forged or expired tokens
- Public endpoints need no token
"""

import pytest

from coffee_pos.extensions import token_codec
from coffee_pos.time_utils import epoch_seconds
from tests.conftest import auth_headers, get_auth_token


PROTECTED = [
    ("GET", "/api/dashboard-stats"),
    ("GET", "/api/low-stock"),
    ("GET", "/api/analytics"),
    ("POST", "/api/process-order"),
    ("POST", "/api/update-inventory"),
    ("POST", "/api/auth/logout"),
]

PUBLIC = [
    "/api/get-settings",
    "/api/get-products",
    "/health",
    "/api/health",
]


def _call(client, method, path, headers=None):
    kwargs = {"headers": headers or {}}
    if method == "POST":
        kwargs["json"] = {}
    return getattr(client, method.lower())(path, **kwargs)


# =============================================================================
# LOGIN
# =============================================================================


class TestLogin:

    @pytest.mark.parametrize(
        "username,password,role",
        [
            ("admin", "admin123", "admin"),
            ("manager", "manager123", "manager"),
            ("staff", "staff123", "staff"),
        ],
    )
    def test_demo_users_can_log_in(self, app, client, username, password, role):
        resp = client.post("/api/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200

        data = resp.json
        assert data["success"] is True
        assert data["message"] == "Login successful"
        assert data["user"]["username"] == username
        assert data["user"]["role"] == role
        assert "password" not in data["user"]
        assert "password_hash" not in data["user"]

        with app.app_context():
            credential = token_codec().verify(data["token"])
        assert credential.username == username
        assert credential.role == role
        assert credential.subject_id == data["user"]["id"]

    def test_wrong_password(self, client):
        resp = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
        assert resp.status_code == 401
        assert resp.json == {"success": False, "message": "Invalid credentials"}

    def test_unknown_user(self, client):
        resp = client.post("/api/auth/login", json={"username": "ghost", "password": "admin123"})
        assert resp.status_code == 401

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"username": "admin"},
            {"password": "admin123"},
            {"username": "", "password": "admin123"},
            {"username": ["admin"], "password": "admin123"},
        ],
    )
    def test_missing_credentials(self, client, body):
        resp = client.post("/api/auth/login", json=body)
        assert resp.status_code == 400
        assert resp.json["success"] is False

    def test_non_json_body(self, client):
        resp = client.post("/api/auth/login", data="username=admin", content_type="text/plain")
        assert resp.status_code == 400

    def test_logout(self, client, admin_headers):
        resp = client.post("/api/auth/logout", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json["success"] is True


# =============================================================================
# UNAUTHENTICATED ACCESS: 401
# =============================================================================


class TestUnauthenticatedAccess:

    @pytest.mark.parametrize("method,path", PROTECTED)
    def test_requires_auth(self, client, method, path):
        resp = _call(client, method, path)
        assert resp.status_code == 401, f"{method} {path} returned {resp.status_code}"
        assert resp.json == {"success": False, "message": "Access token required"}

    @pytest.mark.parametrize("header", ["", "Bearer", "Bearer ", "Basic YWRtaW46YWRtaW4xMjM="])
    def test_non_bearer_header_is_missing_token(self, client, header):
        resp = client.get("/api/dashboard-stats", headers={"Authorization": header})
        assert resp.status_code == 401


# =============================================================================
# INVALID OR EXPIRED TOKEN: 403
# =============================================================================


class TestRejectedTokens:

    @pytest.mark.parametrize("method,path", PROTECTED)
    def test_garbage_token(self, client, method, path):
        resp = _call(client, method, path, headers=auth_headers("x.y.z"))
        assert resp.status_code == 403, f"{method} {path} returned {resp.status_code}"
        assert resp.json == {"success": False, "message": "Invalid or expired token"}

    @pytest.mark.parametrize("token", ["abc", "a.b", "a.b.c.d"])
    def test_malformed_token(self, client, token):
        resp = client.get("/api/dashboard-stats", headers=auth_headers(token))
        assert resp.status_code == 403

    def test_expired_token(self, app, client):
        with app.app_context():
            token = token_codec().issue(
                {"id": 1, "username": "admin", "role": "admin"},
                expires_at=epoch_seconds() - 1,
            )
        resp = client.get("/api/dashboard-stats", headers=auth_headers(token))
        assert resp.status_code == 403

    def test_tampered_token(self, client):
        token = get_auth_token(client, "staff", "staff123")
        header, payload, signature = token.split(".")
        tampered = f"{header}.{payload}.{signature[:-2]}{'A' if signature[-2] != 'A' else 'B'}{signature[-1]}"
        resp = client.get("/api/dashboard-stats", headers=auth_headers(tampered))
        assert resp.status_code == 403


# =============================================================================
# END TO END
# =============================================================================


class TestAdminFlow:

    def test_login_then_dashboard(self, client):
        token = get_auth_token(client, "admin", "admin123")
        assert token

        assert client.get("/api/dashboard-stats", headers=auth_headers(token)).status_code == 200
        assert client.get("/api/dashboard-stats", headers=auth_headers("x.y.z")).status_code == 403
        assert client.get("/api/dashboard-stats").status_code == 401

    def test_staff_token_is_accepted_on_protected_routes(self, client, staff_headers):
        assert client.get("/api/low-stock", headers=staff_headers).status_code == 200


class TestPublicAccess:

    @pytest.mark.parametrize("path", PUBLIC)
    def test_no_token_needed(self, client, path):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.json["success"] is True
