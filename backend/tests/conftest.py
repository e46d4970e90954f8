"""
Pytest fixtures for Coffee POS backend tests.

Provides the Flask app and test client, a fake n8n upstream plugged in
through httpx.MockTransport, and login helpers.
"""

import json

import httpx
import pytest

from coffee_pos import create_app


TEST_SECRET = "test-secret-do-not-use"
WEBHOOK_BASE = "http://n8n.test"


class FakeUpstream:
    """
    Stand-in for the n8n host.

    By default every request fails to connect. Tests install per-operation
    replies with `reply()` or a custom handler with `handler`.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.replies: dict[str, tuple[int, bytes]] = {}
        self.handler = None

    def reset(self):
        self.requests.clear()
        self.replies.clear()
        self.handler = None

    def reply(self, webhook_path: str, status_code: int = 200, json_body=None, content=None):
        if content is None:
            content = json.dumps(json_body if json_body is not None else {}).encode()
        self.replies[webhook_path] = (status_code, content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        path = request.url.path.rsplit("/", 1)[-1]
        if path in self.replies:
            status_code, content = self.replies[path]
            return httpx.Response(
                status_code, content=content, headers={"Content-Type": "application/json"}
            )
        raise httpx.ConnectError("Connection refused", request=request)

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture(scope="session")
def fake_upstream():
    return FakeUpstream()


@pytest.fixture(scope="session")
def app(fake_upstream):
    """Create application for testing."""
    app = create_app({
        "TESTING": True,
        "TOKEN_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
        "N8N_BASE_URL": WEBHOOK_BASE,
        "WEBHOOKS": {
            "get_settings": f"{WEBHOOK_BASE}/webhook/get-settings",
            "get_products": f"{WEBHOOK_BASE}/webhook/get-products",
            "process_order": f"{WEBHOOK_BASE}/webhook/process-order",
            "update_inventory": f"{WEBHOOK_BASE}/webhook/update-stock",
            "analytics": f"{WEBHOOK_BASE}/webhook/analytics",
            "low_stock": f"{WEBHOOK_BASE}/webhook/low-stock",
            "dashboard_stats": f"{WEBHOOK_BASE}/webhook/dashboard-stats",
        },
        "WEBHOOK_TRANSPORT": httpx.MockTransport(fake_upstream),
    })
    yield app


@pytest.fixture(scope="function")
def upstream(fake_upstream):
    """Fake upstream, reset to 'unreachable' for each test."""
    fake_upstream.reset()
    yield fake_upstream
    fake_upstream.reset()


@pytest.fixture(scope="function")
def client(app, upstream):
    """Create test client."""
    return app.test_client()


def get_auth_token(client, username: str, password: str) -> str:
    """Helper to get auth token for a user."""
    response = client.post("/api/auth/login", json={
        "username": username,
        "password": password,
    })
    if response.status_code == 200:
        return response.json.get("token")
    return None


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def admin_headers(client):
    return auth_headers(get_auth_token(client, "admin", "admin123"))


@pytest.fixture(scope="function")
def staff_headers(client):
    return auth_headers(get_auth_token(client, "staff", "staff123"))
