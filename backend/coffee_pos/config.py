# backend/coffee_pos/config.py
from __future__ import annotations
import os
import secrets


DEFAULT_N8N_BASE_URL = "https://primary-production-3ef2.up.railway.app"

# Operation name -> (env var override, webhook path on the n8n host)
WEBHOOK_ROUTES = {
    "get_settings": ("N8N_GET_SETTINGS_WEBHOOK", "get-settings"),
    "get_products": ("N8N_GET_PRODUCTS_WEBHOOK", "get-products"),
    "process_order": ("N8N_PROCESS_ORDER_WEBHOOK", "process-order"),
    "update_inventory": ("N8N_UPDATE_STOCK_WEBHOOK", "update-stock"),
    "analytics": ("N8N_ANALYTICS_WEBHOOK", "analytics"),
    "low_stock": ("N8N_LOW_STOCK_WEBHOOK", "low-stock"),
    "dashboard_stats": ("N8N_DASHBOARD_STATS_WEBHOOK", "dashboard-stats"),
}


def _float_or_none(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    return float(value)


def webhook_urls_from_env(base_url: str) -> dict[str, str]:
    """Resolve one webhook URL per operation, honoring per-operation env overrides."""
    base_url = base_url.rstrip("/")
    return {
        operation: os.environ.get(env_var) or f"{base_url}/webhook/{path}"
        for operation, (env_var, path) in WEBHOOK_ROUTES.items()
    }


class Config:
    # Signing secret for bearer tokens; a fresh random secret per process when unset
    TOKEN_SECRET = os.environ.get("JWT_SECRET") or secrets.token_hex(64)
    TOKEN_TTL_SECONDS = int(os.environ.get("TOKEN_TTL_SECONDS", 24 * 60 * 60))

    SHOP_NAME = os.environ.get("SHOP_NAME", "Coffee Paradise")
    CURRENCY = os.environ.get("CURRENCY", "PHP")
    TAX_RATE = float(os.environ.get("TAX_RATE") or 0.12)

    # Request body cap for incoming JSON
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024

    ENVIRONMENT = os.environ.get("APP_ENV") or os.environ.get("NODE_ENV", "development")
    VERSION = "1.0.0"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    N8N_BASE_URL = os.environ.get("N8N_BASE_URL", DEFAULT_N8N_BASE_URL)
    # Explicit operation -> URL table; when None, built from N8N_BASE_URL at app creation
    WEBHOOKS = None

    # None = no timeout on outbound webhook calls
    WEBHOOK_TIMEOUT = _float_or_none(os.environ.get("WEBHOOK_TIMEOUT"))
    WEBHOOK_MAX_RETRIES = int(os.environ.get("WEBHOOK_MAX_RETRIES", 0))
    WEBHOOK_RETRY_BASE_DELAY = float(os.environ.get("WEBHOOK_RETRY_BASE_DELAY", 0.5))
    # Optional httpx transport (tests plug in httpx.MockTransport)
    WEBHOOK_TRANSPORT = None

    DEMO_USERS = [
        {"id": 1, "username": "admin", "password": "admin123", "role": "admin", "name": "Administrator"},
        {"id": 2, "username": "staff", "password": "staff123", "role": "staff", "name": "Staff Member"},
        {"id": 3, "username": "manager", "password": "manager123", "role": "manager", "name": "Store Manager"},
    ]
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", 12))

    CORS_ORIGINS = {
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    }
