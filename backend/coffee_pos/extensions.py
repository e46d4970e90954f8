# Overview: Per-app service instances (token codec, user directory, webhook gateway).
#
# Services are built once in create_app from the app's config and stored on
# app.extensions; routes look them up through current_app.

from __future__ import annotations

import atexit

from flask import Flask, current_app

from .config import webhook_urls_from_env
from .services.auth_service import UserDirectory
from .services.token_service import TokenCodec
from .services.webhook_gateway import WebhookGateway

EXTENSION_KEY = "coffee_pos"


def init_services(app: Flask) -> None:
    config = app.config
    # Resolved after overrides so N8N_BASE_URL passed to create_app takes effect
    if not config.get("WEBHOOKS"):
        config["WEBHOOKS"] = webhook_urls_from_env(config["N8N_BASE_URL"])

    app.extensions[EXTENSION_KEY] = {
        "tokens": TokenCodec(
            secret=config["TOKEN_SECRET"],
            ttl_seconds=config["TOKEN_TTL_SECONDS"],
        ),
        "users": UserDirectory(config["DEMO_USERS"], bcrypt_rounds=config["BCRYPT_ROUNDS"]),
        "gateway": WebhookGateway.from_config(config),
    }

    # The outbound client lives as long as the app
    atexit.register(close_services, app)


def close_services(app: Flask) -> None:
    services = app.extensions.get(EXTENSION_KEY)
    if services:
        services["gateway"].close()


def _services() -> dict:
    return current_app.extensions[EXTENSION_KEY]


def token_codec() -> TokenCodec:
    return _services()["tokens"]


def user_directory() -> UserDirectory:
    return _services()["users"]


def webhook_gateway() -> WebhookGateway:
    return _services()["gateway"]
