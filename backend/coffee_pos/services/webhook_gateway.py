# Overview: Outbound webhook calls to the n8n workflow layer, with demo-data fallback.

"""
Webhook Gateway

WHY: All business logic (reading and writing the spreadsheet) lives in n8n
workflows reached over HTTP. Each logical operation maps to exactly one
outbound request to a configured webhook URL.

CONTRACT:
- GET with data: data is sent as a query string
- non-GET with data: data is sent as a JSON body
- transport failure        -> UpstreamUnreachable
- status outside 2xx       -> UpstreamHTTPError
- body not a JSON object   -> UpstreamBadPayload

fetch() never raises GatewayError: on any failure (or an upstream reply with
a falsy `success`) it substitutes the caller's fallback payload, which is
shaped exactly like an upstream success. The substitution is invisible to the
client but always logged as a warning.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import httpx

from .retry import NO_RETRY, RetryPolicy, run_with_retry

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class Operation(enum.Enum):
    GET_SETTINGS = "get_settings"
    GET_PRODUCTS = "get_products"
    PROCESS_ORDER = "process_order"
    UPDATE_INVENTORY = "update_inventory"
    ANALYTICS = "analytics"
    LOW_STOCK = "low_stock"
    DASHBOARD_STATS = "dashboard_stats"


class GatewayError(Exception):
    """Base class for upstream failures; always recovered by fetch()."""

    def __init__(self, operation: Operation, message: str):
        self.operation = operation
        super().__init__(f"{operation.value}: {message}")


class UpstreamUnreachable(GatewayError):
    pass


class UpstreamHTTPError(GatewayError):
    def __init__(self, operation: Operation, status_code: int):
        self.status_code = status_code
        super().__init__(operation, f"webhook returned HTTP {status_code}")


class UpstreamBadPayload(GatewayError):
    pass


class ResponseSource(enum.Enum):
    UPSTREAM = "upstream"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class GatewayResponse:
    """A normalized envelope plus where it came from."""
    source: ResponseSource
    body: dict[str, Any]

    @property
    def is_fallback(self) -> bool:
        return self.source is ResponseSource.FALLBACK

    @classmethod
    def upstream(cls, body: dict[str, Any]) -> "GatewayResponse":
        return cls(ResponseSource.UPSTREAM, body)

    @classmethod
    def fallback(cls, body: dict[str, Any]) -> "GatewayResponse":
        return cls(ResponseSource.FALLBACK, body)


def _is_retryable(exc: Exception) -> bool:
    if isinstance(exc, UpstreamUnreachable):
        return True
    if isinstance(exc, UpstreamHTTPError):
        return exc.status_code in RETRYABLE_STATUS_CODES
    return False


class WebhookGateway:
    """Translates one logical operation into one webhook request."""

    def __init__(
        self,
        webhooks: Mapping[str, str],
        client: httpx.Client,
        retry_policy: RetryPolicy = NO_RETRY,
        sleep: Callable[[float], None] | None = None,
    ):
        missing = [op.value for op in Operation if op.value not in webhooks]
        if missing:
            raise ValueError(f"Missing webhook URLs for: {', '.join(missing)}")
        self._webhooks = {op: webhooks[op.value] for op in Operation}
        self._client = client
        self._retry_policy = retry_policy
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "WebhookGateway":
        client = httpx.Client(
            timeout=config.get("WEBHOOK_TIMEOUT"),
            transport=config.get("WEBHOOK_TRANSPORT"),
            headers={"Content-Type": "application/json"},
        )
        policy = RetryPolicy(
            max_retries=config.get("WEBHOOK_MAX_RETRIES", 0),
            base_delay=config.get("WEBHOOK_RETRY_BASE_DELAY", 0.5),
        )
        return cls(config["WEBHOOKS"], client, retry_policy=policy)

    def url_for(self, operation: Operation) -> str:
        return self._webhooks[operation]

    def close(self) -> None:
        self._client.close()

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    def _request(self, operation: Operation, method: str, data: Mapping[str, Any] | None) -> dict[str, Any]:
        url = self._webhooks[operation]
        method = method.upper()

        kwargs: dict[str, Any] = {}
        if data is not None:
            if method == "GET":
                kwargs["params"] = dict(data)
            else:
                kwargs["json"] = data

        try:
            response = self._client.request(method, url, **kwargs)
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            raise UpstreamUnreachable(operation, f"{type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            raise UpstreamHTTPError(operation, response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise UpstreamBadPayload(operation, "response body is not valid JSON") from exc

        if not isinstance(body, dict):
            raise UpstreamBadPayload(operation, f"expected a JSON object, got {type(body).__name__}")

        return body

    def call(self, operation: Operation, method: str = "GET", data: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """
        Issue the webhook request for an operation and return the parsed JSON body.

        Raises a GatewayError subclass on failure (after any configured retries).
        """
        retry_kwargs: dict[str, Any] = {}
        if self._sleep is not None:
            retry_kwargs["sleep"] = self._sleep
        return run_with_retry(
            lambda: self._request(operation, method, data),
            policy=self._retry_policy,
            is_retryable=_is_retryable,
            label=f"webhook {operation.value}",
            **retry_kwargs,
        )

    def fetch(
        self,
        operation: Operation,
        fallback: Callable[[], dict[str, Any]],
        method: str = "GET",
        data: Mapping[str, Any] | None = None,
    ) -> GatewayResponse:
        """
        Call the webhook, substituting fallback() on any failure.
        """
        try:
            body = self.call(operation, method, data)
        except GatewayError as exc:
            logger.warning("Webhook %s failed, serving demo data: %s", operation.value, exc)
            return GatewayResponse.fallback(fallback())

        if not body.get("success"):
            logger.warning(
                "Webhook %s reported success=%r, serving demo data",
                operation.value,
                body.get("success"),
            )
            return GatewayResponse.fallback(fallback())

        return GatewayResponse.upstream(body)
