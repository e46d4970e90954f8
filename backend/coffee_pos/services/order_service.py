# Overview: Service-layer operations for checkout and stock adjustments.

"""
Order and Inventory Flows

Orders are built by the POS client and forwarded to the process-order
webhook with the cashier's identity attached. Item prices and stock are NOT
checked here; the workflow layer owns that.

When the webhook is unavailable the order is accepted locally with a
generated `ORD-<epoch millis>` id. Nothing is persisted and concurrent
submissions are neither serialized nor deduplicated.
"""

from __future__ import annotations

from typing import Any

from ..time_utils import epoch_millis, utc_timestamp
from . import fallbacks
from .token_service import Credential
from .webhook_gateway import GatewayResponse, Operation, WebhookGateway


class ValidationError(ValueError):
    """400-level input problem."""


# Marks a field absent from the request body
MISSING = object()


def generate_order_id() -> str:
    return f"ORD-{epoch_millis()}"


def prepare_order(order_data: Any, cashier: Credential) -> dict[str, Any]:
    """Copy the client's order and stamp it with cashier identity and server time."""
    if not isinstance(order_data, dict):
        raise ValidationError("Order payload must be a JSON object")
    return {
        **order_data,
        "cashier": cashier.username,
        "cashierId": cashier.subject_id,
        "timestamp": utc_timestamp(),
    }


def process_order(gateway: WebhookGateway, order_data: Any, cashier: Credential) -> GatewayResponse:
    """
    Forward an order to the workflow layer.

    Upstream replies are reduced to the fields the POS client reads, with
    the request total used when the workflow omits one.
    """
    order = prepare_order(order_data, cashier)

    result = gateway.fetch(
        Operation.PROCESS_ORDER,
        lambda: fallbacks.order_payload(generate_order_id(), order.get("total")),
        method="POST",
        data=order,
    )
    if result.is_fallback:
        return result

    body = result.body
    return GatewayResponse.upstream({
        "success": True,
        "orderId": body.get("orderId"),
        "total": body.get("total") or order.get("total"),
        "message": body.get("message") or "Order processed successfully",
        "lowStockAlert": body.get("lowStockAlert") or False,
        "lowStockCount": body.get("lowStockCount") or 0,
        "emailSent": body.get("emailSent") or False,
    })


def build_stock_update(product_id: Any, new_stock: Any, updated_by: str) -> dict[str, Any]:
    """
    Payload the update-stock workflow expects for a manual adjustment.

    Pass MISSING when the request omitted newStock; an explicit null is forwarded.
    """
    if not product_id or new_stock is MISSING:
        raise ValidationError("Product ID and new stock level required")
    return {
        "stockUpdates": [{
            "productId": product_id,
            "newStock": new_stock,
            "updateType": "manual",
            "reason": "Admin stock adjustment",
            "updatedBy": updated_by,
        }]
    }


def update_inventory(gateway: WebhookGateway, product_id: Any, new_stock: Any, updated_by: str) -> GatewayResponse:
    payload = build_stock_update(product_id, new_stock, updated_by)

    result = gateway.fetch(
        Operation.UPDATE_INVENTORY,
        fallbacks.inventory_update_payload,
        method="POST",
        data=payload,
    )
    if result.is_fallback:
        return result
    return GatewayResponse.upstream({
        "success": True,
        "message": result.body.get("message") or "Inventory updated successfully",
    })
