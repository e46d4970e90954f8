# Overview: Flask API routes for the register screen (settings, catalog, checkout, stock).

from flask import Blueprint, request, jsonify, current_app, g

from ..decorators import require_auth
from ..extensions import webhook_gateway
from ..services import fallbacks, order_service
from ..services.order_service import ValidationError
from ..services.webhook_gateway import Operation


pos_bp = Blueprint("pos", __name__, url_prefix="/api")


@pos_bp.get("/get-settings")
def get_settings_route():
    config = current_app.config
    result = webhook_gateway().fetch(
        Operation.GET_SETTINGS,
        lambda: fallbacks.settings_payload(
            shop_name=config["SHOP_NAME"],
            currency=config["CURRENCY"],
            tax_rate=config["TAX_RATE"],
        ),
    )
    return jsonify(result.body)


@pos_bp.get("/get-products")
def get_products_route():
    result = webhook_gateway().fetch(Operation.GET_PRODUCTS, fallbacks.products_payload)
    return jsonify(result.body)


@pos_bp.post("/process-order")
@require_auth
def process_order_route():
    """
    Forward a checkout to the workflow layer.

    Always answers success with an orderId unless the body is not a JSON
    object; a locally generated id is used when the webhook is down.
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}

    try:
        result = order_service.process_order(webhook_gateway(), data, g.current_user)
    except ValidationError as e:
        return jsonify({"success": False, "message": str(e)}), 400

    current_app.logger.info(
        "Order %s by %s (%s)",
        result.body.get("orderId"),
        g.current_user.username,
        result.source.value,
    )
    return jsonify(result.body)


@pos_bp.post("/update-inventory")
@require_auth
def update_inventory_route():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}

    try:
        result = order_service.update_inventory(
            webhook_gateway(),
            product_id=data.get("productId"),
            new_stock=data.get("newStock", order_service.MISSING),
            updated_by=g.current_user.username,
        )
    except ValidationError as e:
        return jsonify({"success": False, "message": str(e)}), 400

    return jsonify(result.body)
