# Overview: Flask API routes for the admin dashboard; all require a bearer token.

from flask import Blueprint, request, jsonify

from ..decorators import require_auth
from ..extensions import webhook_gateway
from ..services import fallbacks
from ..services.webhook_gateway import Operation


dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api")

DEFAULT_ANALYTICS_PERIOD = "7d"


@dashboard_bp.get("/dashboard-stats")
@require_auth
def dashboard_stats_route():
    result = webhook_gateway().fetch(Operation.DASHBOARD_STATS, fallbacks.dashboard_stats_payload)
    return jsonify(result.body)


@dashboard_bp.get("/low-stock")
@require_auth
def low_stock_route():
    result = webhook_gateway().fetch(Operation.LOW_STOCK, fallbacks.low_stock_payload)
    return jsonify(result.body)


@dashboard_bp.get("/analytics")
@require_auth
def analytics_route():
    period = request.args.get("period", DEFAULT_ANALYTICS_PERIOD)
    result = webhook_gateway().fetch(
        Operation.ANALYTICS,
        lambda: fallbacks.analytics_payload(period),
        data={"period": period},
    )
    return jsonify(result.body)
