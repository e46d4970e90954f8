# backend/coffee_pos/routes/system.py
"""
System health endpoint.

Liveness only: the webhooks are never probed here, since every data route
already degrades to demo data when they are down.
"""

import time
from flask import Blueprint, current_app, jsonify
from ..time_utils import utc_timestamp

system_bp = Blueprint("system", __name__)

PROCESS_STARTED_AT = time.time()


@system_bp.get("/health")
@system_bp.get("/api/health")
def health_route():
    return jsonify({
        "success": True,
        "status": "healthy",
        "timestamp": utc_timestamp(),
        "uptime": round(time.time() - PROCESS_STARTED_AT, 3),
        "environment": current_app.config["ENVIRONMENT"],
        "version": current_app.config["VERSION"],
        "ready": True,
    }), 200
