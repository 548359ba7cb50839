"""
api.routes_health - /api/v1/health connectivity check.

Reports whether the connection settings are present and whether the
database answers a trivial query.
"""

from datetime import datetime, timezone

from flask import current_app, jsonify

from api import api_bp
from db import check_connection, safe_url


@api_bp.route("/health")
def health():
    db_url = current_app.config.get("CEDB_DB_URL") or ""
    if not db_url:
        return jsonify({
            "status": "error",
            "message": "Missing database environment variables",
            "details": {"has_url": False},
        }), 500

    connected, error = check_connection()
    return jsonify({
        "status": "healthy" if connected else "error",
        "message": ("Database connection successful" if connected
                    else "Failed to connect to database"),
        "environment": {
            "url": safe_url(db_url),
            "configured": True,
        },
        "connection": {"connected": connected},
        "debug": {"message": error} if error else None,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }), (200 if connected else 503)
