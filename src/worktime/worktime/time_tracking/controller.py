from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.auth import current_user_id, login_required
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/time-tracking/compliance", methods=["GET"], endpoint="time_tracking_compliance")
    @login_required
    def time_tracking_compliance():
        """Polled by the dashboard every ``refresh_interval_seconds``."""
        user_id = current_user_id()
        try:
            payload = container.compliance_service.get_compliance(user_id)
        except Exception:
            logger.exception("Compliance lookup failed for user %s", user_id)
            return jsonify({"success": False, "message": "Systemfehler bei der Zeiterfassung"}), 500
        return jsonify({"success": True, **payload}), 200
