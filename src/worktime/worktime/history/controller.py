from __future__ import annotations

import csv
import io
import logging
from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.auth import current_user_id, login_required
from ..common.datetime_utils import now_local, parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "work_date",
    "start",
    "end",
    "entries",
    "net_work",
    "net_work_minutes",
    "break_minutes",
    "locations",
    "projects",
]


def register(app: Flask, container: Container) -> None:
    def _range_from_args():
        today = now_local().date()
        start_s = request.args.get("start") or (today - timedelta(days=container.history_days)).strftime("%Y-%m-%d")
        end_s = request.args.get("end") or today.strftime("%Y-%m-%d")
        try:
            return parse_iso_date(start_s), parse_iso_date(end_s)
        except ValueError:
            raise ValidationError("Ungültiges Datum, erwartet YYYY-MM-DD") from None

    @app.route("/api/time-tracking/history", methods=["GET"], endpoint="time_tracking_history")
    @login_required
    def time_tracking_history():
        user_id = current_user_id()
        svc = container.history_service
        try:
            start, end = _range_from_args()
            days = svc.filter_days(svc.build_history(user_id=user_id, start=start, end=end), request.args.get("q"))
            week = svc.week_stats(user_id=user_id, week_of=end)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("History lookup failed for user %s", user_id)
            return jsonify({"success": False, "message": "Systemfehler beim Laden des Verlaufs"}), 500

        return jsonify(
            {
                "success": True,
                "start": start.strftime("%Y-%m-%d"),
                "end": end.strftime("%Y-%m-%d"),
                "days": svc.to_rows(days),
                "week": svc.week_to_ui(week),
            }
        ), 200

    @app.route("/me/time-history.csv", methods=["GET"], endpoint="time_history_csv")
    @login_required
    def time_history_csv():
        user_id = current_user_id()
        svc = container.history_service
        try:
            start, end = _range_from_args()
            days = svc.build_history(user_id=user_id, start=start, end=end)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("History export failed for user %s", user_id)
            return jsonify({"success": False, "message": "Systemfehler beim Export des Verlaufs"}), 500

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in svc.to_rows(days):
            writer.writerow(row)

        filename = f"time_history_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
