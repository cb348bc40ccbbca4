from __future__ import annotations

from functools import wraps

from flask import jsonify, session


def login_required(view):
    """Reject requests without a signed-in user.

    The auth layer owns login; it leaves ``user_id`` in the Flask session.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Bitte melden Sie sich an"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])
