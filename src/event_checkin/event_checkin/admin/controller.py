from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get("is_admin"):
            return jsonify({"success": False, "message": "ต้องเข้าสู่ระบบผู้ดูแลก่อน"}), 401
        return view(*args, **kwargs)

    return wrapper


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        data = request.get_json(silent=True) or {}
        try:
            container.admin_gate.authenticate(str(data.get("pin", "")))
        except AuthenticationError as e:
            logger.warning("admin login rejected from %s", request.remote_addr)
            return jsonify({"success": False, "message": str(e)}), 401

        session["is_admin"] = True
        return jsonify({"success": True, "message": "ปลดล็อกผู้ดูแลแล้ว"})

    @app.route("/admin/logout", methods=["POST"], endpoint="admin_logout")
    def admin_logout():
        session.pop("is_admin", None)
        return jsonify({"success": True})

    @app.route("/api/system", methods=["GET"], endpoint="system_settings")
    def system_settings():
        return jsonify(
            {
                "scanning_open": bool(app.config.get("SCANNING_OPEN", True)),
                "registration_open": bool(app.config.get("REGISTRATION_OPEN", True)),
                "is_admin": bool(session.get("is_admin")),
            }
        )
