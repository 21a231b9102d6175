from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import ScanResult
from ..core.exceptions import AuthorizationError
from ..geo.resolver import map_view
from ..participants.controller import participant_to_dict
from ..stats.service import compute_stats


_SCAN_RESPONSES = {
    ScanResult.CHECKED_IN: (200, "เช็คอินสำเร็จ"),
    ScanResult.CHECKED_OUT: (200, "เช็คเอาท์สำเร็จ"),
    ScanResult.NOT_FOUND: (404, "ไม่พบข้อมูลในระบบ"),
    ScanResult.ALREADY_CHECKED_OUT: (409, "ลงทะเบียนออกไปแล้ว"),
}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/scan", methods=["POST"], endpoint="scan")
    def scan():
        """Toggle a participant's attendance from a scanned or typed value."""
        if not app.config.get("SCANNING_OPEN", True):
            raise AuthorizationError("ระบบปิดการสแกนชั่วคราว")

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        outcome = container.attendance_service.scan(
            str(data.get("value") or ""),
            location=data.get("location") or None,
            device=data.get("device") or request.headers.get("User-Agent"),
        )

        status_code, message = _SCAN_RESPONSES[outcome.result]
        body = {
            "success": outcome.changed,
            "result": outcome.result.value,
            "value": outcome.scanned_value,
            "message": message,
        }
        if outcome.participant is not None:
            body["participant"] = participant_to_dict(outcome.participant)
        return jsonify(body), status_code

    @app.route("/api/stats", methods=["GET"], endpoint="stats")
    def stats():
        return jsonify(compute_stats(container.registry.snapshot()).as_dict())

    @app.route("/api/map", methods=["GET"], endpoint="participant_map")
    def participant_map():
        # scope=report leaves out participants who never arrived
        include_pending = request.args.get("scope") != "report"
        return jsonify(map_view(container.registry.snapshot(), include_pending=include_pending))
