from __future__ import annotations

import io
from dataclasses import replace

from flask import Flask, jsonify, request, send_file, session

from ..admin.controller import admin_required
from ..common.validators import coerce_text, require_confirmation, require_non_empty
from ..container import Container
from ..core.constants import MAX_DEVICE_LENGTH, MAX_LOCATION_LENGTH
from ..core.enums import ParticipantStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..passes.service import pass_payload, render_pass_png
from .importer import decode_upload, parse_import_text, parse_workbook
from .model import Participant


_EDITABLE_FIELDS = (
    "display_name",
    "identifier",
    "secondary_identifier",
    "faculty",
    "major",
    "event_id",
    "check_in_at",
    "check_out_at",
    "location",
    "device",
)


def participant_to_dict(p: Participant) -> dict:
    return {
        "id": p.participant_id,
        "display_name": p.display_name,
        "identifier": p.identifier,
        "secondary_identifier": p.secondary_identifier,
        "faculty": p.faculty,
        "major": p.major,
        "event_id": p.event_id,
        "status": p.status.value,
        "check_in_at": p.check_in_at,
        "check_out_at": p.check_out_at,
        "check_in_epoch": p.check_in_epoch,
        "check_out_epoch": p.check_out_epoch,
        "location": p.location,
        "device": p.device,
    }


def _parse_status(value) -> ParticipantStatus:
    try:
        return ParticipantStatus(value)
    except ValueError:
        raise ValidationError(f"สถานะไม่ถูกต้อง: {value}")


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
    return data


def register(app: Flask, container: Container) -> None:
    registry = container.registry

    @app.route("/api/participants", methods=["GET"], endpoint="list_participants")
    def list_participants():
        status_s = request.args.get("status")
        status = _parse_status(status_s) if status_s and status_s != "all" else None
        rows = registry.search(request.args.get("q", ""), status=status)
        total = len(rows)
        limit = request.args.get("limit", type=int)
        if limit is not None and limit >= 0:
            rows = rows[:limit]
        return jsonify({"participants": [participant_to_dict(p) for p in rows], "total": total})

    @app.route("/api/participants", methods=["POST"], endpoint="register_participant")
    def register_participant():
        # admins may still add walk-ins after registration closes
        if not app.config.get("REGISTRATION_OPEN", True) and not session.get("is_admin"):
            raise AuthorizationError("ปิดรับลงทะเบียนแล้ว")

        data = _json_body()
        participant = registry.add(
            require_non_empty(coerce_text(data.get("name"), "ชื่อ-สกุล") or "", "ชื่อ-สกุล"),
            require_non_empty(coerce_text(data.get("phone"), "เบอร์โทรศัพท์") or "", "เบอร์โทรศัพท์"),
            secondary_identifier=coerce_text(data.get("student_id"), "รหัสนักศึกษา"),
            faculty=coerce_text(data.get("faculty"), "คณะ") or "-",
            major=coerce_text(data.get("major"), "สาขา") or "-",
            event_id=coerce_text(data.get("event_id"), "event_id"),
        )
        return jsonify({"success": True, "participant": participant_to_dict(participant)}), 201

    @app.route("/api/participants/<int:participant_id>", methods=["GET"], endpoint="get_participant")
    def get_participant(participant_id: int):
        participant = registry.get(participant_id)
        if not participant:
            raise NotFoundError("ไม่พบข้อมูลผู้เข้าร่วม")
        return jsonify(participant_to_dict(participant))

    @app.route("/api/participants/<int:participant_id>", methods=["PUT"], endpoint="update_participant")
    @admin_required
    def update_participant(participant_id: int):
        current = registry.get(participant_id)
        if not current:
            raise NotFoundError("ไม่พบข้อมูลผู้เข้าร่วม")

        data = _json_body()
        changes = {k: coerce_text(data[k], k) for k in _EDITABLE_FIELDS if k in data}
        if "display_name" in changes:
            changes["display_name"] = require_non_empty(changes["display_name"] or "", "ชื่อ-สกุล")
        if "identifier" in changes:
            changes["identifier"] = require_non_empty(changes["identifier"] or "", "เบอร์โทรศัพท์")
        for k, max_length in (("location", MAX_LOCATION_LENGTH), ("device", MAX_DEVICE_LENGTH)):
            if len(changes.get(k) or "") > max_length:
                raise ValidationError(f"{k} ยาวเกิน {max_length} ตัวอักษร")
        if "status" in data:
            changes["status"] = _parse_status(data["status"])

        updated = registry.update(replace(current, **changes))
        if not updated:
            raise NotFoundError("ไม่พบข้อมูลผู้เข้าร่วม")
        return jsonify({"success": True, "participant": participant_to_dict(updated)})

    @app.route("/api/participants/import", methods=["POST"], endpoint="import_participants")
    @admin_required
    def import_participants():
        upload = request.files.get("file")
        if upload is not None:
            filename = str(upload.filename or "").lower()
            if filename.endswith(".xlsx"):
                parsed = parse_workbook(upload.read())
            elif filename.endswith(".csv"):
                try:
                    parsed = parse_import_text(decode_upload(upload.read()))
                except UnicodeDecodeError:
                    raise ValidationError("ไฟล์ต้องเข้ารหัส UTF-8")
            else:
                raise ValidationError("ไฟล์ต้องเป็น CSV หรือ Excel (.xlsx)")
        else:
            text = _json_body().get("csv") or ""
            if not isinstance(text, str):
                raise ValidationError("ข้อมูล CSV ต้องเป็นข้อความ")
            parsed = parse_import_text(text)

        created = registry.bulk_import(parsed.entries)
        return jsonify(
            {
                "success": True,
                "imported": len(created),
                "skipped": parsed.skipped_rows + (len(parsed.entries) - len(created)),
                "errors": parsed.errors,
                "message": f"นำเข้าข้อมูลสำเร็จ {len(created)} รายการ",
            }
        )

    @app.route("/api/session/reset", methods=["POST"], endpoint="reset_session")
    @admin_required
    def reset_session():
        require_confirmation(_json_body())
        count = registry.reset_session()
        return jsonify({"success": True, "reset": count})

    @app.route("/api/participants/clear", methods=["POST"], endpoint="clear_participants")
    @admin_required
    def clear_participants():
        require_confirmation(_json_body())
        removed = registry.clear_all()
        return jsonify({"success": True, "removed": removed})

    @app.route("/api/participants/<int:participant_id>/pass.png", methods=["GET"], endpoint="participant_pass")
    def participant_pass(participant_id: int):
        participant = registry.get(participant_id)
        if not participant or not pass_payload(participant):
            raise NotFoundError("ไม่พบข้อมูลผู้เข้าร่วม")
        return send_file(io.BytesIO(render_pass_png(participant)), mimetype="image/png")
