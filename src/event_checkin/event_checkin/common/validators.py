from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} ไม่ถูกต้อง")
    return value.strip()


def require_confirmation(payload: dict | None) -> None:
    """Destructive actions (reset/clear) must be confirmed by the caller."""
    if not payload or payload.get("confirm") is not True:
        raise ValidationError("กรุณายืนยันการดำเนินการ")


def coerce_text(value, field_name: str) -> str | None:
    """Text field from JSON/spreadsheet input; numbers (student ids, phones) become strings."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise ValidationError(f"{field_name} ไม่ถูกต้อง")
