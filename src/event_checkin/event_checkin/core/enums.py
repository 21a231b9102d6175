from __future__ import annotations

from enum import Enum


class ParticipantStatus(str, Enum):
    """Trạng thái tham dự, chỉ đi một chiều qua máy trạng thái quét."""

    PENDING = "pending"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"


class ScanResult(str, Enum):
    """Kết quả của một lần quét (giá trị trả về, không phải exception)."""

    NOT_FOUND = "not-found"
    ALREADY_CHECKED_OUT = "already-checked-out"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"


class DuplicatePolicy(str, Enum):
    """Cách xử lý mã định danh trùng khi thêm/nhập người tham dự."""

    ALLOW = "allow"
    REJECT = "reject"


class ParticipantStore(str, Enum):
    MEMORY = "memory"
    MYSQL = "mysql"
