from __future__ import annotations

from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError


class AdminGate:
    """Use case: unlock admin actions with the shared event PIN."""

    def __init__(self, pin: Optional[str]):
        # Only the hash is kept in memory after start-up.
        self._pin_hash = generate_password_hash(pin) if pin else None

    @property
    def enabled(self) -> bool:
        return self._pin_hash is not None

    def authenticate(self, pin: str) -> None:
        if not self._pin_hash or not pin:
            raise AuthenticationError("PIN ไม่ถูกต้อง")
        if not check_password_hash(self._pin_hash, pin):
            raise AuthenticationError("PIN ไม่ถูกต้อง")
