from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ScanResult
from ..participants.model import Participant


@dataclass(frozen=True)
class ScanOutcome:
    """Kết quả quét trả về cho UI; `participant` is the post-scan record."""

    result: ScanResult
    scanned_value: str
    participant: Optional[Participant] = None

    @property
    def changed(self) -> bool:
        return self.result in (ScanResult.CHECKED_IN, ScanResult.CHECKED_OUT)
