from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ParticipantStatus


@dataclass(frozen=True)
class Participant:
    """Domain entity: một người tham dự sự kiện.

    `check_in_at`/`check_out_at` are display stamps (HH:MM:SS); the matching
    `*_epoch` fields hold the sortable ordering key captured at the same time.
    """

    participant_id: int
    display_name: str
    identifier: str
    status: ParticipantStatus = ParticipantStatus.PENDING
    secondary_identifier: Optional[str] = None
    faculty: Optional[str] = None
    major: Optional[str] = None
    event_id: Optional[str] = None
    check_in_at: Optional[str] = None
    check_out_at: Optional[str] = None
    check_in_epoch: Optional[float] = None
    check_out_epoch: Optional[float] = None
    location: Optional[str] = None
    device: Optional[str] = None

    def scan_keys(self) -> tuple[str, ...]:
        keys = (self.identifier, self.secondary_identifier)
        return tuple(k.strip() for k in keys if k and k.strip())


@dataclass(frozen=True)
class ParticipantEntry:
    """Input row for add/bulk import (before an id is assigned)."""

    display_name: str
    identifier: str
    secondary_identifier: Optional[str] = None
    faculty: Optional[str] = None
    major: Optional[str] = None
    event_id: Optional[str] = None
