from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..core.enums import ParticipantStatus
from ..participants.model import Participant


@dataclass(frozen=True)
class Stats:
    total: int
    present: int
    returned: int
    checked_in: int
    pending: int
    percentage: float

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "returned": self.returned,
            "checkedIn": self.checked_in,
            "pending": self.pending,
            "percentage": self.percentage,
        }


def compute_stats(participants: Iterable[Participant]) -> Stats:
    """Derive counts from a snapshot in one pass. Never cached."""
    total = present = returned = 0
    for p in participants:
        total += 1
        if p.status == ParticipantStatus.CHECKED_IN:
            present += 1
        elif p.status == ParticipantStatus.CHECKED_OUT:
            returned += 1

    checked_in = present + returned
    percentage = (checked_in / total * 100) if total else 0.0
    return Stats(
        total=total,
        present=present,
        returned=returned,
        checked_in=checked_in,
        pending=total - checked_in,
        percentage=percentage,
    )
