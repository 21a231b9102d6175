from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..stats.service import Stats


@dataclass(frozen=True)
class ReportRow:
    order: int
    display_name: str
    identifier: str
    status_label: str
    check_in_at: str
    check_out_at: str

    def as_cells(self) -> list[str]:
        return [
            str(self.order),
            self.display_name,
            self.identifier,
            self.status_label,
            self.check_in_at,
            self.check_out_at,
        ]


@dataclass(frozen=True)
class ReportData:
    """Read-only snapshot + derived stats handed to exporters."""

    title: str
    generated_at: str
    rows: list[ReportRow]
    stats: Stats
    event_location: Optional[str] = None
