from __future__ import annotations

from datetime import datetime

from ..core.constants import CLOCK_FORMAT


def now_local() -> datetime:
    """Wall-clock time of the check-in station (services take it as `clock=`)."""
    return datetime.now()


def format_clock(value: datetime) -> str:
    """Display stamp shown on the dashboard and in reports, e.g. 09:05:12."""
    return value.strftime(CLOCK_FORMAT)
