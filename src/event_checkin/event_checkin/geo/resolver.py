"""Location parsing and map framing.

Everything here is a pure function over participant snapshots; nothing
writes back to the registry.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.constants import BOUNDS_EPSILON, DEFAULT_MAP_CENTER, LAT_RANGE, LNG_RANGE
from ..core.enums import ParticipantStatus
from ..participants.model import Participant


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float


@dataclass(frozen=True)
class BoundingBox:
    south_west: Coordinate
    north_east: Coordinate

    def contains(self, c: Coordinate) -> bool:
        return (
            self.south_west.lat <= c.lat <= self.north_east.lat
            and self.south_west.lng <= c.lng <= self.north_east.lng
        )

    def as_pairs(self) -> List[List[float]]:
        """Leaflet-style [[lat, lng], [lat, lng]]."""
        return [
            [self.south_west.lat, self.south_west.lng],
            [self.north_east.lat, self.north_east.lng],
        ]


def _to_float(token: str) -> Optional[float]:
    try:
        value = float(token)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def parse_location(raw: Optional[str]) -> Optional[Coordinate]:
    """Parse "lat,lng" (or "lat lng"); None for anything unusable."""
    if not raw or not isinstance(raw, str):
        return None

    text = raw.strip()
    if "," in text:
        separator = ","
    elif " " in text:
        separator = " "
    else:
        return None

    parts = [p.strip() for p in text.split(separator) if p.strip()]
    if len(parts) < 2:
        return None

    lat, lng = _to_float(parts[0]), _to_float(parts[1])
    if lat is None or lng is None:
        return None
    if not (LAT_RANGE[0] <= lat <= LAT_RANGE[1] and LNG_RANGE[0] <= lng <= LNG_RANGE[1]):
        return None
    return Coordinate(lat=lat, lng=lng)


def compute_bounds(coordinates: Sequence[Coordinate]) -> Optional[BoundingBox]:
    if not coordinates:
        return None

    lats = [c.lat for c in coordinates]
    lngs = [c.lng for c in coordinates]
    min_lat, max_lat = min(lats), max(lats)
    min_lng, max_lng = min(lngs), max(lngs)

    if min_lat == max_lat and min_lng == max_lng:
        min_lat, max_lat = min_lat - BOUNDS_EPSILON, max_lat + BOUNDS_EPSILON
        min_lng, max_lng = min_lng - BOUNDS_EPSILON, max_lng + BOUNDS_EPSILON

    return BoundingBox(
        south_west=Coordinate(lat=min_lat, lng=min_lng),
        north_east=Coordinate(lat=max_lat, lng=max_lng),
    )


def locate_participants(
    participants: Iterable[Participant],
    *,
    include_pending: bool = True,
) -> List[Tuple[Participant, Coordinate]]:
    """Participants with a usable location, in snapshot order.

    The report map leaves pending participants out (`include_pending=False`).
    """
    out: List[Tuple[Participant, Coordinate]] = []
    for p in participants:
        if not include_pending and p.status == ParticipantStatus.PENDING:
            continue
        coord = parse_location(p.location)
        if coord is not None:
            out.append((p, coord))
    return out


def map_view(participants: Iterable[Participant], *, include_pending: bool = True) -> dict:
    """Markers plus the box (or default center) a map should frame."""
    located = locate_participants(participants, include_pending=include_pending)
    bounds = compute_bounds([c for _, c in located])
    return {
        "markers": [
            {
                "participant_id": p.participant_id,
                "display_name": p.display_name,
                "status": p.status.value,
                "time": p.check_out_at if p.status == ParticipantStatus.CHECKED_OUT else p.check_in_at,
                "lat": c.lat,
                "lng": c.lng,
            }
            for p, c in located
        ],
        "bounds": bounds.as_pairs() if bounds else None,
        "center": None if bounds else list(DEFAULT_MAP_CENTER),
    }
