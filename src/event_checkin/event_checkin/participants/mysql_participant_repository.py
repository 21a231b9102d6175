from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from ..core.constants import MAX_DEVICE_LENGTH, MAX_LOCATION_LENGTH
from ..core.enums import ParticipantStatus
from ..database.connection import DatabaseConnection, db_cursor, fetchall, fetchone
from .model import Participant
from .repository import ParticipantRepository

logger = logging.getLogger(__name__)

_COLUMNS = (
    "participant_id",
    "display_name",
    "identifier",
    "status",
    "secondary_identifier",
    "faculty",
    "major",
    "event_id",
    "check_in_at",
    "check_out_at",
    "check_in_epoch",
    "check_out_epoch",
    "location",
    "device",
)

_SELECT = f"SELECT {', '.join(_COLUMNS)} FROM participants"

SCHEMA_SQL = f"""
CREATE TABLE IF NOT EXISTS participants (
    participant_id INT PRIMARY KEY,
    display_name VARCHAR(255) NOT NULL,
    identifier VARCHAR(64) NOT NULL,
    status VARCHAR(16) NOT NULL DEFAULT 'pending',
    secondary_identifier VARCHAR(64) NULL,
    faculty VARCHAR(255) NULL,
    major VARCHAR(255) NULL,
    event_id VARCHAR(64) NULL,
    check_in_at VARCHAR(16) NULL,
    check_out_at VARCHAR(16) NULL,
    check_in_epoch DOUBLE NULL,
    check_out_epoch DOUBLE NULL,
    location VARCHAR({MAX_LOCATION_LENGTH}) NULL,
    device VARCHAR({MAX_DEVICE_LENGTH}) NULL,
    INDEX idx_participants_identifier (identifier),
    INDEX idx_participants_secondary (secondary_identifier)
) CHARACTER SET utf8mb4
"""


def _row_to_participant(r: Dict[str, Any]) -> Participant:
    return Participant(
        participant_id=int(r["participant_id"]),
        display_name=r["display_name"],
        identifier=r["identifier"],
        status=ParticipantStatus(r["status"]),
        secondary_identifier=r.get("secondary_identifier"),
        faculty=r.get("faculty"),
        major=r.get("major"),
        event_id=r.get("event_id"),
        check_in_at=r.get("check_in_at"),
        check_out_at=r.get("check_out_at"),
        check_in_epoch=r.get("check_in_epoch"),
        check_out_epoch=r.get("check_out_epoch"),
        location=r.get("location"),
        device=r.get("device"),
    )


def _participant_params(p: Participant) -> tuple:
    return (
        p.participant_id,
        p.display_name,
        p.identifier,
        p.status.value,
        p.secondary_identifier,
        p.faculty,
        p.major,
        p.event_id,
        p.check_in_at,
        p.check_out_at,
        p.check_in_epoch,
        p.check_out_epoch,
        p.location,
        p.device,
    )


class MySQLParticipantRepository(ParticipantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def ensure_schema(self) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(SCHEMA_SQL)
        logger.info("participants table ready in %s", self._conn_factory.database)

    def list_all(self) -> Sequence[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY participant_id")
            return [_row_to_participant(r) for r in fetchall(cur)]

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE participant_id=%s", (int(participant_id),))
            row = fetchone(cur)
            return _row_to_participant(row) if row else None

    def insert_many(self, participants: Sequence[Participant]) -> None:
        if not participants:
            return
        placeholders = ",".join(["%s"] * len(_COLUMNS))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                f"INSERT INTO participants({', '.join(_COLUMNS)}) VALUES({placeholders})",
                [_participant_params(p) for p in participants],
            )

    def replace(self, participant: Participant) -> bool:
        assignments = ", ".join(f"{c}=%s" for c in _COLUMNS[1:])
        params = _participant_params(participant)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE participants SET {assignments} WHERE participant_id=%s",
                params[1:] + (participant.participant_id,),
            )
            # rowcount is 0 when the row exists but nothing changed
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM participants WHERE participant_id=%s", (participant.participant_id,))
            return fetchone(cur) is not None

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM participants")
            return int(cur.rowcount)

    def max_id(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COALESCE(MAX(participant_id), 0) AS max_id FROM participants")
            row = fetchone(cur)
            return int(row["max_id"]) if row else 0
