from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from .admin.service import AdminGate
from .attendance.service import AttendanceService
from .core.enums import DuplicatePolicy, ParticipantStore
from .database.connection import DatabaseConnection, DBConfig
from .participants.memory_participant_repository import InMemoryParticipantRepository
from .participants.mysql_participant_repository import MySQLParticipantRepository
from .participants.repository import ParticipantRepository
from .participants.service import ParticipantRegistry, seed_registry
from .reports.service import ReportService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    participants_repo: ParticipantRepository

    registry: ParticipantRegistry
    attendance_service: AttendanceService
    report_service: ReportService
    admin_gate: AdminGate


def _build_repository(settings: Any) -> ParticipantRepository:
    store = ParticipantStore(str(getattr(settings, "PARTICIPANT_STORE", "memory")).lower())
    if store == ParticipantStore.MEMORY:
        return InMemoryParticipantRepository()

    repo = MySQLParticipantRepository(DatabaseConnection(DBConfig.from_mapping(settings.DB_CONFIG)))
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        repo.ensure_schema()
    return repo


def build_container(*, settings: Any) -> Container:
    participants_repo = _build_repository(settings)

    registry = ParticipantRegistry(
        participants_repo,
        duplicate_policy=DuplicatePolicy(str(getattr(settings, "DUPLICATE_POLICY", "allow")).lower()),
    )
    seed = json.loads(getattr(settings, "SEED_PARTICIPANTS", "[]") or "[]")
    if seed and not registry.snapshot():
        seeded = seed_registry(registry, seed)
        logger.info("registry seeded with %d participants", len(seeded))

    attendance_service = AttendanceService(
        registry,
        normalize_scans=bool(getattr(settings, "NORMALIZE_SCANS", False)),
    )
    report_service = ReportService(
        registry,
        event_name=getattr(settings, "EVENT_NAME", ""),
        event_location=getattr(settings, "EVENT_LOCATION", None),
        pdf_font_path=getattr(settings, "PDF_FONT_PATH", None),
    )
    admin_gate = AdminGate(getattr(settings, "ADMIN_PIN", None))

    return Container(
        participants_repo=participants_repo,
        registry=registry,
        attendance_service=attendance_service,
        report_service=report_service,
        admin_gate=admin_gate,
    )
