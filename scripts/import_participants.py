"""Load a `name,phone` CSV into the MySQL participant store.

Usage: python scripts/import_participants.py guests.csv
"""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.event_checkin.event_checkin.core.enums import DuplicatePolicy
from src.event_checkin.event_checkin.database.connection import DatabaseConnection, DBConfig
from src.event_checkin.event_checkin.participants.importer import decode_upload, parse_import_text
from src.event_checkin.event_checkin.participants.mysql_participant_repository import MySQLParticipantRepository
from src.event_checkin.event_checkin.participants.service import ParticipantRegistry


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print(__doc__)
        return 2

    settings = importlib.import_module(get_settings_module())
    repo = MySQLParticipantRepository(DatabaseConnection(DBConfig.from_mapping(settings.DB_CONFIG)))
    repo.ensure_schema()
    registry = ParticipantRegistry(repo, duplicate_policy=DuplicatePolicy(settings.DUPLICATE_POLICY))

    parsed = parse_import_text(decode_upload(Path(argv[1]).read_bytes()))
    created = registry.bulk_import(parsed.entries)

    for err in parsed.errors:
        print(err)
    print(f"OK: imported {len(created)} participants ({parsed.skipped_rows} malformed rows skipped)")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
