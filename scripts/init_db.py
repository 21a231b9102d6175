from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.event_checkin.event_checkin.database.connection import DatabaseConnection, DBConfig
from src.event_checkin.event_checkin.participants.mysql_participant_repository import MySQLParticipantRepository


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db = DBConfig.from_mapping(settings.DB_CONFIG)

    repo = MySQLParticipantRepository(DatabaseConnection(db))
    repo.ensure_schema()
    print(f"OK: participants table ready -> {db.user}@{db.host}:{db.port}/{db.database} (highest participant id={repo.max_id()})")


if __name__ == "__main__":
    main()
