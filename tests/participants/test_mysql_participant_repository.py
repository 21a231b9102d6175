from __future__ import annotations

from src.event_checkin.event_checkin.core.constants import MAX_DEVICE_LENGTH, MAX_LOCATION_LENGTH
from src.event_checkin.event_checkin.core.enums import ParticipantStatus
from src.event_checkin.event_checkin.participants.model import Participant
from src.event_checkin.event_checkin.participants.mysql_participant_repository import SCHEMA_SQL, MySQLParticipantRepository


class FakeCursor:
    def __init__(self, results):
        self._results = list(results)
        self._current = None
        self.executed = []
        self.rowcount = 0

    def execute(self, sql, params=None):
        self.executed.append((sql, params))
        self._current = self._results.pop(0) if self._results else None
        if isinstance(self._current, int):
            self.rowcount = self._current
            self._current = None

    def executemany(self, sql, seq):
        self.executed.append((sql, list(seq)))

    def fetchone(self):
        return self._current[0] if self._current else None

    def fetchall(self):
        return self._current or []

    def close(self):
        pass


class FakeConn:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnFactory:
    database = "event_checkin_test"

    def __init__(self, *results):
        self.cursor = FakeCursor(results)
        self.conn = FakeConn(self.cursor)

    def connect(self):
        return self.conn


def _row(**overrides):
    row = {
        "participant_id": 1,
        "display_name": "Alice",
        "identifier": "0811111111",
        "status": "checked-in",
        "secondary_identifier": None,
        "faculty": None,
        "major": None,
        "event_id": None,
        "check_in_at": "09:00:00",
        "check_out_at": None,
        "check_in_epoch": 1735697000.0,
        "check_out_epoch": None,
        "location": "13.75,100.50",
        "device": "scanner-1",
    }
    row.update(overrides)
    return row


def test_list_all_maps_rows_to_participants():
    factory = FakeConnFactory([_row(), _row(participant_id=2, display_name="Bob", status="pending", check_in_at=None)])
    repo = MySQLParticipantRepository(factory)

    result = repo.list_all()

    assert [p.participant_id for p in result] == [1, 2]
    assert result[0].status == ParticipantStatus.CHECKED_IN
    assert result[0].location == "13.75,100.50"
    assert result[1].status == ParticipantStatus.PENDING
    assert "ORDER BY participant_id" in factory.cursor.executed[0][0]
    assert factory.conn.committed


def test_insert_many_uses_executemany_and_skips_empty_batches():
    factory = FakeConnFactory()
    repo = MySQLParticipantRepository(factory)

    repo.insert_many([])
    assert factory.cursor.executed == []

    repo.insert_many([Participant(participant_id=1, display_name="A", identifier="1")])
    sql, rows = factory.cursor.executed[0]
    assert sql.startswith("INSERT INTO participants(")
    assert rows[0][:4] == (1, "A", "1", "pending")


def test_replace_reports_existing_row_even_when_unchanged():
    p = Participant(participant_id=1, display_name="A", identifier="1")

    assert MySQLParticipantRepository(FakeConnFactory(1)).replace(p) is True
    assert MySQLParticipantRepository(FakeConnFactory(0, [{"found": 1}])).replace(p) is True
    assert MySQLParticipantRepository(FakeConnFactory(0, [])).replace(p) is False


def test_max_id_and_delete_all():
    assert MySQLParticipantRepository(FakeConnFactory([{"max_id": 7}])).max_id() == 7
    assert MySQLParticipantRepository(FakeConnFactory(3)).delete_all() == 3


def test_schema_column_widths_match_scan_metadata_limits():
    assert f"location VARCHAR({MAX_LOCATION_LENGTH})" in SCHEMA_SQL
    assert f"device VARCHAR({MAX_DEVICE_LENGTH})" in SCHEMA_SQL
