from scripts import init_db


class FakeRepo:
    def __init__(self, conn_factory):
        self.schema_created = False

    def ensure_schema(self):
        self.schema_created = True

    def max_id(self):
        return 7


def test_init_db_reports_highest_id(monkeypatch, capsys):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(init_db, "MySQLParticipantRepository", FakeRepo)

    init_db.main()

    out = capsys.readouterr().out
    assert "participants table ready" in out
    assert "highest participant id=7" in out
    assert "rows=" not in out
