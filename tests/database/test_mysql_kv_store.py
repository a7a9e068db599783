from __future__ import annotations

from pathlib import Path

import mysql.connector
import pytest

from src.site_kiosk.site_kiosk.core.exceptions import StorageError
from src.site_kiosk.site_kiosk.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from src.site_kiosk.site_kiosk.database.mysql_kv_store import MySQLKeyValueStore


class FakeCursor:
    def __init__(self, db: "FakeDB"):
        self._db = db
        self._row = None

    def execute(self, sql, params=()):
        if self._db.fail:
            raise mysql.connector.Error("boom")
        if sql.strip().startswith("SELECT"):
            value = self._db.committed.get(params[0])
            self._row = {"store_value": value} if value is not None else None
        else:
            key, value = params
            self._db.pending[key] = value

    def fetchone(self):
        return self._row

    def close(self):
        pass


class FakeConn:
    def __init__(self, db: "FakeDB"):
        self._db = db

    def cursor(self, dictionary=False):
        return FakeCursor(self._db)

    def commit(self):
        self._db.committed.update(self._db.pending)
        self._db.pending.clear()
        self._db.commits += 1

    def rollback(self):
        self._db.pending.clear()
        self._db.rollbacks += 1

    def close(self):
        pass


class FakeDB:
    """Stands in for DatabaseConnection: hands out connections to one dict."""

    def __init__(self):
        self.committed: dict[str, str] = {}
        self.pending: dict[str, str] = {}
        self.commits = 0
        self.rollbacks = 0
        self.fail = False

    def connect(self):
        return FakeConn(self)


def test_get_missing_key_returns_none():
    assert MySQLKeyValueStore(FakeDB()).get("siteSignIn.workers") is None


def test_set_many_commits_once():
    db = FakeDB()
    store = MySQLKeyValueStore(db)

    store.set_many({"a": "[]", "b": "[]"})

    assert db.committed == {"a": "[]", "b": "[]"}
    assert db.commits == 1
    assert store.get("a") == "[]"


def test_failed_write_rolls_back_and_raises_storage_error():
    db = FakeDB()
    store = MySQLKeyValueStore(db)
    db.fail = True

    with pytest.raises(StorageError):
        store.set("a", "[]")

    assert db.rollbacks == 1
    assert db.committed == {}


def test_schema_file_splits_into_table_statement():
    schema = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
    statements = list(_iter_sql_statements(_strip_create_db_and_use(schema.read_text(encoding="utf-8"))))

    assert len(statements) == 1
    assert "CREATE TABLE IF NOT EXISTS kv_store" in statements[0]
