from __future__ import annotations

from typing import Mapping, Optional

import mysql.connector

from ..core.exceptions import StorageError
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchone
from .store import KeyValueStore

UPSERT_SQL = """
    INSERT INTO kv_store (store_key, store_value)
    VALUES (%s, %s)
    ON DUPLICATE KEY UPDATE store_value=VALUES(store_value)
"""


class MySQLKeyValueStore(KeyValueStore):
    """Key-value blobs in a single ``kv_store`` table (see database/schema.sql)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT store_value FROM kv_store WHERE store_key=%s", (key,))
            r = fetchone(cur)
            if not r:
                return None
            return r["store_value"]

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, str]) -> None:
        # One transaction: db_cursor commits after the block or rolls back.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                for key, value in items.items():
                    cur.execute(UPSERT_SQL, (key, value))
        except mysql.connector.Error as e:
            raise StorageError(f"Could not write keys {sorted(items)}") from e
