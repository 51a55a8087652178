from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import CredentialBlobRepository


class MySQLBlobRepository(CredentialBlobRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def read_blob(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT payload
                FROM kv_blobs
                WHERE namespace=%s
                """,
                (key,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return row["payload"]

    def write_blob(self, key: str, blob: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kv_blobs (namespace, payload)
                VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload), updated_at=CURRENT_TIMESTAMP
                """,
                (key, blob),
            )
