from __future__ import annotations

import os
import sqlite3
from pathlib import Path
from typing import Any, Sequence

from adapters.base import DatabaseAdapter, QueryResult
from adapters.sql_renderer import is_insert

MEMORY_DB = ":memory:"


class SQLiteAdapter(DatabaseAdapter):
    engine = "sqlite"

    def _db_path(self) -> str:
        raw = self.source_config.get("db_path") or os.getenv("SQLITE_DB_PATH")
        if not raw:
            raise ValueError("SQLITE_DB_PATH is required for sqlite adapter")
        if raw == MEMORY_DB:
            return raw
        db_path = Path(str(raw))
        db_path.parent.mkdir(parents=True, exist_ok=True)
        return str(db_path)

    def _connect(self) -> sqlite3.Connection:
        # isolation_level=None puts the connection in autocommit mode.
        conn = sqlite3.connect(self._db_path(), check_same_thread=False, isolation_level=None)
        conn.row_factory = sqlite3.Row
        return conn

    def _execute(self, conn, sql: str, params: Sequence[Any]) -> QueryResult:
        cur = conn.cursor()
        try:
            cur.execute(sql, tuple(params))
            rows = [dict(row) for row in cur.fetchall()] if cur.description else []
            affected = len(rows) if cur.description else cur.rowcount
            inserted_id = cur.lastrowid if is_insert(sql) else None
        finally:
            cur.close()
        return QueryResult(rows=rows, affected_rows=max(affected, 0), inserted_id=inserted_id)
