from __future__ import annotations

import os
from typing import Any, Dict, Sequence

from adapters.base import DatabaseAdapter, QueryResult
from adapters.sql_renderer import is_insert


class MySQLAdapter(DatabaseAdapter):
    engine = "mysql"

    def _db_params(self) -> Dict[str, Any]:
        host = self.source_config.get("host") or os.getenv("DB_HOST", "localhost")
        dbname = self.source_config.get("dbname") or os.getenv("DB_NAME", "movies_db")
        user = self.source_config.get("user") or os.getenv("DB_USER", "root")
        password = self.source_config.get("password") or os.getenv("DB_PASSWORD", "")
        port_raw = self.source_config.get("port") or os.getenv("DB_PORT", "3306")
        return {
            "host": host,
            "port": int(port_raw),
            "database": dbname,
            "user": user,
            "password": password,
        }

    def _connect(self):
        params = self._db_params()
        import pymysql  # type: ignore
        import pymysql.cursors  # type: ignore
        from pymysql.constants import CLIENT  # type: ignore

        return pymysql.connect(
            **params,
            autocommit=True,
            charset="utf8mb4",
            cursorclass=pymysql.cursors.DictCursor,
            # Report matched rather than changed rows, so a no-op UPDATE is not a 404.
            client_flag=CLIENT.FOUND_ROWS,
        )

    def _is_open(self, conn) -> bool:
        return bool(conn.open)

    def _execute(self, conn, sql: str, params: Sequence[Any]) -> QueryResult:
        with conn.cursor() as cur:
            affected = cur.execute(sql, tuple(params))
            rows = [dict(row) for row in cur.fetchall()] if cur.description else []
            inserted_id = cur.lastrowid if is_insert(sql) else None
        if rows:
            affected = len(rows)
        return QueryResult(rows=rows, affected_rows=int(affected or 0), inserted_id=inserted_id)
