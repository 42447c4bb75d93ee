from __future__ import annotations

import os
from typing import Any, Dict, Sequence

from adapters.base import DatabaseAdapter, QueryResult
from adapters.sql_renderer import IDENTITY_COLUMN, is_insert


class PostgresAdapter(DatabaseAdapter):
    engine = "postgres"

    def _db_params(self) -> Dict[str, Any]:
        environment = self.source_config.get("environment") or os.getenv("APP_ENV", "development")
        params: Dict[str, Any] = {
            # Render-style hosts terminate TLS with certificates we do not verify.
            "sslmode": "require" if environment == "production" else "disable",
        }
        url = self.source_config.get("database_url") or os.getenv("DATABASE_URL")
        if url:
            params["conninfo"] = url
            return params

        host = self.source_config.get("host") or os.getenv("DB_HOST", "localhost")
        port_raw = self.source_config.get("port") or os.getenv("DB_PORT", "5432")
        user = self.source_config.get("user") or os.getenv("DB_USER")
        password = self.source_config.get("password") or os.getenv("DB_PASSWORD")
        dbname = self.source_config.get("dbname") or os.getenv("DB_NAME", "movies_db")
        if not user:
            raise ValueError("DATABASE_URL or DB_USER is required")
        params.update(
            {
                "conninfo": "",
                "host": host,
                "port": int(port_raw),
                "dbname": dbname,
                "user": user,
                "password": password,
            }
        )
        return params

    def _connect(self):
        params = self._db_params()
        import psycopg  # type: ignore
        from psycopg.rows import dict_row  # type: ignore

        conninfo = params.pop("conninfo")
        # RawCursor binds server-side, which is what makes $1..$n markers legal.
        return psycopg.connect(
            conninfo,
            autocommit=True,
            row_factory=dict_row,
            cursor_factory=psycopg.RawCursor,
            **params,
        )

    def _is_open(self, conn) -> bool:
        return not conn.closed

    def _execute(self, conn, sql: str, params: Sequence[Any]) -> QueryResult:
        with conn.cursor() as cur:
            cur.execute(sql, params or None)
            rows = [dict(row) for row in cur.fetchall()] if cur.description else []
            affected = len(rows) if cur.description and not is_insert(sql) else cur.rowcount

        inserted_id = None
        if is_insert(sql) and rows:
            inserted_id = rows[0].get(IDENTITY_COLUMN)
        return QueryResult(rows=rows, affected_rows=max(int(affected or 0), 0), inserted_id=inserted_id)
