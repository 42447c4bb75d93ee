from __future__ import annotations

import os
from typing import Any, Dict, Optional

from adapters.base import AdapterError, DatabaseAdapter
from adapters.mysql import MySQLAdapter
from adapters.postgres import PostgresAdapter
from adapters.sqlite import SQLiteAdapter


def resolve_engine(db_engine: Optional[str] = None, database_url: Optional[str] = None) -> str:
    explicit = db_engine or os.getenv("DB_TYPE") or os.getenv("DB_ENGINE")
    if explicit:
        return explicit.strip().lower()
    if database_url or os.getenv("DATABASE_URL"):
        return "postgres"
    return "mysql"


def get_adapter(db_engine: Optional[str] = None, source_config: Optional[Dict[str, Any]] = None) -> DatabaseAdapter:
    source_config = source_config or {}
    engine = resolve_engine(db_engine, source_config.get("database_url"))
    if engine in {"postgres", "postgresql"}:
        return PostgresAdapter(source_config=source_config)
    if engine == "sqlite":
        return SQLiteAdapter(source_config=source_config)
    if engine == "mysql":
        return MySQLAdapter(source_config=source_config)
    raise AdapterError(f"Unsupported db_engine: {engine}")
