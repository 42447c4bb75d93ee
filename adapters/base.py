from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from starlette.concurrency import run_in_threadpool

from adapters.sql_renderer import SQLDialect, get_sql_dialect


class AdapterError(RuntimeError):
    pass


@dataclass
class QueryResult:
    rows: List[Dict[str, Any]] = field(default_factory=list)
    affected_rows: int = 0
    inserted_id: Optional[int] = None


class DatabaseAdapter(ABC):
    """One long-lived connection to a SQL engine behind an awaitable query contract.

    Callers write SQL with ``?`` markers; the adapter's dialect rewrites them
    for the driver. The connection is shared by every request, so driver calls
    are serialized with a lock and pushed to the threadpool.
    """

    engine: str = "unknown"

    def __init__(self, source_config: Optional[Dict[str, Any]] = None):
        self.source_config = source_config or {}
        self.dialect: SQLDialect = get_sql_dialect(self.engine)
        self._conn = None
        self._lock = threading.Lock()

    @property
    def display_name(self) -> str:
        return self.dialect.display_name

    @abstractmethod
    def _connect(self):
        raise NotImplementedError

    @abstractmethod
    def _execute(self, conn, sql: str, params: Sequence[Any]) -> QueryResult:
        raise NotImplementedError

    def _is_open(self, conn) -> bool:
        return conn is not None

    def _ensure_connection(self):
        if self._conn is None or not self._is_open(self._conn):
            try:
                self._conn = self._connect()
            except AdapterError:
                raise
            except Exception as exc:
                raise AdapterError(f"{self.display_name} connection failed: {exc}") from exc
        return self._conn

    def execute(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        try:
            rendered = self.dialect.render(sql, len(params))
        except ValueError as exc:
            raise AdapterError(str(exc)) from exc
        with self._lock:
            conn = self._ensure_connection()
            try:
                return self._execute(conn, rendered, tuple(params))
            except AdapterError:
                raise
            except Exception as exc:
                raise AdapterError(str(exc)) from exc

    async def run_query(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        return await run_in_threadpool(self.execute, sql, params)

    async def connect(self) -> None:
        await self.run_query("SELECT 1")

    def close_sync(self) -> None:
        with self._lock:
            conn, self._conn = self._conn, None
            if conn is not None:
                conn.close()

    async def close(self) -> None:
        await run_in_threadpool(self.close_sync)
