"""Database adapter layer: one awaitable query contract over PostgreSQL, MySQL and SQLite."""

from adapters.base import AdapterError, DatabaseAdapter, QueryResult
from adapters.factory import get_adapter

__all__ = ["AdapterError", "DatabaseAdapter", "QueryResult", "get_adapter"]
