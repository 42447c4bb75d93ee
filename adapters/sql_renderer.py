from __future__ import annotations

import re
from dataclasses import dataclass

CANONICAL_PLACEHOLDER = "?"
IDENTITY_COLUMN = "id"

_QUOTES = {"'", '"', "`"}
_INSERT_RE = re.compile(r"^\s*insert\b", re.IGNORECASE)
_RETURNING_RE = re.compile(r"\breturning\b", re.IGNORECASE)


def is_insert(sql: str) -> bool:
    return bool(_INSERT_RE.match(sql))


@dataclass(frozen=True)
class SQLDialect:
    engine: str
    placeholder_style: str
    identity_column_ddl: str
    display_name: str

    def placeholder(self, position: int) -> str:
        if self.placeholder_style == "numbered":
            return f"${position}"
        if self.placeholder_style == "format":
            return "%s"
        return "?"

    def render(self, sql: str, param_count: int) -> str:
        """Rewrite canonical ``?`` markers into this engine's parameter syntax.

        Markers inside quoted literals or identifiers are left alone. For the
        ``format`` style every literal ``%`` is doubled since the driver
        interpolates the whole statement.
        """
        out = []
        quote = None
        position = 0
        for ch in sql:
            if quote is not None:
                if ch == quote:
                    quote = None
            elif ch in _QUOTES:
                quote = ch
            elif ch == CANONICAL_PLACEHOLDER:
                position += 1
                out.append(self.placeholder(position))
                continue
            if ch == "%" and self.placeholder_style == "format":
                out.append("%%")
                continue
            out.append(ch)

        if position != param_count:
            raise ValueError(f"Expected {position} parameters, got {param_count}")

        rendered = "".join(out)
        if self.returns_inserted_id and _INSERT_RE.match(rendered) and not _RETURNING_RE.search(rendered):
            rendered = f"{rendered.rstrip().rstrip(';')} RETURNING {IDENTITY_COLUMN}"
        return rendered

    @property
    def returns_inserted_id(self) -> bool:
        # Postgres has no lastrowid; the id comes back as a result row.
        return self.engine == "postgres"


def get_sql_dialect(db_engine: str) -> SQLDialect:
    engine = (db_engine or "").strip().lower()
    if engine in {"postgres", "postgresql"}:
        return SQLDialect(
            engine="postgres",
            placeholder_style="numbered",
            identity_column_ddl=f"{IDENTITY_COLUMN} SERIAL PRIMARY KEY",
            display_name="PostgreSQL",
        )
    if engine == "mysql":
        return SQLDialect(
            engine="mysql",
            placeholder_style="format",
            identity_column_ddl=f"{IDENTITY_COLUMN} INT AUTO_INCREMENT PRIMARY KEY",
            display_name="MySQL",
        )
    if engine == "sqlite":
        return SQLDialect(
            engine="sqlite",
            placeholder_style="qmark",
            identity_column_ddl=f"{IDENTITY_COLUMN} INTEGER PRIMARY KEY AUTOINCREMENT",
            display_name="SQLite",
        )
    raise ValueError(f"Unsupported db_engine: {db_engine}")
