"""SQL text loading.

The schema script and the insert statement ship as static ``.sql`` files
under ``core/schema/``. They are read once before a pipeline run into an
immutable :class:`SqlStatements` value and never mutated afterwards, so
worker threads can share it without synchronization.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from wordspine.core.errors import MissingConfigError
from wordspine.core.protocols import Connection

logger = logging.getLogger(__name__)

# Default schema directory
SCHEMA_DIR = Path(__file__).resolve().parent / "schema"
CREATE_SQL = SCHEMA_DIR / "create.sql"
INSERT_SQL = SCHEMA_DIR / "insert.sql"


def split_sql(sql: str) -> list[str]:
    """Split a SQL script into individual statements.

    Drops blank lines and ``--`` comment lines; a statement ends at a line
    terminated by ``;``.
    """
    statements = []
    current = []
    for line in sql.splitlines():
        stripped = line.strip()
        if stripped.startswith("--") or not stripped:
            continue
        current.append(line)
        if stripped.endswith(";"):
            stmt = "\n".join(current).strip()
            if stmt and stmt != ";":
                statements.append(stmt)
            current = []
    # Remaining unterminated statement
    if current:
        stmt = "\n".join(current).strip()
        if stmt:
            statements.append(stmt)
    return statements


@dataclass(frozen=True)
class SqlStatements:
    """Schema script and insert statement for the destination store."""

    create_script: str
    insert: str

    @property
    def create_statements(self) -> list[str]:
        return split_sql(self.create_script)


def _read(path: Path, setting: str) -> str:
    if not path.is_file():
        raise MissingConfigError(setting, f"SQL file not found for {setting}: {path}")
    return path.read_text(encoding="utf-8")


def load_statements(
    schema_path: Path | str | None = None,
    insert_path: Path | str | None = None,
) -> SqlStatements:
    """Read the schema and insert SQL.

    Parameters
    ----------
    schema_path
        Schema script. Defaults to the packaged ``create.sql``.
    insert_path
        Insert statement. Defaults to the packaged ``insert.sql``.

    Raises
    ------
    MissingConfigError
        If either file does not exist.
    """
    create_file = Path(schema_path) if schema_path else CREATE_SQL
    insert_file = Path(insert_path) if insert_path else INSERT_SQL

    statements = SqlStatements(
        create_script=_read(create_file, "schema_path"),
        insert=_read(insert_file, "insert_path").strip(),
    )
    logger.debug("schema.loaded", extra={"schema": str(create_file), "insert": str(insert_file)})
    return statements


def get_table_list(conn: Connection) -> list[str]:
    """User table names in a SQLite database, sorted alphabetically.

    SQLite's own ``sqlite_*`` tables (e.g. ``sqlite_sequence``) are left out.
    """
    cursor = conn.execute("SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name")
    return [row[0] for row in cursor.fetchall()]


__all__ = [
    "SCHEMA_DIR",
    "SqlStatements",
    "get_table_list",
    "load_statements",
    "split_sql",
]
