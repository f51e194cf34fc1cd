"""Store Gateway - the serialized write boundary to the destination store.

The destination is one connection that is not assumed to tolerate
concurrent writers. Every statement the gateway issues goes through a
single lock, so exactly one insert executes at a time system-wide no
matter how many resolution workers are running.

ARCHITECTURE
────────────
::

    StoreGateway(conn, statements)
      ├── .ensure_schema()        ─ idempotent create (tolerates "already exists")
      ├── .insert(record, key=)   ─ named-parameter insert + commit, serialized
      ├── .fetch_all()            ─ read back persisted records
      ├── .count() / .tables()    ─ rows and tables in the destination
      └── .close()                ─ close the connection if owned

Each insert commits on its own; there is no transaction around a whole
run, so a failed run leaves every record inserted before the failure in
place.

Example::

    statements = load_statements()
    with StoreGateway.open("db.sqlite", statements) as store:
        store.ensure_schema()
        store.insert(Record(word="run", part_of_speech="verb"), key="run")
"""

from __future__ import annotations

import threading

from wordspine.core.adapters.sqlite import SQLiteAdapter
from wordspine.core.errors import InsertError, StoreInitError
from wordspine.core.models import Record
from wordspine.core.protocols import Connection
from wordspine.core.schema_loader import SqlStatements, get_table_list

_READ_SQL = "SELECT word, pos, alternatives, gloss FROM words ORDER BY id"
_COUNT_SQL = "SELECT COUNT(*) FROM words"


def _already_exists(error: Exception) -> bool:
    return "already exists" in str(error).lower()


class StoreGateway:
    """Serialized access to the destination store."""

    def __init__(
        self,
        conn: Connection,
        statements: SqlStatements,
        *,
        adapter: SQLiteAdapter | None = None,
    ):
        self._conn = conn
        self._statements = statements
        self._adapter = adapter
        self._lock = threading.Lock()
        self._inserted = 0

    @classmethod
    def open(cls, path: str, statements: SqlStatements) -> StoreGateway:
        """Open a SQLite store at ``path``; the gateway owns the connection."""
        adapter = SQLiteAdapter(path)
        adapter.connect()
        return cls(adapter.get_connection(), statements, adapter=adapter)

    @property
    def inserted(self) -> int:
        """Records inserted through this gateway."""
        return self._inserted

    def ensure_schema(self) -> None:
        """
        Create the schema if absent.

        Safe to call against a store that already has it: a statement
        failing with "already exists" is skipped.

        Raises:
            StoreInitError: If any statement fails for another reason.
        """
        with self._lock:
            for statement in self._statements.create_statements:
                try:
                    self._conn.execute(statement)
                except Exception as e:
                    if _already_exists(e):
                        continue
                    self._conn.rollback()
                    raise StoreInitError(f"Schema creation failed: {e}", cause=e).with_context(
                        stage="init", statement=statement.splitlines()[0]
                    ) from e
            self._conn.commit()

    def insert(self, record: Record, *, key: str | None = None) -> None:
        """
        Insert one record, binding its fields by name.

        Args:
            record: Record to persist
            key: Lexical key the record was resolved from (error context)

        Raises:
            InsertError: If the record has no word or the write fails.
        """
        if not record.word:
            raise InsertError("Record has an empty word", key=key, word=record.word)

        with self._lock:
            try:
                self._conn.execute(self._statements.insert, record.to_params())
                self._conn.commit()
            except Exception as e:
                self._conn.rollback()
                raise InsertError(f"Insert failed: {e}", key=key, word=record.word, cause=e) from e
            self._inserted += 1

    def fetch_all(self) -> list[Record]:
        """All persisted records in insertion order."""
        with self._lock:
            rows = self._conn.execute(_READ_SQL).fetchall()
        return [
            Record(word=row[0], part_of_speech=row[1], alternatives=row[2], gloss=row[3])
            for row in rows
        ]

    def count(self) -> int:
        with self._lock:
            return self._conn.execute(_COUNT_SQL).fetchone()[0]

    def tables(self) -> list[str]:
        with self._lock:
            return get_table_list(self._conn)

    def close(self) -> None:
        """Close the connection if this gateway opened it."""
        if self._adapter is not None:
            self._adapter.disconnect()

    def __enter__(self) -> StoreGateway:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = [
    "StoreGateway",
]
