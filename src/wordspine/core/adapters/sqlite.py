"""SQLite database adapter.

Owns the single connection a pipeline run writes through. The connection
is opened with ``check_same_thread=False`` because worker threads share
it; callers are responsible for serializing access (see
:class:`~wordspine.core.store.StoreGateway`).
"""

from __future__ import annotations

import sqlite3

from wordspine.core.errors import StoreConnectionError


class SQLiteAdapter:
    """
    SQLite database adapter.

    Uses the built-in sqlite3 module. ``path`` may be ``":memory:"``, a
    filesystem path or a ``file:`` URI.
    """

    def __init__(
        self,
        path: str = ":memory:",
        *,
        readonly: bool = False,
        timeout: float = 5.0,
    ):
        self.path = path
        self._readonly = readonly
        self._timeout = timeout
        self._conn: sqlite3.Connection | None = None

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> None:
        """Connect to SQLite database."""
        uri = self.path.startswith("file:")

        try:
            self._conn = sqlite3.connect(
                self.path,
                timeout=self._timeout,
                check_same_thread=False,
                uri=uri,
            )
            self._conn.row_factory = sqlite3.Row

            if self._readonly:
                self._conn.execute("PRAGMA query_only = ON")

        except sqlite3.Error as e:
            raise StoreConnectionError(
                f"Failed to connect to SQLite at {self.path}: {e}",
                cause=e,
            ) from e

    def disconnect(self) -> None:
        """Close SQLite connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def get_connection(self) -> sqlite3.Connection:
        """Get the SQLite connection, connecting on first use."""
        if not self._conn:
            self.connect()
        return self._conn

    def __enter__(self) -> SQLiteAdapter:
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()

    def __repr__(self) -> str:
        return f"SQLiteAdapter(path={self.path!r})"


__all__ = [
    "SQLiteAdapter",
]
