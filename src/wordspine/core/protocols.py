"""
Canonical protocol definitions for wordspine.

Every module that needs a database connection or a lexical source imports
the contract from here. Protocols keep the pipeline independent of the
concrete SQLite driver and of the WordNet corpus reader, so tests can
substitute plain in-memory objects.

Architecture:
    ::

        protocols.py
        ├── Connection      — sync DB protocol (sqlite3.Connection satisfies it)
        └── LexicalSource   — list() / lookup(key) contract for lexical databases

    Implementations:
        Connection    → sqlite3.Connection (via SQLiteAdapter)
        LexicalSource → WordNetSource, JsonLexiconSource, InMemorySource
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from wordspine.core.models import Definition

# ---------------------------------------------------------------------------
# Database Connection Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class Connection(Protocol):
    """
    Minimal synchronous connection interface.

    Parameters may be a positional tuple or a name → value mapping; the
    store gateway always binds by name.
    """

    def execute(self, sql: str, params: Sequence[Any] | Mapping[str, Any] = ()) -> Any:
        """Execute SQL statement with optional parameters."""
        ...

    def commit(self) -> None:
        """Commit current transaction."""
        ...

    def rollback(self) -> None:
        """Rollback current transaction."""
        ...

    def close(self) -> None:
        """Close the connection."""
        ...


# ---------------------------------------------------------------------------
# Lexical Source Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class LexicalSource(Protocol):
    """
    Contract for a lexical database.

    ``list()`` enumerates every key the source can resolve and raises
    :class:`~wordspine.core.errors.SourceUnavailableError` when it cannot.
    ``lookup(key)`` returns the word-sense definitions for one key and
    raises :class:`~wordspine.core.errors.KeyNotFoundError` when there are
    none. Both may be called from several worker threads at once.
    """

    name: str

    def list(self) -> Sequence[str]:
        """Enumerate all keys."""
        ...

    def lookup(self, key: str) -> Sequence[Definition]:
        """Resolve one key to its definitions."""
        ...


__all__ = [
    "Connection",
    "LexicalSource",
]
