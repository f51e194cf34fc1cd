"""Database adapters."""

from .sqlite import SQLiteAdapter

__all__ = [
    "SQLiteAdapter",
]
