"""Ingestion settings.

One validated settings object for a pipeline run. Values resolve from,
in order of precedence: explicit constructor/CLI arguments,
``WORDSPINE_*`` environment variables, a ``.env`` file, then defaults.

Examples:
    >>> from wordspine.core.settings import IngestSettings
    >>> settings = IngestSettings(concurrency=4)
    >>> settings.database_path
    'db.sqlite'

Environment::

    WORDSPINE_DATABASE_PATH=/data/wordnet.sqlite
    WORDSPINE_CONCURRENCY=1
    WORDSPINE_SOURCE=json
    WORDSPINE_LEXICON_PATH=lexicon.json
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SourceKind(str, Enum):
    """Available lexical source adapters."""

    WORDNET = "wordnet"
    JSON = "json"


class IngestSettings(BaseSettings):
    """Configuration for one ingestion run."""

    model_config = SettingsConfigDict(
        env_prefix="WORDSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Destination ──────────────────────────────────────────────
    database_path: str = Field(default="db.sqlite", description="SQLite database path")
    schema_path: Path | None = Field(default=None, description="Override for the schema script")
    insert_path: Path | None = Field(default=None, description="Override for the insert statement")

    # ── Resolution ───────────────────────────────────────────────
    concurrency: int = Field(default=1, ge=1, description="Concurrent lookup workers")

    # ── Source ───────────────────────────────────────────────────
    source: SourceKind = Field(default=SourceKind.WORDNET)
    lexicon_path: Path | None = Field(default=None, description="JSON lexicon file (source=json)")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError(f"unsupported log level: {value}")
        return value

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in {"json", "console"}:
            raise ValueError(f"unsupported log format: {value}")
        return value


__all__ = [
    "IngestSettings",
    "SourceKind",
]
