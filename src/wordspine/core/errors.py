"""
Structured error types for the ingestion pipeline.

Every failure in the pipeline is fatal to the run, so the value of a typed
hierarchy here is diagnosis rather than retry routing: each error carries
the stage it happened in, the lexical key being processed and the
underlying driver/collaborator exception.

Architecture:
    ::

        WordspineError  (category, context, cause)
        ├── SourceError              (SOURCE)
        │   ├── SourceUnavailableError
        │   └── LookupFailedError    (key)
        │       └── KeyNotFoundError
        ├── StoreError               (DATABASE)
        │   ├── StoreConnectionError
        │   ├── StoreInitError
        │   └── InsertError          (key, word)
        ├── ConfigError              (CONFIG)
        │   ├── MissingConfigError
        │   └── InvalidConfigError
        └── PipelineError            (PIPELINE)

Usage:
    from wordspine.core.errors import KeyNotFoundError

    raise KeyNotFoundError("zzqx")

    try:
        conn.execute(sql, params)
    except sqlite3.Error as e:
        raise InsertError("insert failed", key=key, word=record.word, cause=e)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and logging."""

    SOURCE = "SOURCE"  # Lexical database enumeration / lookup
    DATABASE = "DATABASE"  # Destination store
    CONFIG = "CONFIG"  # Missing config, invalid settings
    PIPELINE = "PIPELINE"  # Orchestration failures
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        stage: Pipeline stage where the error occurred (enumerate, init, resolve)
        key: Lexical key being processed
        source_name: Name of the lexical source
        execution_id: Pipeline run identifier
        metadata: Additional key-value pairs
    """

    stage: str | None = None
    key: str | None = None
    source_name: str | None = None
    execution_id: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for name in ["stage", "key", "source_name", "execution_id"]:
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class WordspineError(Exception):
    """
    Base exception for all wordspine errors.

    Subclasses set ``default_category``. Context can be attached at
    construction or later through the fluent :meth:`with_context`, which is
    how the orchestrator stamps the failing stage onto errors raised deeper
    in the call stack.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> WordspineError:
        """
        Add context to this error (fluent API).

        Fields already set are not overwritten, so the innermost (most
        specific) context wins.
        """
        for name, value in kwargs.items():
            if value is None:
                continue
            if hasattr(self.context, name) and name != "metadata":
                if getattr(self.context, name) is None:
                    setattr(self.context, name, value)
            else:
                self.context.metadata.setdefault(name, value)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __str__(self) -> str:
        parts = [self.message]
        context_dict = self.context.to_dict()
        if context_dict:
            parts.append(" ".join(f"{k}={v}" for k, v in context_dict.items()))
        return " | ".join(parts)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# SOURCE ERRORS
# =============================================================================


class SourceError(WordspineError):
    """Error from the lexical database."""

    default_category = ErrorCategory.SOURCE


class SourceUnavailableError(SourceError):
    """The lexical source could not produce a key list."""

    pass


class LookupFailedError(SourceError):
    """Resolving a single key against the lexical source failed."""

    def __init__(self, key: str, message: str | None = None, **kwargs: Any):
        self.key = key
        super().__init__(message or f"Lookup failed for key: {key!r}", **kwargs)
        self.context.key = key


class KeyNotFoundError(LookupFailedError):
    """A key has no resolvable definitions."""

    def __init__(self, key: str, message: str | None = None, **kwargs: Any):
        super().__init__(key, message or f"Key not found: {key!r}", **kwargs)


# =============================================================================
# STORE ERRORS
# =============================================================================


class StoreError(WordspineError):
    """Destination store error."""

    default_category = ErrorCategory.DATABASE


class StoreConnectionError(StoreError):
    """The destination store could not be opened."""

    pass


class StoreInitError(StoreError):
    """Schema creation failed for a reason other than "already exists"."""

    pass


class InsertError(StoreError):
    """A parameterized write failed."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        word: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.key = key
        self.word = word
        self.with_context(key=key, word=word)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(WordspineError):
    """Configuration error. Never recoverable at runtime."""

    default_category = ErrorCategory.CONFIG


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


# =============================================================================
# PIPELINE ERRORS
# =============================================================================


class PipelineError(WordspineError):
    """Unexpected failure while orchestrating a run."""

    default_category = ErrorCategory.PIPELINE


def wrap_error(error: Exception, wrapper: type[WordspineError], message: str, **context: Any) -> WordspineError:
    """Return ``error`` with context if already typed, else wrap it in ``wrapper``."""
    if isinstance(error, WordspineError):
        return error.with_context(**context)
    return wrapper(f"{message}: {error}", cause=error).with_context(**context)


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "WordspineError",
    # Source
    "SourceError",
    "SourceUnavailableError",
    "LookupFailedError",
    "KeyNotFoundError",
    # Store
    "StoreError",
    "StoreConnectionError",
    "StoreInitError",
    "InsertError",
    # Config
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
    # Pipeline
    "PipelineError",
    # Utilities
    "wrap_error",
]
