"""
Logging context management using contextvars.

Execution context (run id, workflow, current step, current key) attaches
to every log entry without being passed through each call. Worker threads
start from an empty context, so the pool copies the caller's context into
each worker with :func:`contextvars.copy_context`.
"""

import uuid
from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Any

import structlog


def new_execution_id() -> str:
    """Generate a run identifier."""
    return uuid.uuid4().hex[:12]


@dataclass
class LogContext:
    """
    Execution context attached to all log entries.

    Core identifiers:
        execution_id: Unique pipeline run ID
        workflow: Pipeline name (e.g., "wordnet.ingest")

    Tracing (for nested timing blocks):
        span_id: Current span identifier
        parent_span_id: Parent span for nested operations

    Step context:
        step: Current processing step name
        worker: Worker name inside the resolution pool
        key: Lexical key being resolved
    """

    execution_id: str | None = None
    workflow: str | None = None

    span_id: str | None = None
    parent_span_id: str | None = None

    step: str | None = None
    worker: str | None = None
    key: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs) -> "LogContext":
        """Create new context with merged values."""
        current = asdict(self)
        current.update({k: v for k, v in kwargs.items() if v is not None and k in current})
        return LogContext(**current)


_log_context: ContextVar[LogContext] = ContextVar("log_context")  # noqa: B039


def get_context() -> LogContext:
    """Get the current log context."""
    return _log_context.get(LogContext())


def set_context(
    execution_id: str | None = None,
    workflow: str | None = None,
    step: str | None = None,
    worker: str | None = None,
    key: str | None = None,
) -> LogContext:
    """
    Set the current log context.

    This replaces the current context. Use bind_context() to add to existing.
    """
    ctx = LogContext(
        execution_id=execution_id,
        workflow=workflow,
        step=step,
        worker=worker,
        key=key,
    )
    _log_context.set(ctx)
    return ctx


def bind_context(**kwargs) -> LogContext:
    """Merge values into the current context."""
    updated = get_context().merge(**kwargs)
    _log_context.set(updated)
    return updated


def clear_context() -> None:
    """Clear the current context (reset to empty)."""
    _log_context.set(LogContext())


class _ContextToken:
    """Token for restoring context after a scoped operation."""

    def __init__(self, token):
        self._token = token

    def restore(self):
        _log_context.reset(self._token)


def push_context(**kwargs) -> _ContextToken:
    """
    Push new context values, returning a token to restore later.

    Usage:
        token = push_context(key="run")
        try:
            resolve("run")
        finally:
            token.restore()
    """
    updated = get_context().merge(**kwargs)
    token = _log_context.set(updated)
    return _ContextToken(token)


def add_context_processor(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Structlog processor that adds execution context to every log entry.

    Explicit event fields win over context fields.
    """
    for key, value in get_context().to_dict().items():
        if key not in event_dict:
            event_dict[key] = value
    return event_dict


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (typically ``get_logger(__name__)``)."""
    return structlog.get_logger(name)
