"""Observability port for the ingest pipeline.

Pipeline components never write to a log sink directly. They receive an
:class:`IngestObserver` and report domain events to it; which sink those
events reach is the observer's business. :class:`LoggingObserver` is the
default and emits structlog events.

Events::

    stage_completed(stage, **metrics)   enumerate / init / resolve finished
    key_processed(key, records)         a key and all its records are stored
    record_inserted(key, record)        one record is stored
    definition_skipped(key, definition) a definition had no primary word
    fatal_error(error, stage, key)      the run is about to stop
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from wordspine.core.errors import WordspineError
from wordspine.core.models import Definition, Record
from wordspine.framework.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class IngestObserver(Protocol):
    """Capability interface receiving pipeline events. Must be thread-safe."""

    def stage_completed(self, stage: str, **metrics: Any) -> None: ...

    def key_processed(self, key: str, records: int) -> None: ...

    def record_inserted(self, key: str, record: Record) -> None: ...

    def definition_skipped(self, key: str, definition: Definition) -> None: ...

    def fatal_error(self, error: Exception, stage: str, key: str | None = None) -> None: ...


class LoggingObserver:
    """Observer that reports events through structlog."""

    def __init__(self, logger: Any = None):
        self._log = logger or get_logger("wordspine.ingest")

    def stage_completed(self, stage: str, **metrics: Any) -> None:
        self._log.info(f"ingest.{stage}.completed", **metrics)

    def key_processed(self, key: str, records: int) -> None:
        self._log.debug("ingest.key_processed", key=key, records=records)

    def record_inserted(self, key: str, record: Record) -> None:
        self._log.info(
            "ingest.record_inserted",
            key=key,
            word=record.word,
            alternatives=record.alternatives,
        )

    def definition_skipped(self, key: str, definition: Definition) -> None:
        self._log.warning(
            "ingest.definition_skipped",
            key=key,
            reason="no primary word",
            gloss=definition.gloss,
            synset_type=definition.synset_type,
        )

    def fatal_error(self, error: Exception, stage: str, key: str | None = None) -> None:
        fields = error.to_dict() if isinstance(error, WordspineError) else {
            "error_type": type(error).__name__,
            "message": str(error),
        }
        self._log.error("ingest.fatal_error", stage=stage, failed_key=key, **fields)


def report_fatal(observer: IngestObserver, error: Exception, stage: str, key: str | None = None) -> None:
    """
    Hand a fatal error to the observer.

    The run's outcome is already decided when this is called, so a failing
    observer is logged and must not replace the error being reported.
    """
    try:
        observer.fatal_error(error, stage, key)
    except Exception as e:
        logger.error(
            "ingest.observer_failed",
            stage=stage,
            failed_key=key,
            reported_error=type(error).__name__,
            error_type=type(e).__name__,
            error_message=str(e),
        )


__all__ = [
    "IngestObserver",
    "LoggingObserver",
    "report_fatal",
]
