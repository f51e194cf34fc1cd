"""WordNet → SQLite ingest pipeline.

Runs three stages, each strictly after the previous one completes::

    enumerate   source.list()            → keys      (SourceUnavailableError)
    init        store.ensure_schema()    → ready     (StoreInitError)
    resolve     pool.process(keys)       → PoolStats (LookupFailedError / InsertError)

The first failure ends the run. Nothing is retried and nothing is rolled
back: records stored before the failure stay in the database. The failing
stage is stamped on the error's context and reported to the observer.

Usage::

    pipeline = IngestPipeline(WordNetSource(), store, concurrency=4)
    match pipeline.run():
        case Ok(summary):
            print(summary.records_inserted)
        case Err(error):
            print(error)
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any, TypeVar

from wordspine.core.errors import (
    PipelineError,
    SourceUnavailableError,
    StoreInitError,
    WordspineError,
    wrap_error,
)
from wordspine.core.models import Summary
from wordspine.core.protocols import LexicalSource
from wordspine.core.result import Err, Ok, Result, try_result
from wordspine.core.schema_loader import load_statements
from wordspine.core.settings import IngestSettings
from wordspine.core.store import StoreGateway
from wordspine.execution.pool import ResolutionWorkerPool, validate_concurrency
from wordspine.framework.events import IngestObserver, LoggingObserver, report_fatal
from wordspine.framework.logging import get_logger, log_step, new_execution_id, push_context
from wordspine.framework.pipelines.base import Pipeline, PipelineStatus
from wordspine.framework.sources import create_source

T = TypeVar("T")

logger = get_logger(__name__)


class IngestPipeline(Pipeline):
    """
    Enumerate a lexical source and persist every definition as a record.

    Args:
        source: Lexical source to enumerate and resolve
        store: Store gateway for the destination database
        concurrency: Resolution worker count (positive integer)
        observer: Event port; defaults to :class:`LoggingObserver`
        name: Workflow name attached to the logging context
    """

    name = "wordnet.ingest"
    description = "Load every lexical entry of a source into the words table"

    def __init__(
        self,
        source: LexicalSource,
        store: StoreGateway,
        *,
        concurrency: int = 1,
        observer: IngestObserver | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__()
        self.source = source
        self.store = store
        self.concurrency = validate_concurrency(concurrency)
        self.observer = observer or LoggingObserver()
        if name:
            self.name = name
        self.execution_id: str | None = None

    def run(self) -> Result[Summary]:
        """Run all stages; ``Ok(Summary)`` on success, ``Err`` with the first fatal error."""
        self.execution_id = new_execution_id()
        self.status = PipelineStatus.RUNNING
        started = time.perf_counter()
        token = push_context(execution_id=self.execution_id, workflow=self.name)
        try:
            result = self._run_stages(started)
        finally:
            token.restore()

        self.status = PipelineStatus.COMPLETED if result.is_ok() else PipelineStatus.FAILED
        return result

    def _run_stages(self, started: float) -> Result[Summary]:
        logger.info("ingest.start", source=getattr(self.source, "name", None), concurrency=self.concurrency)

        keys = self._stage("enumerate", self._enumerate, SourceUnavailableError)
        if keys.is_err():
            return keys

        key_list: list[str] = keys.unwrap()
        ready = self._stage("init", self.store.ensure_schema, StoreInitError)
        if ready.is_err():
            return ready

        with log_step("stage.resolve", keys=len(key_list)) as timer:
            pool = ResolutionWorkerPool(
                self.source,
                self.store,
                concurrency=self.concurrency,
                observer=self.observer,
            )
            processed = pool.process(key_list)
            timer.add_metric("ok", processed.is_ok())
        if processed.is_err():
            # the pool already reported the failing key to the observer
            return Err(self._stamp(processed.error, "resolve"))

        stats = processed.unwrap()
        self.observer.stage_completed("resolve", **stats.to_dict())

        summary = Summary(
            keys_total=stats.keys_total,
            keys_processed=stats.keys_processed,
            records_inserted=stats.records_inserted,
            keys_failed=stats.keys_failed,
            duration_seconds=time.perf_counter() - started,
        )
        logger.info("ingest.complete", **summary.to_dict())
        return Ok(summary)

    def _enumerate(self) -> list[str]:
        keys = list(self.source.list())
        if not keys:
            raise SourceUnavailableError("Lexical source returned no keys")
        return keys

    def _stage(self, stage: str, fn: Callable[[], T], wrapper: type[WordspineError]) -> Result[T]:
        with log_step(f"stage.{stage}") as timer:
            result = try_result(fn).map_err(lambda e: self._stamp(e, stage, wrapper))
            timer.add_metric("ok", result.is_ok())

        match result:
            case Ok(value):
                metrics: dict[str, Any] = {"keys": len(value)} if isinstance(value, list) else {}
                self.observer.stage_completed(stage, **metrics)
            case Err(error):
                report_fatal(self.observer, error, stage)
        return result

    def _stamp(
        self,
        error: Exception,
        stage: str,
        wrapper: type[WordspineError] = PipelineError,
    ) -> WordspineError:
        return wrap_error(
            error,
            wrapper,
            f"{stage} stage failed",
            stage=stage,
            source_name=getattr(self.source, "name", None),
            execution_id=self.execution_id,
        )


def run_ingest(
    settings: IngestSettings,
    *,
    source: LexicalSource | None = None,
    observer: IngestObserver | None = None,
) -> Result[Summary]:
    """
    Build a pipeline from settings, run it and close the store.

    Configuration failures (missing SQL files, missing lexicon path, store
    that cannot be opened) are returned as ``Err`` like any stage failure.
    """

    def build() -> tuple[LexicalSource, StoreGateway]:
        statements = load_statements(settings.schema_path, settings.insert_path)
        lexical_source = source or create_source(settings)
        return lexical_source, StoreGateway.open(settings.database_path, statements)

    built = try_result(build)
    if built.is_err():
        return built

    lexical_source, store = built.unwrap()
    with store:
        pipeline = IngestPipeline(
            lexical_source,
            store,
            concurrency=settings.concurrency,
            observer=observer,
        )
        return pipeline.run()


__all__ = [
    "IngestPipeline",
    "run_ingest",
]
