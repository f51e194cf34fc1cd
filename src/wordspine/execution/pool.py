"""Resolution Worker Pool - bounded-concurrency key resolution.

A fixed number of worker threads drain one shared FIFO queue of keys.
Each worker looks a key up, flattens every definition into a record and
hands the records to the store gateway one at a time, waiting for each
insert before submitting the next. Records of one key therefore reach the
store in the order the source returned them; records of different keys
interleave freely when ``concurrency > 1``.

ARCHITECTURE
────────────
::

    ResolutionWorkerPool(source, store, concurrency=1)
      └── .process(keys)  ─ Ok(PoolStats) | Err(first fatal error)

    queue.Queue[key] ──► worker-0 ─┐
                     ──► worker-1 ─┼─► StoreGateway.insert (one at a time)
                     ──► worker-N ─┘

Any lookup or insert failure is fatal to the pool: the stop event is set,
workers finish the key they are on, and no further key is dispatched.
There is no retry and no mid-lookup or mid-write abort.

``concurrency=1`` is the default: it gives a strict sequential pipeline
in enumeration order.

Example::

    pool = ResolutionWorkerPool(source, store, concurrency=4)
    result = pool.process(["run", "jog"])
    if result.is_ok():
        print(result.unwrap().records_inserted)
"""

from __future__ import annotations

import contextvars
import queue
import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from wordspine.core.errors import (
    InvalidConfigError,
    LookupFailedError,
    PipelineError,
    WordspineError,
    wrap_error,
)
from wordspine.core.protocols import LexicalSource
from wordspine.core.result import Err, Ok, Result
from wordspine.core.store import StoreGateway
from wordspine.core.transform import flatten_all
from wordspine.framework.events import IngestObserver, LoggingObserver, report_fatal
from wordspine.framework.logging import get_logger, push_context

logger = get_logger(__name__)


@dataclass
class PoolStats:
    """Counters for one :meth:`ResolutionWorkerPool.process` call."""

    keys_total: int = 0
    keys_processed: int = 0
    records_inserted: int = 0
    keys_failed: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "keys_total": self.keys_total,
            "keys_processed": self.keys_processed,
            "records_inserted": self.records_inserted,
            "keys_failed": self.keys_failed,
        }


def validate_concurrency(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidConfigError("concurrency", value, f"concurrency must be a positive integer, got {value!r}")
    return value


class _Run:
    """Shared state of one process() call."""

    def __init__(self, keys: Sequence[str]):
        self.queue: queue.Queue[str] = queue.Queue()
        for key in keys:
            self.queue.put(key)
        self.stop = threading.Event()
        self.stats = PoolStats(keys_total=len(keys))
        self.error: Exception | None = None
        self._lock = threading.Lock()

    def next_key(self) -> str | None:
        if self.stop.is_set():
            return None
        try:
            return self.queue.get_nowait()
        except queue.Empty:
            return None

    def record_inserted(self) -> None:
        with self._lock:
            self.stats.records_inserted += 1

    def key_processed(self) -> None:
        with self._lock:
            self.stats.keys_processed += 1

    def fail(self, error: Exception) -> bool:
        """Record a failure; returns True if it is the first one."""
        with self._lock:
            self.stats.keys_failed += 1
            self.stop.set()
            if self.error is None:
                self.error = error
                return True
            return False


class ResolutionWorkerPool:
    """
    Resolve keys against a lexical source and persist their records.

    Args:
        source: Lexical source providing ``lookup(key)``
        store: Store gateway receiving the records
        concurrency: Number of worker threads (positive integer)
        observer: Event port; defaults to :class:`LoggingObserver`
    """

    def __init__(
        self,
        source: LexicalSource,
        store: StoreGateway,
        *,
        concurrency: int = 1,
        observer: IngestObserver | None = None,
    ):
        self._source = source
        self._store = store
        self._concurrency = validate_concurrency(concurrency)
        self._observer = observer or LoggingObserver()

    @property
    def concurrency(self) -> int:
        return self._concurrency

    def process(self, keys: Sequence[str], concurrency: int | None = None) -> Result[PoolStats]:
        """
        Resolve every key, or stop at the first fatal error.

        Returns only after every dispatched key (including all of its
        record inserts) has finished.

        Args:
            keys: Keys in enumeration order
            concurrency: Overrides the pool's worker count for this call

        Returns:
            ``Ok(PoolStats)`` when every key was stored, otherwise
            ``Err`` with the first error observed (a
            :class:`~wordspine.core.errors.LookupFailedError`,
            :class:`~wordspine.core.errors.InsertError` or
            :class:`~wordspine.core.errors.PipelineError`).
        """
        workers = validate_concurrency(concurrency if concurrency is not None else self._concurrency)
        run = _Run(keys)

        logger.info("pool.start", keys=len(keys), concurrency=workers)

        if keys:
            with ThreadPoolExecutor(
                max_workers=workers,
                thread_name_prefix="wordspine-worker",
            ) as executor:
                futures = [
                    executor.submit(contextvars.copy_context().run, self._drain, f"worker-{i}", run)
                    for i in range(min(workers, len(keys)))
                ]
                for future in futures:
                    future.result()

        logger.info("pool.complete", **run.stats.to_dict(), failed=run.error is not None)

        if run.error is not None:
            return Err(run.error)
        return Ok(run.stats)

    def _drain(self, worker: str, run: _Run) -> None:
        while (key := run.next_key()) is not None:
            token = push_context(worker=worker, key=key)
            try:
                self._resolve(key, run)
            except Exception as e:
                error = wrap_error(e, PipelineError, f"Unexpected failure resolving {key!r}", stage="resolve", key=key)
                if run.fail(error):
                    report_fatal(self._observer, error, "resolve", key)
                else:
                    logger.warning("pool.additional_failure", key=key, error=str(error))
            finally:
                token.restore()

    def _resolve(self, key: str, run: _Run) -> None:
        try:
            definitions = self._source.lookup(key)
        except WordspineError:
            raise
        except Exception as e:
            raise LookupFailedError(key, f"Lookup failed for {key!r}: {e}", cause=e) from e

        records = flatten_all(
            definitions,
            on_skip=lambda definition: self._observer.definition_skipped(key, definition),
        )
        for record in records:
            self._store.insert(record, key=key)
            run.record_inserted()
            self._observer.record_inserted(key, record)

        run.key_processed()
        self._observer.key_processed(key, len(records))


__all__ = [
    "PoolStats",
    "ResolutionWorkerPool",
    "validate_concurrency",
]
