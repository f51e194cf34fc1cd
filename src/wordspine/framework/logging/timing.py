"""
Stage timing.

``log_step`` wraps one pipeline stage::

    with log_step("stage.enumerate") as timer:
        keys = source.list()
        timer.add_metric("keys", len(keys))

    # DEBUG stage.enumerate.start span_id=a1b2c3d4
    # INFO  stage.enumerate.end   span_id=a1b2c3d4 duration_ms=42.1 keys=147306

A step that raises logs ``<event>.error`` instead of ``.end`` and re-raises.
While the block runs, the logging context carries the step name and span
id, so nested steps report it as their ``parent_span_id``.
"""

import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from wordspine.framework.logging.context import get_context, get_logger, push_context


@dataclass
class StepTimer:
    """Elapsed time and metrics for one logged step."""

    step: str
    parent_span_id: str | None = None
    span_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    started: float = field(default_factory=time.perf_counter)
    ended: float | None = None
    metrics: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        end = self.ended if self.ended is not None else time.perf_counter()
        return (end - self.started) * 1000

    def add_metric(self, key: str, value: Any) -> "StepTimer":
        self.metrics[key] = value
        return self

    def fields(self) -> dict[str, Any]:
        out: dict[str, Any] = {"span_id": self.span_id, "duration_ms": round(self.duration_ms, 2)}
        if self.parent_span_id:
            out["parent_span_id"] = self.parent_span_id
        out.update(self.metrics)
        return out


@contextmanager
def log_step(event: str, log_start: bool = True, level: str = "info", **metrics: Any) -> Iterator[StepTimer]:
    """
    Log the start and end of a step with its duration.

    Args:
        event: Event name prefix (``<event>.start`` / ``.end`` / ``.error``)
        log_start: Emit ``<event>.start`` at DEBUG
        level: Level of the ``.end`` entry
        **metrics: Extra fields on every entry
    """
    log = get_logger("wordspine.timing")
    timer = StepTimer(step=event, parent_span_id=get_context().span_id, metrics=dict(metrics))
    token = push_context(step=event, span_id=timer.span_id, parent_span_id=timer.parent_span_id)

    if log_start:
        start = {"span_id": timer.span_id, **metrics}
        if timer.parent_span_id:
            start["parent_span_id"] = timer.parent_span_id
        log.debug(f"{event}.start", **start)

    try:
        yield timer
    except Exception as e:
        timer.ended = time.perf_counter()
        log.error(f"{event}.error", error_type=type(e).__name__, error_message=str(e), **timer.fields())
        raise
    finally:
        timer.ended = timer.ended or time.perf_counter()
        token.restore()

    getattr(log, level)(f"{event}.end", **timer.fields())
