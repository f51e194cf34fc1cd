"""
Shared pytest fixtures for wordspine tests.

This module provides:
- SQL statements and an in-memory store gateway
- The run/jog lexicon as an in-memory source
- A recording observer for asserting pipeline events
- Logging context cleanup for test isolation
"""

import sys
import threading
from pathlib import Path
from typing import Any, Generator

import pytest

# Ensure wordspine package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wordspine.core.schema_loader import SqlStatements, load_statements
from wordspine.core.store import StoreGateway
from wordspine.framework.logging import clear_context
from wordspine.framework.sources import InMemorySource


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def clean_log_context() -> Generator[None, None, None]:
    """Reset the logging context around every test."""
    clear_context()
    yield
    clear_context()


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def statements() -> SqlStatements:
    return load_statements()


@pytest.fixture
def store(statements: SqlStatements) -> Generator[StoreGateway, None, None]:
    """Store gateway over a fresh in-memory SQLite database."""
    gateway = StoreGateway.open(":memory:", statements)
    yield gateway
    gateway.close()


# =============================================================================
# Source Fixtures
# =============================================================================


RUN_JOG = {
    "run": [
        {"words": ["run"], "gloss": "move fast", "pos": "verb"},
        {"words": ["run", "operate"], "gloss": "function", "pos": "verb"},
    ],
    "jog": [
        {"words": ["jog"], "gloss": "run slowly", "pos": "verb"},
    ],
}


@pytest.fixture
def run_jog_source() -> InMemorySource:
    """Two keys; "run" has two definitions, one with an alternate."""
    return InMemorySource(RUN_JOG)


class RecordingObserver:
    """Observer that keeps every event for later assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []
        self._lock = threading.Lock()

    def _add(self, name: str, **fields: Any) -> None:
        with self._lock:
            self.events.append((name, fields))

    def stage_completed(self, stage: str, **metrics: Any) -> None:
        self._add("stage_completed", stage=stage, **metrics)

    def key_processed(self, key: str, records: int) -> None:
        self._add("key_processed", key=key, records=records)

    def record_inserted(self, key: str, record: Any) -> None:
        self._add("record_inserted", key=key, record=record)

    def definition_skipped(self, key: str, definition: Any) -> None:
        self._add("definition_skipped", key=key, definition=definition)

    def fatal_error(self, error: Exception, stage: str, key: str | None = None) -> None:
        self._add("fatal_error", error=error, stage=stage, key=key)

    def named(self, name: str) -> list[dict[str, Any]]:
        return [fields for event, fields in self.events if event == name]


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()
