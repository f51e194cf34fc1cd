"""Wordspine Execution - bounded-concurrency key resolution.

ARCHITECTURE
────────────
::

    keys (enumeration order)
      │
      ▼
    ResolutionWorkerPool (ThreadPool, N workers, shared FIFO queue)
      ├── LexicalSource.lookup(key)  ─ per key, concurrent
      ├── flatten_all(definitions)   ─ Definition → Record
      └── StoreGateway.insert        ─ serialized, one at a time
      │
      ▼
    Ok(PoolStats) | Err(first fatal error)
"""

from wordspine.execution.pool import PoolStats, ResolutionWorkerPool, validate_concurrency

__all__ = [
    "PoolStats",
    "ResolutionWorkerPool",
    "validate_concurrency",
]
