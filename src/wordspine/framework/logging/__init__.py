"""
Wordspine Logging - Structured, execution-aware logging.

This module provides:
- Structured logging with structlog
- Execution context propagation via contextvars
- Timing utilities for stage tracking
- Environment-based configuration

Usage:
    from wordspine.framework.logging import get_logger, configure_logging, log_step, set_context

    # Configure once at startup
    configure_logging()

    log = get_logger(__name__)

    # Set execution context (automatically attached to all logs)
    set_context(execution_id="abc-123", workflow="wordnet.ingest")

    with log_step("stage.resolve"):
        pool.process(keys)
"""

from wordspine.framework.logging.config import configure_logging, is_configured
from wordspine.framework.logging.context import (
    LogContext,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    new_execution_id,
    push_context,
    set_context,
)
from wordspine.framework.logging.timing import StepTimer, log_step

__all__ = [
    # Configuration
    "configure_logging",
    "is_configured",
    # Context
    "get_logger",
    "set_context",
    "clear_context",
    "get_context",
    "bind_context",
    "push_context",
    "new_execution_id",
    "LogContext",
    # Timing
    "StepTimer",
    "log_step",
]
