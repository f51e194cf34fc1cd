"""
Logging configuration.

structlog renders every entry and hands it to stdlib logging, which writes
to stderr; stdout stays free for command output. Level and format come
from arguments, else from the environment:

- WORDSPINE_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: INFO)
- WORDSPINE_LOG_FORMAT: json | console (default: console)

Usage:
    from wordspine.framework.logging import configure_logging

    configure_logging()                              # from env
    configure_logging(level="DEBUG", format="json")  # explicit
"""

import logging
import os
import sys
from typing import Literal

import structlog
from structlog.types import Processor

from wordspine.framework.logging.context import add_context_processor

_configured = False


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the process.

    Called once at startup (CLI entry). Later calls are no-ops unless
    ``force=True``.

    Args:
        level: Log level (overrides WORDSPINE_LOG_LEVEL)
        format: Output format (overrides WORDSPINE_LOG_FORMAT)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    log_level = getattr(logging, (level or os.environ.get("WORDSPINE_LOG_LEVEL", "INFO")).upper())
    log_format = (format or os.environ.get("WORDSPINE_LOG_FORMAT", "console")).lower()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            add_context_processor,
            structlog.processors.format_exc_info,
            _renderer(log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level, force=True)
    logging.getLogger("wordspine").setLevel(log_level)

    _configured = True


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured
