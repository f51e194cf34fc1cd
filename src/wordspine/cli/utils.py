"""
CLI utility helpers - settings resolution and output formatting.
"""

from __future__ import annotations

from typing import Any, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from wordspine.core.errors import InvalidConfigError, WordspineError
from wordspine.core.settings import IngestSettings

console = Console()
err_console = Console(stderr=True)


# ── Settings helper ──────────────────────────────────────────────────────


def build_settings(**overrides: Any) -> IngestSettings:
    """
    Resolve settings from the environment with CLI flags on top.

    Flags left at ``None`` fall through to ``WORDSPINE_*`` / defaults.
    Validation failures exit with code 1.
    """
    explicit = {name: value for name, value in overrides.items() if value is not None}
    try:
        return IngestSettings(**explicit)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "settings"
        output_error(InvalidConfigError(field, first.get("input"), f"Invalid {field}: {first.get('msg')}"))


# ── Output helpers ───────────────────────────────────────────────────────


def output_error(error: Exception) -> NoReturn:
    """Print a fatal error and exit with code 1."""
    if isinstance(error, WordspineError):
        err_console.print(f"[bold red]Error[/bold red] ({type(error).__name__}): {escape(error.message)}")
        context = error.context.to_dict()
        if context:
            details = "  ".join(f"{k}={v}" for k, v in context.items())
            err_console.print(f"  [dim]{escape(details)}[/dim]")
        if error.cause is not None:
            err_console.print(f"  [dim]caused by {type(error.cause).__name__}: {escape(str(error.cause))}[/dim]")
    else:
        err_console.print(f"[bold red]Error[/bold red] ({type(error).__name__}): {escape(str(error))}")
    raise typer.Exit(code=1)
