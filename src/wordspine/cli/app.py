"""
Root Typer application for the wordspine CLI.

    wordspine ingest --db words.sqlite --concurrency 4
    wordspine ingest --source json --lexicon lexicon.json
    wordspine init-db --db words.sqlite
"""

from __future__ import annotations

from pathlib import Path

import typer
from typer import Typer

from wordspine.cli.utils import build_settings, console, output_error
from wordspine.core.result import Err, Ok, try_result
from wordspine.core.schema_loader import load_statements
from wordspine.core.settings import SourceKind
from wordspine.core.store import StoreGateway
from wordspine.framework.logging import configure_logging

app = Typer(
    name="wordspine",
    help="wordspine — load a lexical database into SQLite.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("wordspine")
        except PackageNotFoundError:
            from wordspine import __version__ as v
        typer.echo(f"wordspine {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """wordspine CLI — ingest WordNet into a SQLite words table."""


# ── Commands ─────────────────────────────────────────────────────────────


@app.command()
def ingest(
    database: str | None = typer.Option(None, "--db", "-d", help="SQLite database path"),
    concurrency: int | None = typer.Option(None, "--concurrency", "-c", help="Concurrent lookup workers"),
    source: SourceKind | None = typer.Option(None, "--source", "-s", help="Lexical source"),
    lexicon: Path | None = typer.Option(None, "--lexicon", help="JSON lexicon file (--source json)"),
    schema: Path | None = typer.Option(None, "--schema", help="Schema script override"),
    insert: Path | None = typer.Option(None, "--insert", help="Insert statement override"),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG | INFO | WARNING | ERROR"),
    log_format: str | None = typer.Option(None, "--log-format", help="console | json"),
) -> None:
    """Load every entry of the lexical source into the words table."""
    from wordspine.framework.pipelines import run_ingest

    settings = build_settings(
        database_path=database,
        concurrency=concurrency,
        source=source,
        lexicon_path=lexicon,
        schema_path=schema,
        insert_path=insert,
        log_level=log_level,
        log_format=log_format,
    )
    configure_logging(level=settings.log_level, format=settings.log_format, force=True)

    match run_ingest(settings):
        case Ok(summary):
            console.print(
                f"[green]✓[/green] Inserted {summary.records_inserted} records "
                f"from {summary.keys_processed} keys into {settings.database_path}"
            )
        case Err(error):
            output_error(error)


@app.command("init-db")
def init_db(
    database: str | None = typer.Option(None, "--db", "-d", help="SQLite database path"),
    schema: Path | None = typer.Option(None, "--schema", help="Schema script override"),
) -> None:
    """Create the words table if it does not exist."""
    settings = build_settings(database_path=database, schema_path=schema)

    def initialize() -> list[str]:
        statements = load_statements(settings.schema_path, settings.insert_path)
        with StoreGateway.open(settings.database_path, statements) as store:
            store.ensure_schema()
            return store.tables()

    match try_result(initialize):
        case Ok(tables):
            console.print(f"[green]✓[/green] Schema ready in {settings.database_path}: {', '.join(tables)}")
        case Err(error):
            output_error(error)


if __name__ == "__main__":
    app()
