"""
CLI layer for wordspine.

Provides a Typer application whose commands delegate to the ingest
pipeline (``wordspine.framework.pipelines``). This package handles only
terminal transport: argument parsing and coloured output.

Entry point::

    wordspine --help
"""
