"""
Wordspine Framework - Application infrastructure for the ingest pipeline.

This module provides:
- Structured logging with context
- The observability port (IngestObserver)
- Lexical source adapters (WordNet, JSON, in-memory)
- The ingest pipeline

Submodules are imported directly to avoid circular imports:
    from wordspine.framework.pipelines import IngestPipeline
    from wordspine.framework.sources import WordNetSource
"""
