"""
Wordspine - Lexical database ingestion primitives.

This package provides:
- wordspine.core: Records, errors, results, storage gateway and settings
- wordspine.execution: Bounded worker pool for key resolution
- wordspine.framework: Logging, lexical sources and the ingest pipeline
- wordspine.cli: ``wordspine`` command line
"""

__version__ = "0.1.0"
