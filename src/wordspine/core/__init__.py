"""
Wordspine core - records, errors, results and the destination store.

Everything here is free of logging configuration and lexical-source
specifics; the framework and execution packages build on it.
"""

from wordspine.core.errors import (
    ErrorCategory,
    ErrorContext,
    InsertError,
    InvalidConfigError,
    KeyNotFoundError,
    LookupFailedError,
    SourceUnavailableError,
    StoreInitError,
    WordspineError,
)
from wordspine.core.models import Definition, Record, Summary
from wordspine.core.result import Err, Ok, Result, try_result
from wordspine.core.schema_loader import SqlStatements, load_statements
from wordspine.core.store import StoreGateway
from wordspine.core.transform import flatten, flatten_all

__all__ = [
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "WordspineError",
    "SourceUnavailableError",
    "LookupFailedError",
    "KeyNotFoundError",
    "StoreInitError",
    "InsertError",
    "InvalidConfigError",
    # Models
    "Definition",
    "Record",
    "Summary",
    # Result
    "Result",
    "Ok",
    "Err",
    "try_result",
    # Store
    "SqlStatements",
    "load_statements",
    "StoreGateway",
    # Transform
    "flatten",
    "flatten_all",
]
