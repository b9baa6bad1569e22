"""Utility modules."""
from .logger import get_logger, configure_logging, set_analysis_context
from .exceptions import (
    StatementAnalyzerError,
    ConfigError,
    ExtractionError,
    UnsupportedKindError,
    EmptyInputError,
    NoTransactionsFoundError,
    InvalidRecordError,
    AmbiguousAmountError
)

__all__ = [
    "get_logger",
    "configure_logging",
    "set_analysis_context",
    "StatementAnalyzerError",
    "ConfigError",
    "ExtractionError",
    "UnsupportedKindError",
    "EmptyInputError",
    "NoTransactionsFoundError",
    "InvalidRecordError",
    "AmbiguousAmountError"
]
