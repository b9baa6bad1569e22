"""Heuristic extraction, categorization and analysis of financial statements."""
from .analysis import AnalysisResult, Recommendation, Transaction
from .config import AppSettings, KeywordTables, get_keyword_tables, get_settings
from .extraction import DocumentLoader
from .orchestrator import StatementPipeline
from .parsing import Diagnostics, Dialect, DocumentKind, RawDocument
from .utils.exceptions import (
    StatementAnalyzerError,
    UnsupportedKindError,
    EmptyInputError,
    NoTransactionsFoundError
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "Recommendation",
    "Transaction",
    "AppSettings",
    "KeywordTables",
    "get_keyword_tables",
    "get_settings",
    "DocumentLoader",
    "StatementPipeline",
    "Diagnostics",
    "Dialect",
    "DocumentKind",
    "RawDocument",
    "StatementAnalyzerError",
    "UnsupportedKindError",
    "EmptyInputError",
    "NoTransactionsFoundError"
]
