"""Statement parsing module."""
from .models import (
    Dialect,
    DocumentKind,
    Sign,
    RawDocument,
    TextLine,
    ClassifiedLine,
    RawTransaction,
    UnmatchedLine,
    Diagnostics
)
from .normalizer import LocaleNormalizer
from .dialects import DialectDetector
from .classifier import LineClassifier
from .grammars import Grammar, GRAMMARS, GRAMMAR_ORDER, select_ledger_amount
from .matcher import CascadingMatcher
from .records import TransactionFactory
from .rows import RowReader
from .dedup import deduplicate

__all__ = [
    "Dialect",
    "DocumentKind",
    "Sign",
    "RawDocument",
    "TextLine",
    "ClassifiedLine",
    "RawTransaction",
    "UnmatchedLine",
    "Diagnostics",
    "LocaleNormalizer",
    "DialectDetector",
    "LineClassifier",
    "Grammar",
    "GRAMMARS",
    "GRAMMAR_ORDER",
    "select_ledger_amount",
    "CascadingMatcher",
    "TransactionFactory",
    "RowReader",
    "deduplicate"
]
