"""Data models for statement parsing."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Dialect(str, Enum):
    """Family of statement layouts sharing noise filters and grammars."""
    CREDIT_STATEMENT = "credit_statement"
    RUNNING_LEDGER = "running_ledger"


class DocumentKind(str, Enum):
    """Declared kind of an incoming document."""
    TABULAR_DOCUMENT = "tabular-document"
    DELIMITED_TEXT = "delimited-text"
    SPREADSHEET = "spreadsheet"


class Sign(str, Enum):
    """Direction of money flow for a raw transaction."""
    OUTFLOW = "outflow"
    INFLOW = "inflow"
    REVERSAL = "reversal"


@dataclass(frozen=True)
class RawDocument:
    """Document handed over by the ingestion layer."""
    content: object  # str/bytes for tabular documents, list of row dicts otherwise
    declared_kind: str


@dataclass(frozen=True)
class TextLine:
    """One extracted line of statement text."""
    index: int
    content: str


@dataclass(frozen=True)
class ClassifiedLine:
    """Text line tagged as transaction candidate or noise."""
    line: TextLine
    is_candidate: bool
    reason: str = ""


@dataclass(frozen=True)
class RawTransaction:
    """Fields captured from a line by a single grammar."""
    location_label: Optional[str]
    date_token: str
    description_token: str
    amount_token: str
    sign: Sign
    grammar: str
    line_index: int = -1


@dataclass(frozen=True)
class UnmatchedLine:
    """Candidate line no grammar could parse."""
    line: TextLine
    date_fragment: Optional[str]


@dataclass
class Diagnostics:
    """Per-run counters for record-level failures."""
    total_lines: int = 0
    noise_lines: int = 0
    unmatched_lines: int = 0
    invalid_records: int = 0
    ambiguous_amounts: int = 0
    duplicates_removed: int = 0
    unmatched_samples: List[UnmatchedLine] = field(default_factory=list)
