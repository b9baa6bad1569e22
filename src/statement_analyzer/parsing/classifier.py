"""Noise filtering ahead of grammar matching."""
from typing import Dict, Iterable, List, Optional

from ..config import KeywordTables, get_keyword_tables
from ..utils.logger import get_logger
from .models import ClassifiedLine, Dialect, TextLine

logger = get_logger()

DEFAULT_MIN_LENGTH = {
    Dialect.CREDIT_STATEMENT.value: 30,
    Dialect.RUNNING_LEDGER.value: 20,
}

TOO_SHORT = "too-short"
NOISE_SIGNATURE = "noise-signature"


class LineClassifier:
    """Tags lines as transaction candidates or noise."""

    def __init__(
        self,
        tables: Optional[KeywordTables] = None,
        min_line_length: Optional[Dict[str, int]] = None
    ):
        """
        Initialize classifier.

        Args:
            tables: Keyword tables holding the noise signatures
            min_line_length: Minimum candidate length per dialect name
        """
        self.tables = tables or get_keyword_tables()
        self.min_line_length = dict(DEFAULT_MIN_LENGTH)
        if min_line_length:
            self.min_line_length.update(min_line_length)

    def classify(self, line: TextLine, dialect: Dialect) -> ClassifiedLine:
        """
        Classify a single line.

        Args:
            line: Line to classify
            dialect: Detected statement dialect

        Returns:
            ClassifiedLine with the discard reason for noise
        """
        content = line.content.strip()

        if len(content) < self.min_line_length[dialect.value]:
            return ClassifiedLine(line, False, TOO_SHORT)

        for pattern in self.tables.noise_signatures.get(dialect.value, ()):
            if pattern.search(content):
                return ClassifiedLine(line, False, NOISE_SIGNATURE)

        return ClassifiedLine(line, True)

    def classify_all(self, lines: Iterable[TextLine], dialect: Dialect) -> List[ClassifiedLine]:
        """Classify every line, keeping document order."""
        classified = [self.classify(line, dialect) for line in lines]
        noise = sum(1 for c in classified if not c.is_candidate)
        logger.debug(f"Classified {len(classified)} lines: {noise} noise")
        return classified
