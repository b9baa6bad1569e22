"""Statement dialect detection."""
from typing import Dict, Optional, Tuple

from ..config import KeywordTables, fold, get_keyword_tables
from ..utils.logger import get_logger
from .models import Dialect

logger = get_logger()


class DialectDetector:
    """Picks the grammar family by scoring indicator keywords."""

    def __init__(self, tables: Optional[KeywordTables] = None):
        self.tables = tables or get_keyword_tables()

    def score(self, text: str) -> Dict[Dialect, int]:
        """
        Count case- and accent-insensitive indicator occurrences per dialect.

        Args:
            text: Full extracted statement text

        Returns:
            Occurrence count for each dialect
        """
        folded = fold(text or "")
        return {
            dialect: sum(
                folded.count(keyword)
                for keyword in self.tables.dialect_indicators.get(dialect.value, ())
            )
            for dialect in Dialect
        }

    def detect(self, text: str) -> Tuple[Dialect, Dict[Dialect, int]]:
        """
        Select the dialect with the higher score.

        Ties go to the credit statement dialect.
        """
        scores = self.score(text)
        if scores[Dialect.RUNNING_LEDGER] > scores[Dialect.CREDIT_STATEMENT]:
            dialect = Dialect.RUNNING_LEDGER
        else:
            dialect = Dialect.CREDIT_STATEMENT

        logger.debug(
            f"Dialect scores: credit={scores[Dialect.CREDIT_STATEMENT]} "
            f"ledger={scores[Dialect.RUNNING_LEDGER]} -> {dialect.value}"
        )
        return dialect, scores
