"""First-match-wins dispatch over the dialect's ordered grammars."""
import re
from typing import Dict, Optional, Sequence

from ..config import KeywordTables, fold, get_keyword_tables
from ..utils.logger import get_logger
from .grammars import GRAMMARS, Grammar
from .models import Dialect, RawTransaction, Sign, TextLine

logger = get_logger()

DATE_FRAGMENT = re.compile(r"\d{1,2}/\d{1,2}(?:/\d{4})?")


class CascadingMatcher:
    """Parses candidate lines into raw transactions."""

    def __init__(
        self,
        tables: Optional[KeywordTables] = None,
        grammars: Optional[Dict[Dialect, Sequence[Grammar]]] = None
    ):
        """
        Initialize matcher.

        Args:
            tables: Keyword tables holding the expense keywords
            grammars: Ordered grammar list per dialect
        """
        self.tables = tables or get_keyword_tables()
        self.grammars = grammars or GRAMMARS

    def match(self, line: TextLine, dialect: Dialect) -> Optional[RawTransaction]:
        """
        Parse a line with the first grammar that accepts it.

        Args:
            line: Candidate line
            dialect: Detected statement dialect

        Returns:
            RawTransaction, or None if no grammar matched

        Raises:
            AmbiguousAmountError: If the winning grammar cannot isolate the amount
        """
        content = line.content.strip()

        for grammar in self.grammars[dialect]:
            parsed = grammar.parse(content)
            if parsed is None:
                continue

            logger.debug(f"Line {line.index} matched grammar '{grammar.name}'")
            return RawTransaction(
                location_label=parsed.location,
                date_token=parsed.date,
                description_token=parsed.description,
                amount_token=parsed.amount,
                sign=self._resolve_sign(grammar, parsed.description, parsed.amount, dialect),
                grammar=grammar.name,
                line_index=line.index
            )

        return None

    def _resolve_sign(self, grammar: Grammar, description: str, amount: str, dialect: Dialect) -> Sign:
        """Credit statement lines are outflows; ledger lines follow the expense keywords."""
        if dialect is Dialect.CREDIT_STATEMENT:
            if grammar.allows_negative and amount.strip().startswith("-"):
                return Sign.REVERSAL
            return Sign.OUTFLOW

        if self.is_expense(description):
            return Sign.OUTFLOW
        # No expense keyword: treated as income
        return Sign.INFLOW

    def is_expense(self, description: str) -> bool:
        """Check a description against the expense keyword list."""
        folded = fold(description)
        return any(keyword in folded for keyword in self.tables.expense_keywords)

    @staticmethod
    def date_fragment(content: str) -> Optional[str]:
        """Find any date-looking fragment, for diagnostics on unmatched lines."""
        match = DATE_FRAGMENT.search(content)
        return match.group(0) if match else None
