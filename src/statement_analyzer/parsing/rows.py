"""Column location and conversion for delimited and spreadsheet rows."""
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..analysis.models import Transaction
from ..config import KeywordTables, get_keyword_tables
from ..utils.exceptions import InvalidRecordError
from ..utils.logger import get_logger
from .normalizer import LocaleNormalizer, is_missing
from .records import UNCATEGORIZED, id_sequence

logger = get_logger()


class RowReader:
    """Reads transactions out of already parsed rows (ordered field maps)."""

    def __init__(
        self,
        normalizer: LocaleNormalizer,
        tables: Optional[KeywordTables] = None,
        ids: Optional[Iterator[str]] = None
    ):
        self.normalizer = normalizer
        self.tables = tables or get_keyword_tables()
        self.ids = ids or id_sequence()

    def find_column(self, row: Mapping, field: str) -> Optional[str]:
        """
        Locate the header for a field by substring match against its synonyms.

        Synonyms are tried in table order; the first header containing one wins.

        Args:
            row: Field map for one row
            field: One of date, description, amount, debit, credit

        Returns:
            Matching header name or None
        """
        for synonym in self.tables.column_synonyms.get(field, ()):
            for key in row.keys():
                if synonym in str(key).lower():
                    return key
        return None

    def locate_columns(self, row: Mapping) -> Dict[str, Optional[str]]:
        """Locate every known column in a row."""
        columns = {
            field: self.find_column(row, field)
            for field in ("date", "description", "amount", "debit", "credit")
        }
        # "Debit Amount" is a debit column, not a signed amount column
        if columns["amount"] in (columns["debit"], columns["credit"]):
            columns["amount"] = None
        return columns

    def read_row(self, row: Mapping) -> Transaction:
        """
        Convert one row into a transaction.

        Raises:
            InvalidRecordError: If required columns are missing or values are invalid
        """
        columns = self.locate_columns(row)
        if not columns["date"] or not columns["description"]:
            raise InvalidRecordError(f"Row lacks date or description column: {list(row.keys())}")

        if columns["amount"]:
            signed = self.normalizer.parse_row_amount(row[columns["amount"]])
        elif columns["debit"] or columns["credit"]:
            debit = self.normalizer.parse_row_amount(row[columns["debit"]]) if columns["debit"] else 0
            credit = self.normalizer.parse_row_amount(row[columns["credit"]]) if columns["credit"] else 0
            signed = credit - abs(debit)
        else:
            raise InvalidRecordError(f"Row lacks amount columns: {list(row.keys())}")

        if signed == 0:
            raise InvalidRecordError("Row amount is zero")

        description = self.normalizer.clean_description(_cell_text(row[columns["description"]]))
        txn_date = self.normalizer.parse_row_date(row[columns["date"]])

        return Transaction(
            id=next(self.ids),
            date=txn_date,
            description=description,
            amount=abs(signed),
            signed_amount=signed,
            category=UNCATEGORIZED
        )

    def read_rows(self, rows: Sequence[Mapping]) -> Tuple[List[Transaction], int]:
        """
        Convert rows, skipping invalid ones.

        Returns:
            Tuple of (transactions, number of invalid rows)
        """
        transactions = []
        invalid = 0

        for index, row in enumerate(rows):
            if not isinstance(row, Mapping):
                invalid += 1
                logger.debug(f"Row {index} is not a field map, skipping")
                continue
            try:
                transactions.append(self.read_row(row))
            except InvalidRecordError as e:
                invalid += 1
                logger.debug(f"Row {index} skipped: {e}")

        return transactions, invalid


def _cell_text(value) -> str:
    """Text of a cell, with empty, NaN and NaT cells as ''."""
    if is_missing(value):
        return ""
    return str(value)
