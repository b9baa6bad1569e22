"""Conversion of raw transactions into normalized transactions."""
import itertools
from typing import Iterator, Optional

from ..analysis.models import Transaction
from .models import RawTransaction, Sign
from .normalizer import LocaleNormalizer

UNCATEGORIZED = "Other"


def id_sequence(prefix: str = "txn") -> Iterator[str]:
    """Identifiers unique within one analysis run."""
    return (f"{prefix}-{n:05d}" for n in itertools.count(1))


class TransactionFactory:
    """Builds Transactions from grammar output, validating every field."""

    def __init__(self, normalizer: LocaleNormalizer, ids: Optional[Iterator[str]] = None):
        self.normalizer = normalizer
        self.ids = ids or id_sequence()

    def from_raw(self, raw: RawTransaction) -> Transaction:
        """
        Normalize a raw transaction.

        Args:
            raw: Fields captured by a grammar

        Returns:
            Transaction with signed amount resolved

        Raises:
            InvalidRecordError: If date, amount or description fail validation
        """
        txn_date = self.normalizer.parse_date(raw.date_token)
        description = self.normalizer.clean_description(raw.description_token)
        amount = self.normalizer.parse_amount(
            raw.amount_token,
            allow_negative=raw.sign is Sign.REVERSAL
        )
        magnitude = abs(amount)

        if raw.sign is Sign.INFLOW:
            signed = magnitude
        else:
            # Outflows and reversals are both stored as negative expenses
            signed = -magnitude

        return Transaction(
            id=next(self.ids),
            date=txn_date,
            description=description,
            amount=magnitude,
            signed_amount=signed,
            category=UNCATEGORIZED,
            location=raw.location_label,
            is_reversal=raw.sign is Sign.REVERSAL,
            grammar=raw.grammar
        )
