"""Removal of repeated transactions."""
from typing import List, Tuple

from ..analysis.models import Transaction


def deduplicate(transactions: List[Transaction]) -> Tuple[List[Transaction], int]:
    """
    Drop transactions repeating an earlier (date, description, signed amount).

    Keeps the first occurrence in document order.

    Returns:
        Tuple of (unique transactions, number removed)
    """
    seen = set()
    unique = []

    for txn in transactions:
        key = (txn.date, txn.description, txn.signed_amount)
        if key in seen:
            continue
        seen.add(key)
        unique.append(txn)

    return unique, len(transactions) - len(unique)
