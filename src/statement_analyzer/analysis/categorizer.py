"""Keyword-driven transaction categorization."""
from collections import defaultdict
from dataclasses import replace
from decimal import Decimal
from typing import List, Optional

from ..config import KeywordTables, fold, get_keyword_tables
from ..utils.logger import get_logger
from .models import EXPENSE, Transaction
from .schema import CategoryStat, money, percent

logger = get_logger()


class Categorizer:
    """Assigns categories by first keyword match in table order."""

    def __init__(self, tables: Optional[KeywordTables] = None):
        self.tables = tables or get_keyword_tables()

    def classify(self, description: str, txn_type: Optional[str] = None) -> str:
        """
        Pick the category for a description.

        Args:
            description: Transaction description
            txn_type: income or expense; expenses never land in an income category

        Returns:
            First category with a case- and accent-insensitive keyword match, else the catch-all
        """
        folded = fold(description)
        for category, keywords in self.tables.categories:
            if txn_type == EXPENSE and category in self.tables.income_categories:
                continue
            for keyword in keywords:
                if keyword in folded:
                    return category
        return self.tables.fallback_category

    def categorize(self, transactions: List[Transaction]) -> List[Transaction]:
        """Return copies of the transactions with their category set."""
        categorized = [
            replace(txn, category=self.classify(txn.description, txn.type))
            for txn in transactions
        ]
        logger.debug(f"Categorized {len(categorized)} transactions")
        return categorized

    def category_stats(self, transactions: List[Transaction]) -> List[CategoryStat]:
        """
        Compute per-category expense statistics.

        Only expense transactions count, reversals netted into their
        category. Shares are taken over the sum of absolute category totals,
        so they add up to 100 even when reversals outweigh purchases.
        Sorted by total amount, descending; colors follow the palette in
        that order.
        """
        totals = defaultdict(Decimal)
        counts = defaultdict(int)

        for txn in transactions:
            if txn.type != EXPENSE:
                continue
            totals[txn.category] += txn.expense_amount
            counts[txn.category] += 1

        magnitude = sum((abs(total) for total in totals.values()), Decimal(0))
        ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
        palette = self.tables.category_colors

        return [
            CategoryStat(
                name=name,
                total_amount=money(total),
                percentage_of_expenses=percent(abs(total) / magnitude * 100) if magnitude > 0 else 0.0,
                transaction_count=counts[name],
                color_token=palette[index % len(palette)]
            )
            for index, (name, total) in enumerate(ranked)
        ]
