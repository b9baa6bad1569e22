"""Transaction aggregation module."""
from collections import Counter, defaultdict
from datetime import datetime, time
from decimal import Decimal
from typing import List, Optional

from ..utils.logger import get_logger
from .categorizer import Categorizer
from .models import INCOME, Transaction
from .schema import AnalysisResult, DateRange, MonthlyTrendPoint, TransactionRecord, money, percent

logger = get_logger()


class Aggregator:
    """Aggregates categorized transactions into an analysis result."""

    def __init__(self, categorizer: Optional[Categorizer] = None):
        self.categorizer = categorizer or Categorizer()

    def aggregate(
        self,
        transactions: List[Transaction],
        analysis_id: str,
        dialect: Optional[str] = None
    ) -> AnalysisResult:
        """
        Compute totals, breakdowns and trends.

        Args:
            transactions: Categorized, deduplicated transactions
            analysis_id: Identifier of this analysis run
            dialect: Statement dialect the transactions came from, if any

        Returns:
            AnalysisResult without recommendations
        """
        income = sum((t.signed_amount for t in transactions if t.type == INCOME), Decimal(0))
        # Reversals credit back spend; they never turn expenses into income
        expenses = max(sum((t.expense_amount for t in transactions), Decimal(0)), Decimal(0))
        savings = income - expenses
        savings_rate = savings / income * 100 if income > 0 else Decimal(0)

        average = (
            sum((abs(t.signed_amount) for t in transactions), Decimal(0)) / len(transactions)
            if transactions else Decimal(0)
        )

        result = AnalysisResult(
            analysis_id=analysis_id,
            dialect=dialect,
            total_income=money(income),
            total_expenses=money(expenses),
            total_savings=money(savings),
            savings_rate=percent(savings_rate),
            transaction_count=len(transactions),
            average_transaction_amount=money(average),
            transaction_frequency=dict(Counter(t.category for t in transactions)),
            date_range=self._date_range(transactions),
            category_breakdown=self.categorizer.category_stats(transactions),
            monthly_trend=self._monthly_trend(transactions),
            transactions=[self._record(t) for t in transactions]
        )

        logger.info(
            f"Aggregated {len(transactions)} transactions into "
            f"{len(result.category_breakdown)} expense categories "
            f"(income={result.total_income}, expenses={result.total_expenses})"
        )
        return result

    def _date_range(self, transactions: List[Transaction]) -> Optional[DateRange]:
        """First and last transaction dates, as midnight timestamps."""
        if not transactions:
            return None
        dates = sorted(t.date for t in transactions)
        return DateRange(
            start=datetime.combine(dates[0], time.min),
            end=datetime.combine(dates[-1], time.min)
        )

    def _monthly_trend(self, transactions: List[Transaction]) -> List[MonthlyTrendPoint]:
        """Per-month income, expenses and savings, oldest month first."""
        income = defaultdict(Decimal)
        expenses = defaultdict(Decimal)

        for txn in transactions:
            month = f"{txn.date.year:04d}-{txn.date.month:02d}"
            if txn.type == INCOME:
                income[month] += txn.signed_amount
            else:
                expenses[month] += txn.expense_amount

        trend = []
        for month in sorted(set(income) | set(expenses)):
            spent = max(expenses[month], Decimal(0))
            trend.append(MonthlyTrendPoint(
                month=month,
                income=money(income[month]),
                expenses=money(spent),
                savings=money(income[month] - spent)
            ))
        return trend

    @staticmethod
    def _record(txn: Transaction) -> TransactionRecord:
        return TransactionRecord(
            id=txn.id,
            date=datetime.combine(txn.date, time.min),
            description=txn.description,
            amount=money(txn.amount),
            signed_amount=money(txn.signed_amount),
            category=txn.category,
            type=txn.type,
            location=txn.location,
            is_reversal=txn.is_reversal
        )
