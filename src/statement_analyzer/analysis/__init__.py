"""Transaction analysis module."""
from .models import Transaction, INCOME, EXPENSE
from .schema import (
    AnalysisResult,
    CategoryStat,
    DateRange,
    MonthlyTrendPoint,
    Recommendation,
    TransactionRecord
)
from .categorizer import Categorizer
from .aggregator import Aggregator
from .recommendations import RecommendationGenerator

__all__ = [
    "Transaction",
    "INCOME",
    "EXPENSE",
    "AnalysisResult",
    "CategoryStat",
    "DateRange",
    "MonthlyTrendPoint",
    "Recommendation",
    "TransactionRecord",
    "Categorizer",
    "Aggregator",
    "RecommendationGenerator"
]
