"""Pydantic schema for the analysis result handed to callers."""
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CENT = Decimal("0.01")


def money(value) -> float:
    """Round a monetary value to 2 decimals as a plain number."""
    return float(Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP))


def percent(value) -> float:
    """Round a percentage to 2 decimals."""
    return money(value)


class ResultModel(BaseModel):
    """Base for result models: immutable, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class CategoryStat(ResultModel):
    """Expense statistics for one category."""
    name: str
    total_amount: float
    percentage_of_expenses: float
    transaction_count: int
    color_token: str


class MonthlyTrendPoint(ResultModel):
    """Income and expenses for one calendar month."""
    month: str = Field(description="Calendar month as YYYY-MM")
    income: float
    expenses: float
    savings: float


class DateRange(ResultModel):
    """First and last transaction dates."""
    start: datetime
    end: datetime


class Recommendation(ResultModel):
    """Rule-based piece of advice."""
    id: str
    category: str = Field(description="savings, spending-alert, praise or habit")
    title: str
    body: str
    impact: str
    priority: str = Field(description="high, medium or low")


class TransactionRecord(ResultModel):
    """Transaction as exposed in the result."""
    id: str
    date: datetime
    description: str
    amount: float
    signed_amount: float
    category: str
    type: str
    location: Optional[str] = None
    is_reversal: bool = False


class AnalysisResult(ResultModel):
    """Terminal artifact of one analysis run."""
    analysis_id: str
    dialect: Optional[str] = None
    total_income: float
    total_expenses: float
    total_savings: float
    savings_rate: float
    transaction_count: int
    average_transaction_amount: float
    transaction_frequency: Dict[str, int] = Field(default_factory=dict)
    date_range: Optional[DateRange] = None
    category_breakdown: List[CategoryStat] = Field(default_factory=list)
    monthly_trend: List[MonthlyTrendPoint] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
    transactions: List[TransactionRecord] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        """JSON-ready mapping: camelCase keys, plain numbers, ISO-8601 timestamps."""
        return self.model_dump(mode="json", by_alias=True)
