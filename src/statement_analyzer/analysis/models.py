"""Data models for transaction analysis."""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

INCOME = "income"
EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    """Normalized transaction."""
    id: str
    date: date
    description: str
    amount: Decimal  # unsigned magnitude
    signed_amount: Decimal
    category: str
    location: Optional[str] = None
    is_reversal: bool = False
    grammar: Optional[str] = None

    @property
    def type(self) -> str:
        """income for positive signed amounts, expense otherwise."""
        return INCOME if self.signed_amount > 0 else EXPENSE

    @property
    def expense_amount(self) -> Decimal:
        """Contribution to total expenses; reversals credit back prior spend."""
        if self.type != EXPENSE:
            return Decimal(0)
        return -self.amount if self.is_reversal else self.amount
