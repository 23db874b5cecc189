"""Record builders shared by the test modules."""

from datetime import datetime
from decimal import Decimal

from financeflow.models.expense import Budget, Expense


FIXED_NOW = datetime(2026, 10, 18, 12, 0, 0)


def make_expense(
    amount: str,
    category: str,
    when: datetime,
    expense_id: str = "",
    description: str = "",
) -> Expense:
    return Expense(
        id=expense_id or f"{category}-{when.isoformat()}-{amount}",
        amount=Decimal(amount),
        category=category,
        description=description or category,
        date=when,
    )


def make_budget(category: str, limit: str) -> Budget:
    return Budget(category=category, limit=Decimal(limit))
