"""Form validation package."""

from financeflow.validation.forms import (
    ExpenseFormValidator,
    parse_amount,
    parse_date,
)

__all__ = [
    "ExpenseFormValidator",
    "parse_amount",
    "parse_date",
]
