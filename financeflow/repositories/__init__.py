"""Store-backed repositories for expenses and budgets."""

from financeflow.repositories.budgets import (
    BUDGETS_KEY,
    BudgetDraft,
    BudgetRepository,
    demo_budgets,
)
from financeflow.repositories.expenses import (
    EXPENSES_KEY,
    ExpenseRepository,
    demo_expenses,
)

__all__ = [
    "BUDGETS_KEY",
    "EXPENSES_KEY",
    "BudgetDraft",
    "BudgetRepository",
    "ExpenseRepository",
    "demo_budgets",
    "demo_expenses",
]
