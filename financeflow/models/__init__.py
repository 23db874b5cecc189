"""
Data Models Package

This package contains all Pydantic models used in FinanceFlow.
Stored records, derived views, and audit events all live here.
"""

from financeflow.models.expense import (
    BUDGET_CATEGORY_OPTIONS,
    EXPENSE_CATEGORIES,
    Budget,
    Expense,
    ExpenseFormResult,
    UserRecord,
    ValidationIssue,
)
from financeflow.models.reports import (
    AnalyticsReport,
    BudgetProgress,
    CategoryTotal,
    DailySpending,
    MonthlyTrendPoint,
    OverviewReport,
    StatusBand,
)
from financeflow.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Stored records
    "BUDGET_CATEGORY_OPTIONS",
    "EXPENSE_CATEGORIES",
    "Budget",
    "Expense",
    "ExpenseFormResult",
    "UserRecord",
    "ValidationIssue",
    # Derived views
    "AnalyticsReport",
    "BudgetProgress",
    "CategoryTotal",
    "DailySpending",
    "MonthlyTrendPoint",
    "OverviewReport",
    "StatusBand",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
