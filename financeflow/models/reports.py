"""
Derived View Models

These are the shapes the aggregation engine and report builders hand to
the presentation layer. Nothing here is persisted.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from financeflow.models.expense import Expense


class StatusBand(str, Enum):
    """
    Budget health label derived from percentage of limit used.
    
    Thresholds are fixed: above 80% is a warning, above 100% is over.
    """
    ON_TRACK = "on_track"
    WARNING = "warning"
    OVER = "over"


class MonthlyTrendPoint(BaseModel):
    """Spending for one calendar month against the current budget total."""
    
    year: int
    month: int = Field(ge=1, le=12)
    month_label: str = Field(
        ...,
        description="Short month name, e.g. 'Jan'"
    )
    spent: Decimal
    budget_total: Decimal


class DailySpending(BaseModel):
    """Total spent on one day of the month."""
    
    day: int = Field(ge=1, le=31)
    amount: Decimal


class CategoryTotal(BaseModel):
    """Total spent in one category."""
    
    category: str
    amount: Decimal


class BudgetProgress(BaseModel):
    """
    One budget row on the overview and in the category summary table.
    
    `remaining` keeps its sign; the UI shows the absolute value next to
    an "Over budget" / "Available" label driven by `over_budget`.
    """
    
    category: str
    limit: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: Decimal
    status: StatusBand
    
    @property
    def over_budget(self) -> bool:
        return self.remaining < 0


class OverviewReport(BaseModel):
    """Everything the Overview tab shows for one reference month."""
    
    year: int
    month: int
    total_spent: Decimal
    total_budget: Decimal
    remaining_budget: Decimal
    percent_change: Decimal = Field(
        ...,
        description="Change in spending against the prior calendar month, in percent"
    )
    budget_progress: list[BudgetProgress] = Field(default_factory=list)
    recent_expenses: list[Expense] = Field(default_factory=list)
    
    @property
    def over_budget(self) -> bool:
        return self.remaining_budget < 0


class AnalyticsReport(BaseModel):
    """Everything the Analytics tab shows for one reference month."""
    
    year: int
    month: int
    total_spent: Decimal
    total_budget: Decimal
    average_daily_spending: Decimal
    projected_monthly_spending: Decimal
    budget_usage_percent: Decimal
    category_count: int = Field(ge=0)
    distribution: list[CategoryTotal] = Field(default_factory=list)
    top_categories: list[CategoryTotal] = Field(default_factory=list)
    monthly_trend: list[MonthlyTrendPoint] = Field(default_factory=list)
    daily_series: list[DailySpending] = Field(default_factory=list)
    category_summary: list[BudgetProgress] = Field(default_factory=list)
