"""
Report Builders

Compose the aggregation engine into the view models the Overview and
Analytics pages render. Like the engine, these take the reference date
as a parameter and never read the clock.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from financeflow.analytics import engine
from financeflow.models.expense import Budget, Expense
from financeflow.models.reports import (
    AnalyticsReport,
    BudgetProgress,
    CategoryTotal,
    OverviewReport,
    StatusBand,
)


def budget_progress(
    budgets: Sequence[Budget],
    breakdown: dict[str, Decimal],
) -> list[BudgetProgress]:
    """
    One row per budget, in budget order.

    Categories are matched by exact string equality. A budget with no
    spending gets a zero row; spending with no budget gets no row.

    Any spending against a zero limit is Over, even though its
    percentage is reported as 0.
    """
    rows = []
    for budget in budgets:
        spent = breakdown.get(budget.category, engine.ZERO)
        left = engine.remaining(budget.limit, spent)
        percentage = engine.percentage_of_limit(spent, budget.limit)
        rows.append(BudgetProgress(
            category=budget.category,
            limit=budget.limit,
            spent=spent,
            remaining=left,
            percentage=percentage,
            status=StatusBand.OVER if left < 0 else engine.status_band(percentage),
        ))
    return rows


def build_overview(
    expenses: Sequence[Expense],
    budgets: Sequence[Budget],
    reference_date: date,
    recent_limit: int = 10,
) -> OverviewReport:
    """
    Build the Overview page for the reference month.

    Compares against the previous calendar month, which for January
    is December of the previous year.
    """
    year, month = reference_date.year, reference_date.month
    this_month = engine.filter_by_month(expenses, year, month)

    prior_year, prior_month = engine.shift_month(year, month, -1)
    prior_total = engine.total_amount(
        engine.filter_by_month(expenses, prior_year, prior_month)
    )

    total_spent = engine.total_amount(this_month)
    total_budget = engine.total_budget(budgets)

    return OverviewReport(
        year=year,
        month=month,
        total_spent=total_spent,
        total_budget=total_budget,
        remaining_budget=engine.remaining(total_budget, total_spent),
        percent_change=engine.percent_change_vs_prior_month(total_spent, prior_total),
        budget_progress=budget_progress(budgets, engine.category_breakdown(this_month)),
        recent_expenses=this_month[:recent_limit],
    )


def build_analytics(
    expenses: Sequence[Expense],
    budgets: Sequence[Budget],
    reference_date: date,
    months_back: int = engine.DEFAULT_TREND_MONTHS,
    top_n: int = engine.DEFAULT_TOP_CATEGORIES,
) -> AnalyticsReport:
    """
    Build the Analytics page for the reference month.

    Average daily spending divides by the reference day of month, so
    early in a month the projection swings widely. That is expected.
    """
    year, month = reference_date.year, reference_date.month
    this_month = engine.filter_by_month(expenses, year, month)
    month_days = engine.days_in_month(year, month)

    breakdown = engine.category_breakdown(this_month)
    total_spent = engine.total_amount(this_month)
    total_budget = engine.total_budget(budgets)

    avg_daily = engine.average_daily_spending(total_spent, reference_date.day)

    return AnalyticsReport(
        year=year,
        month=month,
        total_spent=total_spent,
        total_budget=total_budget,
        average_daily_spending=avg_daily,
        projected_monthly_spending=engine.projected_monthly_spending(avg_daily, month_days),
        budget_usage_percent=engine.budget_usage_ratio(total_spent, total_budget) * 100,
        category_count=len(breakdown),
        distribution=[
            CategoryTotal(category=category, amount=amount)
            for category, amount in breakdown.items()
        ],
        top_categories=engine.top_categories(breakdown, top_n),
        monthly_trend=engine.monthly_trend(expenses, budgets, reference_date, months_back),
        daily_series=engine.daily_series(this_month, month_days),
        category_summary=budget_progress(budgets, breakdown),
    )
