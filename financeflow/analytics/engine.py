"""
Aggregation Engine

DESIGN DECISION: Every function here is PURE.
- Inputs are never mutated
- The reference date is always a parameter; nothing reads the clock
- Same input, same output

"Current month" always means calendar (year, month) equality with the
reference date, never "the last 30 days".

Division guards return 0 instead of raising or producing infinities:
an empty budget or a zero prior month is an ordinary state, not an error.
"""

import calendar
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from financeflow.models.expense import Budget, Expense
from financeflow.models.reports import (
    CategoryTotal,
    DailySpending,
    MonthlyTrendPoint,
    StatusBand,
)


ZERO = Decimal("0")
CENT = Decimal("0.01")

# Fixed design constants
WARNING_THRESHOLD = Decimal("80")
OVER_THRESHOLD = Decimal("100")
DEFAULT_TREND_MONTHS = 6
DEFAULT_TOP_CATEGORIES = 5
DAILY_SERIES_MAX_DAYS = 30


def _to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


# =============================================================================
# CALENDAR HELPERS
# =============================================================================

def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """
    Move `offset` calendar months from (year, month).

    Rolls over year boundaries in both directions:
    shift_month(2025, 1, -1) == (2024, 12).
    """
    index = year * 12 + (month - 1) + offset
    new_year, month_index = divmod(index, 12)
    return new_year, month_index + 1


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


# =============================================================================
# FILTERING AND TOTALS
# =============================================================================

def filter_by_month(
    expenses: Iterable[Expense],
    year: int,
    month: int,
) -> list[Expense]:
    """Expenses dated in the given calendar month, order preserved."""
    return [
        expense for expense in expenses
        if expense.date.year == year and expense.date.month == month
    ]


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    return sum((expense.amount for expense in expenses), ZERO)


def total_budget(budgets: Iterable[Budget]) -> Decimal:
    """Sum of all budget limits."""
    return sum((budget.limit for budget in budgets), ZERO)


def category_breakdown(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """
    Total spent per category.

    Keys appear in first-seen order. Only categories that actually
    occur in `expenses` get an entry; there are no zero rows for
    budgets without spending.
    """
    breakdown: dict[str, Decimal] = {}
    for expense in expenses:
        breakdown[expense.category] = (
            breakdown.get(expense.category, ZERO) + expense.amount
        )
    return breakdown


# =============================================================================
# SERIES
# =============================================================================

def monthly_trend(
    expenses: Sequence[Expense],
    budgets: Iterable[Budget],
    reference_date: date,
    months_back: int = DEFAULT_TREND_MONTHS,
) -> list[MonthlyTrendPoint]:
    """
    Spending per month for the `months_back` months ending at the
    reference month, oldest first.

    The budget total is the current budget configuration's total and is
    the same for every point.
    """
    budget_sum = total_budget(budgets)
    points = []

    for offset in range(months_back - 1, -1, -1):
        year, month = shift_month(reference_date.year, reference_date.month, -offset)
        spent = total_amount(filter_by_month(expenses, year, month))
        points.append(MonthlyTrendPoint(
            year=year,
            month=month,
            month_label=calendar.month_abbr[month],
            spent=_to_cents(spent),
            budget_total=budget_sum,
        ))

    return points


def daily_series(
    expenses_this_month: Iterable[Expense],
    days_in_month: int,
) -> list[DailySpending]:
    """
    Spending per day of the month.

    One entry per day from 1 to min(days_in_month, 30). Day 31 is
    dropped; the chart has always been capped at 30 bars.
    """
    per_day: dict[int, Decimal] = {}
    for expense in expenses_this_month:
        day = expense.date.day
        per_day[day] = per_day.get(day, ZERO) + expense.amount

    return [
        DailySpending(day=day, amount=_to_cents(per_day.get(day, ZERO)))
        for day in range(1, min(days_in_month, DAILY_SERIES_MAX_DAYS) + 1)
    ]


def top_categories(
    breakdown: Mapping[str, Decimal],
    n: int = DEFAULT_TOP_CATEGORIES,
) -> list[CategoryTotal]:
    """
    The `n` biggest categories, largest first.

    sorted() is stable, so equal amounts keep their first-seen order.
    """
    ranked = sorted(breakdown.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryTotal(category=category, amount=amount)
        for category, amount in ranked[:n]
    ]


# =============================================================================
# RATIOS AND PROJECTIONS
# =============================================================================

def average_daily_spending(total_spent_this_month: Decimal, day_of_month: int) -> Decimal:
    """Spending so far divided by days elapsed; 0 when no day has elapsed."""
    if day_of_month <= 0:
        return ZERO
    return total_spent_this_month / day_of_month


def projected_monthly_spending(avg_daily: Decimal, days_in_month: int) -> Decimal:
    return avg_daily * days_in_month


def budget_usage_ratio(total_spent: Decimal, total_budget: Decimal) -> Decimal:
    """Fraction of the total budget used; 0 when there is no budget."""
    if total_budget == 0:
        return ZERO
    return total_spent / total_budget


def percentage_of_limit(spent: Decimal, limit: Decimal) -> Decimal:
    """Percent of a single budget limit used; 0 when the limit is 0."""
    if limit == 0:
        return ZERO
    return spent / limit * 100


def remaining(budget_limit: Decimal, category_spent: Decimal) -> Decimal:
    """
    What is left of a limit. Negative means over budget; callers show
    the absolute value with a status label.
    """
    return budget_limit - category_spent


def status_band(percentage: Decimal) -> StatusBand:
    """
    Classify a percentage of limit.

    Over above 100, Warning above 80 up to and including 100,
    On Track otherwise.
    """
    if percentage > OVER_THRESHOLD:
        return StatusBand.OVER
    if percentage > WARNING_THRESHOLD:
        return StatusBand.WARNING
    return StatusBand.ON_TRACK


def percent_change_vs_prior_month(current_total: Decimal, prior_total: Decimal) -> Decimal:
    """Percent change from the prior month; 0 when the prior month is 0."""
    if prior_total == 0:
        return ZERO
    return (current_total - prior_total) / prior_total * 100
