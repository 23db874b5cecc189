"""
Tests for the aggregation engine.

The engine has no state, so these tests lean on purity: same input,
same output, inputs untouched.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from financeflow.analytics import engine
from financeflow.models.reports import StatusBand

from helpers import make_budget, make_expense


@pytest.fixture
def october_expenses():
    return [
        make_expense("45.50", "Food & Dining", datetime(2026, 10, 18, 9, 30)),
        make_expense("120.00", "Transportation", datetime(2026, 10, 17)),
        make_expense("25.00", "Entertainment", datetime(2026, 10, 16)),
        make_expense("14.50", "Food & Dining", datetime(2026, 10, 2)),
    ]


class TestCalendarHelpers:
    """Tests for month arithmetic."""

    def test_shift_month_back_across_year(self):
        assert engine.shift_month(2025, 1, -1) == (2024, 12)

    def test_shift_month_forward_across_year(self):
        assert engine.shift_month(2024, 12, 1) == (2025, 1)

    def test_shift_month_more_than_a_year(self):
        assert engine.shift_month(2025, 3, -15) == (2023, 12)

    def test_shift_month_zero_offset(self):
        assert engine.shift_month(2026, 10, 0) == (2026, 10)

    def test_days_in_month_leap_february(self):
        assert engine.days_in_month(2024, 2) == 29
        assert engine.days_in_month(2025, 2) == 28
        assert engine.days_in_month(2026, 10) == 31


class TestFilteringAndTotals:
    """Tests for month filtering, totals and category breakdown."""

    def test_filter_by_month_uses_year_and_month(self):
        """Same month in another year is excluded."""
        expenses = [
            make_expense("10", "Food & Dining", datetime(2026, 10, 1)),
            make_expense("20", "Food & Dining", datetime(2026, 9, 30)),
            make_expense("30", "Food & Dining", datetime(2025, 10, 15)),
            make_expense("40", "Shopping", datetime(2026, 10, 31, 23, 59)),
        ]
        result = engine.filter_by_month(expenses, 2026, 10)
        assert [e.amount for e in result] == [Decimal("10"), Decimal("40")]

    def test_total_amount_empty_is_zero(self):
        assert engine.total_amount([]) == Decimal("0")

    def test_total_amount(self, october_expenses):
        assert engine.total_amount(october_expenses) == Decimal("205.00")

    def test_total_budget(self):
        budgets = [make_budget("Food & Dining", "500"), make_budget("Shopping", "400")]
        assert engine.total_budget(budgets) == Decimal("900")

    def test_category_breakdown_first_seen_order(self, october_expenses):
        breakdown = engine.category_breakdown(october_expenses)
        assert list(breakdown) == ["Food & Dining", "Transportation", "Entertainment"]
        assert breakdown["Food & Dining"] == Decimal("60.00")

    def test_category_breakdown_sums_to_total(self, october_expenses):
        """Group sums always add up to the overall total."""
        breakdown = engine.category_breakdown(october_expenses)
        assert sum(breakdown.values()) == engine.total_amount(october_expenses)

    def test_category_breakdown_has_no_zero_rows(self):
        breakdown = engine.category_breakdown([])
        assert breakdown == {}

    def test_functions_do_not_mutate_input(self, october_expenses):
        snapshot = list(october_expenses)
        first = engine.category_breakdown(october_expenses)
        second = engine.category_breakdown(october_expenses)
        assert first == second
        assert october_expenses == snapshot


class TestMonthlyTrend:
    """Tests for the six-month trend."""

    def test_always_six_points_oldest_first(self, october_expenses):
        trend = engine.monthly_trend(october_expenses, [], date(2026, 10, 18))
        assert len(trend) == 6
        assert [p.month for p in trend] == [5, 6, 7, 8, 9, 10]
        assert trend[-1].spent == Decimal("205.00")
        assert all(p.spent == 0 for p in trend[:-1])

    def test_january_rolls_back_into_previous_year(self):
        """Reference January of Y starts the trend in August of Y-1."""
        trend = engine.monthly_trend([], [], date(2027, 1, 10))
        assert [(p.year, p.month) for p in trend] == [
            (2026, 8), (2026, 9), (2026, 10), (2026, 11), (2026, 12), (2027, 1),
        ]
        assert [p.month_label for p in trend] == ["Aug", "Sep", "Oct", "Nov", "Dec", "Jan"]

    def test_budget_total_is_constant(self):
        budgets = [make_budget("Food & Dining", "500"), make_budget("Healthcare", "250")]
        trend = engine.monthly_trend([], budgets, date(2026, 10, 18))
        assert {p.budget_total for p in trend} == {Decimal("750")}

    def test_december_spending_lands_in_december_point(self):
        expenses = [
            make_expense("80", "Shopping", datetime(2026, 12, 24)),
            make_expense("20", "Shopping", datetime(2027, 1, 3)),
        ]
        trend = engine.monthly_trend(expenses, [], date(2027, 1, 10))
        assert trend[-2].spent == Decimal("80.00")
        assert trend[-1].spent == Decimal("20.00")

    def test_spent_is_rounded_to_cents(self):
        expenses = [make_expense("10.005", "Other", datetime(2026, 10, 1))]
        trend = engine.monthly_trend(expenses, [], date(2026, 10, 18))
        assert trend[-1].spent == Decimal("10.01")

    def test_custom_months_back(self):
        trend = engine.monthly_trend([], [], date(2026, 2, 1), months_back=3)
        assert [(p.year, p.month) for p in trend] == [(2025, 12), (2026, 1), (2026, 2)]


class TestDailySeries:
    """Tests for the per-day series."""

    def test_capped_at_thirty_days(self):
        """Day 31 is dropped, not folded into day 30."""
        expenses = [
            make_expense("5", "Other", datetime(2026, 10, 30)),
            make_expense("7", "Other", datetime(2026, 10, 31)),
        ]
        series = engine.daily_series(expenses, 31)
        assert len(series) == 30
        assert series[-1].day == 30
        assert series[-1].amount == Decimal("5.00")
        assert engine.total_amount(expenses) - sum(p.amount for p in series) == Decimal("7")

    def test_short_month(self):
        series = engine.daily_series([], 28)
        assert [p.day for p in series] == list(range(1, 29))
        assert all(p.amount == 0 for p in series)

    def test_sums_same_day(self, october_expenses):
        series = engine.daily_series(october_expenses, 31)
        assert series[17].day == 18
        assert series[17].amount == Decimal("45.50")
        assert series[1].amount == Decimal("14.50")


class TestTopCategories:
    """Tests for top category ranking."""

    def test_sorted_descending(self, october_expenses):
        top = engine.top_categories(engine.category_breakdown(october_expenses))
        assert [t.category for t in top] == ["Transportation", "Food & Dining", "Entertainment"]

    def test_ties_keep_first_seen_order(self):
        breakdown = {
            "Shopping": Decimal("50"),
            "Healthcare": Decimal("80"),
            "Education": Decimal("50"),
            "Travel": Decimal("50"),
        }
        top = engine.top_categories(breakdown)
        assert [t.category for t in top] == ["Healthcare", "Shopping", "Education", "Travel"]

    def test_truncates_to_five_by_default(self):
        breakdown = {f"Category {i}": Decimal(i) for i in range(1, 9)}
        top = engine.top_categories(breakdown)
        assert len(top) == 5
        assert top[0].category == "Category 8"

    def test_custom_n(self):
        breakdown = {"A": Decimal("1"), "B": Decimal("2")}
        assert len(engine.top_categories(breakdown, n=1)) == 1


class TestRatiosAndProjections:
    """Tests for guarded ratios, projections and status bands."""

    def test_average_daily_spending(self):
        assert engine.average_daily_spending(Decimal("90"), 18) == Decimal("5")

    def test_average_daily_spending_day_zero(self):
        assert engine.average_daily_spending(Decimal("90"), 0) == 0

    def test_projected_monthly_spending(self):
        assert engine.projected_monthly_spending(Decimal("5"), 31) == Decimal("155")

    def test_budget_usage_ratio(self):
        assert engine.budget_usage_ratio(Decimal("50"), Decimal("200")) == Decimal("0.25")

    def test_budget_usage_ratio_zero_budget(self):
        """Guarded: no division by zero, no infinity."""
        assert engine.budget_usage_ratio(Decimal("0"), Decimal("0")) == 0
        assert engine.budget_usage_ratio(Decimal("50"), Decimal("0")) == 0

    def test_percentage_of_limit_zero_limit(self):
        assert engine.percentage_of_limit(Decimal("10"), Decimal("0")) == 0

    def test_remaining_can_go_negative(self):
        assert engine.remaining(Decimal("100"), Decimal("130")) == Decimal("-30")

    def test_percent_change(self):
        assert engine.percent_change_vs_prior_month(Decimal("150"), Decimal("100")) == 50
        assert engine.percent_change_vs_prior_month(Decimal("50"), Decimal("100")) == -50

    def test_percent_change_zero_prior(self):
        assert engine.percent_change_vs_prior_month(Decimal("100"), Decimal("0")) == 0

    @pytest.mark.parametrize(
        "percentage, expected",
        [
            (Decimal("0"), StatusBand.ON_TRACK),
            (Decimal("79"), StatusBand.ON_TRACK),
            (Decimal("80"), StatusBand.ON_TRACK),
            (Decimal("80.01"), StatusBand.WARNING),
            (Decimal("81"), StatusBand.WARNING),
            (Decimal("100"), StatusBand.WARNING),
            (Decimal("101"), StatusBand.OVER),
        ],
    )
    def test_status_band_thresholds(self, percentage, expected):
        assert engine.status_band(percentage) == expected
