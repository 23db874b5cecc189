"""Spending analytics: pure aggregation functions and the page reports built on them."""

from financeflow.analytics.engine import (
    average_daily_spending,
    budget_usage_ratio,
    category_breakdown,
    daily_series,
    days_in_month,
    filter_by_month,
    monthly_trend,
    percent_change_vs_prior_month,
    percentage_of_limit,
    projected_monthly_spending,
    remaining,
    shift_month,
    status_band,
    top_categories,
    total_amount,
    total_budget,
)
from financeflow.analytics.reports import (
    budget_progress,
    build_analytics,
    build_overview,
)

__all__ = [
    "average_daily_spending",
    "budget_progress",
    "budget_usage_ratio",
    "build_analytics",
    "build_overview",
    "category_breakdown",
    "daily_series",
    "days_in_month",
    "filter_by_month",
    "monthly_trend",
    "percent_change_vs_prior_month",
    "percentage_of_limit",
    "projected_monthly_spending",
    "remaining",
    "shift_month",
    "status_band",
    "top_categories",
    "total_amount",
    "total_budget",
]
