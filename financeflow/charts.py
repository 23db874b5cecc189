"""
Plotly Chart Builders

Each function takes a report model (or a piece of one) and returns a
`plotly.graph_objects.Figure` ready for `st.plotly_chart`. No data
crunching happens here; the numbers come from the analytics package.
"""

import plotly.graph_objects as go

from financeflow.models.reports import (
    CategoryTotal,
    DailySpending,
    MonthlyTrendPoint,
)


COLORS = [
    "#6366f1", "#8b5cf6", "#ec4899", "#f59e0b",
    "#10b981", "#3b82f6", "#ef4444", "#6b7280",
]


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[dict(text=message, showarrow=False, font=dict(size=14))],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
    )
    return fig


def distribution_pie(
    distribution: list[CategoryTotal],
    currency_symbol: str = "$",
) -> go.Figure:
    """Share of this month's spending per category."""
    if not distribution:
        return _empty_figure("No spending data available")

    fig = go.Figure(go.Pie(
        labels=[item.category for item in distribution],
        values=[float(item.amount) for item in distribution],
        marker=dict(colors=COLORS),
        textinfo="label+percent",
        hovertemplate=f"%{{label}}: {currency_symbol}%{{value:,.2f}}<extra></extra>",
    ))
    fig.update_layout(showlegend=False)
    return fig


def top_categories_bar(
    top_categories: list[CategoryTotal],
    currency_symbol: str = "$",
) -> go.Figure:
    if not top_categories:
        return _empty_figure("No category data available")

    fig = go.Figure(go.Bar(
        x=[item.category for item in top_categories],
        y=[float(item.amount) for item in top_categories],
        marker_color=COLORS[0],
    ))
    fig.update_layout(yaxis_title=f"Spent ({currency_symbol})")
    fig.update_xaxes(tickangle=-45)
    return fig


def monthly_trend_lines(
    trend: list[MonthlyTrendPoint],
    currency_symbol: str = "$",
) -> go.Figure:
    """Spent per month as a solid line, the budget total as a dashed one."""
    labels = [point.month_label for point in trend]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=labels,
        y=[float(point.spent) for point in trend],
        mode="lines+markers",
        name="Spent",
        line=dict(color=COLORS[0], width=2),
    ))
    fig.add_trace(go.Scatter(
        x=labels,
        y=[float(point.budget_total) for point in trend],
        mode="lines",
        name="Budget",
        line=dict(color=COLORS[4], width=2, dash="dash"),
    ))
    fig.update_layout(yaxis_title=f"Amount ({currency_symbol})")
    return fig


def daily_spending_bar(
    daily: list[DailySpending],
    currency_symbol: str = "$",
) -> go.Figure:
    fig = go.Figure(go.Bar(
        x=[str(point.day) for point in daily],
        y=[float(point.amount) for point in daily],
        marker_color=COLORS[1],
    ))
    fig.update_layout(xaxis_title="Day", yaxis_title=f"Spent ({currency_symbol})")
    return fig
