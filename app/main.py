"""
Streamlit Frontend for FinanceFlow

This is the user interface for tracking day-to-day spending.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Every change is saved the moment the user makes it
3. Budget edits are staged until the user presses Save
4. Invalid form input keeps the form open; nothing half-saved

Pages:
- Overview: this month's totals, budget progress, recent transactions
- Add Expense: the expense form
- Analytics: projections, distribution, trend and daily charts
- Budget: stage, save or discard budget limits
"""

from datetime import date

import streamlit as st

from financeflow.audit import configure_logging
from financeflow.charts import (
    daily_spending_bar,
    distribution_pie,
    monthly_trend_lines,
    top_categories_bar,
)
from financeflow.config import get_settings, validate_all_settings
from financeflow.models.expense import BUDGET_CATEGORY_OPTIONS, EXPENSE_CATEGORIES
from financeflow.models.reports import BudgetProgress, StatusBand
from financeflow.orchestrator import AppComponents, create_app_components
from financeflow.services import CorruptDataError, StorageError


PAGES = ["📊 Overview", "➕ Add Expense", "📈 Analytics", "🎯 Budget"]

STATUS_BADGES = {
    StatusBand.ON_TRACK: "🟢 On track",
    StatusBand.WARNING: "🟡 Warning",
    StatusBand.OVER: "🔴 Over",
}


# Page configuration
st.set_page_config(
    page_title="FinanceFlow",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded",
)


def money(value) -> str:
    symbol = get_settings().app.currency_symbol
    return f"{symbol}{value:,.2f}"


def get_components() -> AppComponents:
    """
    Get or create this browser session's components.

    Held in session_state rather than st.cache_resource: the repositories
    belong to one session and must not be shared.
    """
    if "components" not in st.session_state:
        st.session_state.components = create_app_components()
    return st.session_state.components


def main():
    """Main application entry point."""
    configure_logging(get_settings().app.log_level)

    try:
        components = get_components()
    except CorruptDataError as e:
        st.error(f"Your saved data could not be read: {e}")
        st.stop()

    if not components.auth.is_authenticated:
        render_auth_page(components)
        return

    # Page switches requested by the previous run
    if "next_page" in st.session_state:
        st.session_state.page = st.session_state.pop("next_page")

    st.sidebar.title("💸 FinanceFlow")
    st.sidebar.caption(components.auth.current_user())
    st.sidebar.markdown("---")

    page = st.sidebar.radio("Navigate to:", PAGES, key="page")

    st.sidebar.markdown("---")
    if st.sidebar.button("🚪 Logout"):
        components.auth.logout()
        st.session_state.pop("budget_draft", None)
        st.rerun()

    with st.sidebar.expander("⚙️ Settings"):
        render_settings_status()

    if page == "📊 Overview":
        render_overview_page(components)
    elif page == "➕ Add Expense":
        render_add_expense_page(components)
    elif page == "📈 Analytics":
        render_analytics_page(components)
    elif page == "🎯 Budget":
        render_budget_page(components)


def render_auth_page(components: AppComponents):
    """Render the login / signup screen."""
    st.title("💸 FinanceFlow")
    st.markdown("### Take control of your finances")
    st.markdown(
        "Track expenses, analyze spending patterns, and stay inside "
        "your monthly budgets."
    )

    login_tab, signup_tab = st.tabs(["Log in", "Sign up"])

    with login_tab:
        with st.form("login_form"):
            email = st.text_input("Email")
            st.text_input("Password", type="password")
            if st.form_submit_button("Log in", type="primary"):
                if components.auth.login(email):
                    st.rerun()

    with signup_tab:
        with st.form("signup_form"):
            name = st.text_input("Full name")
            email = st.text_input("Email", key="signup_email")
            password = st.text_input("Password", type="password", key="signup_password")
            if st.form_submit_button("Create account", type="primary"):
                if components.auth.signup(email, name, password):
                    st.rerun()


def render_budget_progress(row: BudgetProgress):
    """One labelled progress bar for a budget."""
    label_col, value_col = st.columns([3, 2])
    with label_col:
        st.markdown(f"**{row.category}** {STATUS_BADGES[row.status]}")
    with value_col:
        st.markdown(f"{money(row.spent)} / {money(row.limit)}")
    st.progress(1.0 if row.over_budget else min(float(row.percentage), 100.0) / 100.0)


def render_overview_page(components: AppComponents):
    """Render this month's overview."""
    st.title("📊 Overview")
    report = components.overview()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Spent", money(report.total_spent), help="This month")
    col2.metric("Total Budget", money(report.total_budget), help="Monthly limit")
    col3.metric(
        "Over budget" if report.over_budget else "Remaining",
        money(abs(report.remaining_budget)),
    )
    sign = "+" if report.percent_change > 0 else ""
    col4.metric("vs Last Month", f"{sign}{report.percent_change:.1f}%")

    st.markdown("---")
    left, right = st.columns(2)

    with left:
        st.subheader("Spending by Category")
        if not report.budget_progress:
            st.info("No budget categories set")
        for row in report.budget_progress:
            render_budget_progress(row)

    with right:
        st.subheader("Recent Transactions")
        if not report.recent_expenses:
            st.info("No transactions this month")
        for expense in report.recent_expenses:
            desc_col, amount_col, delete_col = st.columns([4, 2, 1])
            with desc_col:
                st.markdown(f"**{expense.description}**")
                st.caption(f"{expense.category} • {expense.date.strftime('%d %b %Y')}")
            with amount_col:
                st.markdown(f"-{money(expense.amount)}")
            with delete_col:
                if st.button("🗑️", key=f"delete_{expense.id}", help="Delete expense"):
                    try:
                        components.expense_flow.delete(expense.id)
                    except StorageError as e:
                        st.error(f"Failed to delete: {e}")
                    else:
                        st.rerun()


def render_add_expense_page(components: AppComponents):
    """Render the Add Expense form."""
    st.title("➕ Add Expense")
    st.markdown("Track your daily spending by adding expenses.")

    with st.form("add_expense_form", clear_on_submit=False):
        amount = st.text_input("Amount", placeholder="0.00")
        category = st.selectbox(
            "Category",
            options=[""] + list(EXPENSE_CATEGORIES),
            format_func=lambda c: c or "Select a category",
        )
        description = st.text_input(
            "Description",
            placeholder="e.g., Grocery shopping at the market",
        )
        expense_date = st.date_input("Date", value=date.today())
        submitted = st.form_submit_button("Add Expense", type="primary")

    if submitted:
        try:
            expense = components.expense_flow.submit(
                amount, category, description, expense_date
            )
        except StorageError as e:
            st.error(f"Failed to save: {e}")
        else:
            if expense is not None:
                st.toast("Expense added successfully!", icon="✅")
                st.session_state.next_page = "📊 Overview"
                st.rerun()

    with st.expander("💡 Quick tips"):
        st.markdown(
            """
            - Add expenses as they happen so the daily chart stays accurate
            - Use the category that matches a budget to see it counted
            - Delete a mistake from the Overview page and add it again
            """
        )


def render_analytics_page(components: AppComponents):
    """Render the analytics page."""
    st.title("📈 Financial Analytics")
    st.markdown("Visualize your spending patterns and trends.")

    symbol = components.app_settings.currency_symbol
    report = components.analytics()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Avg Daily Spending", money(report.average_daily_spending))
    col2.metric("Projected Monthly", money(report.projected_monthly_spending))
    col3.metric("Budget Usage", f"{report.budget_usage_percent:.1f}%")
    col4.metric("Total Categories", report.category_count)

    left, right = st.columns(2)
    with left:
        st.subheader("Spending Distribution")
        st.plotly_chart(distribution_pie(report.distribution, symbol), width="stretch")
    with right:
        st.subheader("Top Spending Categories")
        st.plotly_chart(top_categories_bar(report.top_categories, symbol), width="stretch")

    left, right = st.columns(2)
    with left:
        st.subheader(f"{len(report.monthly_trend)}-Month Spending Trend")
        st.plotly_chart(monthly_trend_lines(report.monthly_trend, symbol), width="stretch")
    with right:
        st.subheader("Daily Spending (This Month)")
        st.plotly_chart(daily_spending_bar(report.daily_series, symbol), width="stretch")

    st.subheader("Category Summary")
    if not report.category_summary:
        st.info("No budget categories configured")
        return

    st.dataframe(
        [
            {
                "Category": row.category,
                "Spent": money(row.spent),
                "Budget": money(row.limit),
                "Remaining": money(abs(row.remaining)),
                "Status": (
                    f"{STATUS_BADGES[row.status]} ({row.percentage:.0f}%)"
                    if row.limit > 0 else STATUS_BADGES[row.status]
                ),
            }
            for row in report.category_summary
        ],
        width="stretch",
        hide_index=True,
    )


def render_budget_page(components: AppComponents):
    """Render the budget settings page."""
    if "budget_draft" not in st.session_state:
        st.session_state.budget_draft = components.budget_flow.start_editing()
    draft = st.session_state.budget_draft

    title_col, total_col = st.columns([3, 1])
    with title_col:
        st.title("🎯 Budget Settings")
        st.markdown("Set monthly spending limits for each category.")
    with total_col:
        st.metric("Total Monthly Budget", money(draft.total))

    st.subheader("Add Budget Category")
    with st.form("add_budget_form", clear_on_submit=True):
        cat_col, limit_col = st.columns([2, 1])
        with cat_col:
            new_category = st.selectbox(
                "Category",
                options=[""] + draft.available_categories(BUDGET_CATEGORY_OPTIONS),
                format_func=lambda c: c or "Select a category",
            )
        with limit_col:
            new_limit = st.text_input("Monthly limit", placeholder="0.00")
        if st.form_submit_button("➕ Add"):
            if draft.add(new_category, new_limit):
                st.rerun()

    st.subheader("Current Budgets")
    if len(draft) == 0:
        st.info("No budget categories yet. Add one above.")

    for budget in draft.budgets:
        name_col, limit_col, remove_col = st.columns([3, 2, 1])
        with name_col:
            st.markdown(f"**{budget.category}**")
            st.caption(f"{draft.share_of_total(budget):.1f}% of total budget")
        with limit_col:
            edited = st.text_input(
                "Limit",
                value=f"{budget.limit:.2f}",
                key=f"limit_{budget.category}",
                label_visibility="collapsed",
            )
            if edited != f"{budget.limit:.2f}":
                draft.update_limit(budget.category, edited)
        with remove_col:
            if st.button("🗑️", key=f"remove_{budget.category}", help="Remove category"):
                draft.remove(budget.category)
                st.rerun()

    if len(draft) > 0:
        st.subheader("Budget Allocation")
        for budget, share in draft.allocation():
            label_col, value_col = st.columns([3, 2])
            with label_col:
                st.markdown(f"**{budget.category}**")
            with value_col:
                st.markdown(f"{money(budget.limit)} ({share:.1f}%)")
            st.progress(min(float(share) / 100.0, 1.0))

    st.markdown("---")
    save_col, discard_col = st.columns(2)
    with save_col:
        if st.button("💾 Save Changes", type="primary"):
            try:
                components.budget_flow.save(draft)
            except StorageError as e:
                st.error(f"Failed to save budgets: {e}")
            else:
                st.toast("Budget settings saved successfully!", icon="💾")
    with discard_col:
        if st.button("↩️ Discard Changes"):
            st.session_state.budget_draft = components.budget_flow.start_editing()
            for key in [k for k in st.session_state if str(k).startswith("limit_")]:
                del st.session_state[key]
            st.rerun()


def render_settings_status():
    """Show whether configuration loaded."""
    status = validate_all_settings()
    for name, key in [("Storage", "storage"), ("App", "app")]:
        if status.get(key, False):
            st.success(f"✅ {name}")
        else:
            st.error(f"❌ {name} - {status.get(f'{key}_error', 'Not configured')}")

    storage = get_settings().storage
    if storage.backend == "file":
        st.caption(f"Data file: `{storage.file_path}`")
    else:
        st.caption("Data is kept in memory for this session only.")


if __name__ == "__main__":
    main()
