"""
Tests for the UI-facing flows and the component factory.
"""

import json
import pytest
from datetime import date, datetime
from decimal import Decimal

from financeflow.config import Settings
from financeflow.models.audit import AuditEventType
from financeflow.orchestrator import (
    BudgetFlow,
    ExpenseFlow,
    create_app_components,
    create_store,
)
from financeflow.repositories import BUDGETS_KEY, EXPENSES_KEY
from financeflow.services.storage import (
    CorruptDataError,
    InMemoryStore,
    JsonFileStore,
)

from helpers import FIXED_NOW


class TestExpenseFlow:
    """Tests for submitting and deleting expenses."""

    @pytest.fixture
    def flow(self, expense_repo, audit_logger):
        return ExpenseFlow(expense_repo, audit_logger=audit_logger)

    def test_valid_submission_records_expense(self, flow):
        expense = flow.submit("12.40", "Shopping", "Notebook", date(2026, 10, 17))

        assert expense is not None
        assert expense.amount == Decimal("12.40")
        assert expense.date == datetime(2026, 10, 17)
        assert flow.expenses()[0] == expense

    def test_rejected_submission_changes_nothing(self, flow, store, audit_logger):
        stored_before = store.get(EXPENSES_KEY)

        assert flow.submit("", "Shopping", "Notebook", date(2026, 10, 17)) is None
        assert flow.submit("12", "", "Notebook", date(2026, 10, 17)) is None
        assert flow.submit("-4", "Shopping", "Notebook", date(2026, 10, 17)) is None

        assert len(flow.expenses()) == 3
        assert store.get(EXPENSES_KEY) == stored_before
        assert audit_logger.events[-1].event_type == AuditEventType.EXPENSE_FORM_REJECTED

    def test_delete(self, flow):
        assert flow.delete("1") is True
        assert flow.delete("1") is False
        assert [e.id for e in flow.expenses()] == ["2", "3"]


class TestBudgetFlow:
    """Tests for the stage-then-save budget flow."""

    @pytest.fixture
    def flow(self, budget_repo):
        return BudgetFlow(budget_repo)

    def test_save_commits_draft(self, flow, store):
        draft = flow.start_editing()
        draft.remove("Healthcare")
        draft.add("Travel", "75")
        flow.save(draft)

        categories = [b.category for b in flow.budgets()]
        assert "Healthcare" not in categories
        assert categories[-1] == "Travel"
        assert [b["category"] for b in json.loads(store.get(BUDGETS_KEY))] == categories

    def test_discarded_draft_changes_nothing(self, flow, store):
        before = flow.budgets()
        stored_before = store.get(BUDGETS_KEY)

        draft = flow.start_editing()
        draft.update_limit("Shopping", "1")
        del draft

        assert flow.budgets() == before
        assert store.get(BUDGETS_KEY) == stored_before

    def test_new_draft_starts_from_saved_state(self, flow):
        draft = flow.start_editing()
        draft.add("Travel", "75")
        flow.save(draft)
        assert "Travel" in flow.start_editing()


class TestFactory:
    """Tests for create_store and create_app_components."""

    def test_create_store_memory(self, monkeypatch):
        monkeypatch.setenv("FINANCEFLOW_STORAGE_BACKEND", "memory")
        assert isinstance(create_store(Settings()), InMemoryStore)

    def test_create_store_file(self, monkeypatch, tmp_path):
        path = tmp_path / "data.json"
        monkeypatch.setenv("FINANCEFLOW_STORAGE_BACKEND", "file")
        monkeypatch.setenv("FINANCEFLOW_STORAGE_FILE_PATH", str(path))

        store = create_store(Settings())
        assert isinstance(store, JsonFileStore)
        assert store.path == path

    def test_components_seed_fresh_store(self):
        store = InMemoryStore()
        components = create_app_components(
            settings=Settings(), store=store, clock=lambda: FIXED_NOW
        )

        assert len(components.expense_flow.expenses()) == 3
        assert len(components.budget_flow.budgets()) == 6
        assert EXPENSES_KEY in store
        assert BUDGETS_KEY in store
        assert components.today() == FIXED_NOW.date()
        assert not components.auth.is_authenticated

    def test_components_over_json_file(self, tmp_path):
        path = tmp_path / "storage.json"
        first = create_app_components(
            settings=Settings(), store=JsonFileStore(path), clock=lambda: FIXED_NOW
        )
        first.auth.login("ana@example.com")
        first.expense_flow.submit("9", "Other", "Stamps", FIXED_NOW.date())

        second = create_app_components(
            settings=Settings(), store=JsonFileStore(path), clock=lambda: FIXED_NOW
        )
        assert second.auth.current_user() == "ana@example.com"
        assert len(second.expense_flow.expenses()) == 4
        assert second.expense_flow.expenses()[0].description == "Stamps"

    def test_corrupt_store_stops_startup(self):
        store = InMemoryStore({EXPENSES_KEY: "{broken"})
        with pytest.raises(CorruptDataError):
            create_app_components(settings=Settings(), store=store)

    def test_report_settings_are_applied(self, monkeypatch):
        monkeypatch.setenv("TREND_MONTHS", "3")
        monkeypatch.setenv("TOP_CATEGORIES_COUNT", "1")
        components = create_app_components(
            settings=Settings(), store=InMemoryStore(), clock=lambda: FIXED_NOW
        )

        analytics = components.analytics()
        assert len(analytics.monthly_trend) == 3
        assert len(analytics.top_categories) == 1
