"""
Main Orchestrator for FinanceFlow

This module ties together all the components and defines the flows the
UI calls into:
1. Add / delete expense (form -> validate -> repository -> store)
2. Edit budgets (draft -> save -> repository -> store)
3. Session (login / signup / logout)

DESIGN DECISION: The UI never touches repositories or the store
directly. It reads snapshots and report models, and sends user intents
through these flows.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from financeflow.analytics import build_analytics, build_overview
from financeflow.audit import AuditLogger
from financeflow.config import AppSettings, Settings, get_settings
from financeflow.models.expense import Budget, Expense
from financeflow.models.reports import AnalyticsReport, OverviewReport
from financeflow.repositories import BudgetDraft, BudgetRepository, ExpenseRepository
from financeflow.services import AuthService, InMemoryStore, JsonFileStore, KeyValueStore
from financeflow.validation import ExpenseFormValidator


class ExpenseFlow:
    """
    Orchestrates adding and deleting expenses.

    A rejected form is not an error: submit() returns None and the UI
    keeps the form open.
    """

    def __init__(
        self,
        repository: ExpenseRepository,
        validator: Optional[ExpenseFormValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._repository = repository
        self._validator = validator or ExpenseFormValidator()
        self._audit_logger = audit_logger

    def expenses(self) -> list[Expense]:
        return self._repository.list_expenses()

    def submit(
        self,
        amount: object,
        category: Optional[str],
        description: Optional[str],
        expense_date: object,
    ) -> Optional[Expense]:
        """
        Validate the Add Expense form and record the expense.

        Returns:
            The new expense, or None if the form was rejected

        Raises:
            StorageError: If the store write fails
        """
        result = self._validator.validate(amount, category, description, expense_date)

        if not result.is_valid:
            if self._audit_logger:
                self._audit_logger.log_expense_form_rejected(
                    [issue.model_dump() for issue in result.issues]
                )
            return None

        return self._repository.add(
            amount=result.amount,
            category=result.category,
            description=result.description,
            date=result.date,
        )

    def delete(self, expense_id: str) -> bool:
        return self._repository.remove(expense_id)


class BudgetFlow:
    """Orchestrates the stage-then-save budget editing flow."""

    def __init__(self, repository: BudgetRepository):
        self._repository = repository

    def budgets(self) -> list[Budget]:
        return self._repository.list_budgets()

    def start_editing(self) -> BudgetDraft:
        """A fresh draft of the saved budgets. Discarding is just dropping it."""
        return BudgetDraft.from_repository(self._repository)

    def save(self, draft: BudgetDraft) -> None:
        """
        Commit a draft as the new budget set.

        Raises:
            DuplicateError: If the draft somehow holds a category twice
            StorageError: If the store write fails
        """
        self._repository.replace_all(draft.budgets)


@dataclass
class AppComponents:
    """Everything one application session owns."""

    store: KeyValueStore
    auth: AuthService
    expense_flow: ExpenseFlow
    budget_flow: BudgetFlow
    audit_logger: AuditLogger
    app_settings: AppSettings
    clock: Callable[[], datetime]

    def today(self) -> date:
        """Reference date for reports, read once per page render."""
        return self.clock().date()

    def overview(self, reference_date: Optional[date] = None) -> OverviewReport:
        return build_overview(
            self.expense_flow.expenses(),
            self.budget_flow.budgets(),
            reference_date or self.today(),
            recent_limit=self.app_settings.recent_transactions_limit,
        )

    def analytics(self, reference_date: Optional[date] = None) -> AnalyticsReport:
        return build_analytics(
            self.expense_flow.expenses(),
            self.budget_flow.budgets(),
            reference_date or self.today(),
            months_back=self.app_settings.trend_months,
            top_n=self.app_settings.top_categories_count,
        )


def create_store(settings: Optional[Settings] = None) -> KeyValueStore:
    """Build the configured key-value store."""
    if settings is None:
        settings = get_settings()
    storage_settings = settings.storage
    if storage_settings.backend == "memory":
        return InMemoryStore()
    return JsonFileStore(storage_settings.file_path)


def create_app_components(
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStore] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> AppComponents:
    """
    Factory function to create and load all application components.

    Args:
        settings: Settings to use (defaults to the cached settings)
        store: Store to use instead of the configured one
        clock: Source of "now" for demo data and report reference dates

    Raises:
        CorruptDataError: If stored expenses or budgets cannot be parsed
    """
    if settings is None:
        settings = get_settings()
    store = store if store is not None else create_store(settings)
    audit_logger = AuditLogger()

    expense_repository = ExpenseRepository(store, audit_logger=audit_logger, clock=clock)
    budget_repository = BudgetRepository(store, audit_logger=audit_logger)
    expense_repository.load()
    budget_repository.load()

    return AppComponents(
        store=store,
        auth=AuthService(store, audit_logger=audit_logger),
        expense_flow=ExpenseFlow(expense_repository, audit_logger=audit_logger),
        budget_flow=BudgetFlow(budget_repository),
        audit_logger=audit_logger,
        app_settings=settings.app,
        clock=clock,
    )
