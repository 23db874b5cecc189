"""
Expense Repository

In-memory list of expenses, newest first, mirrored to the key-value
store under the `expenses` key after every mutation.

GUARANTEES:
- list_expenses()[0] is always the most recently added expense
- Ids are unique and never reused
- A failed store write leaves the in-memory list untouched
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from pydantic import TypeAdapter

from financeflow.audit import AuditLogger
from financeflow.models.expense import Expense
from financeflow.repositories.base import read_records, write_records
from financeflow.services.storage import KeyValueStore


EXPENSES_KEY = "expenses"

_EXPENSE_LIST = TypeAdapter(list[Expense])


def demo_expenses(now: datetime) -> list[Expense]:
    """The three records a first-time user starts with."""
    return [
        Expense(
            id="1",
            amount=Decimal("45.50"),
            category="Food & Dining",
            description="Grocery shopping",
            date=now,
        ),
        Expense(
            id="2",
            amount=Decimal("120.00"),
            category="Transportation",
            description="Gas",
            date=now - timedelta(days=1),
        ),
        Expense(
            id="3",
            amount=Decimal("25.00"),
            category="Entertainment",
            description="Movie tickets",
            date=now - timedelta(days=2),
        ),
    ]


class ExpenseRepository:
    """
    Ordered, store-backed collection of expenses.
    
    Call load() once at startup before anything else.
    """
    
    def __init__(
        self,
        store: KeyValueStore,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = lambda: uuid4().hex,
    ):
        """
        Initialize the repository.
        
        Args:
            store: Backing key-value store
            audit_logger: Optional audit logger for mutations
            clock: Source of "now", used only to date the demo records
            id_factory: Generates ids for new expenses
        """
        self._store = store
        self._audit_logger = audit_logger
        self._clock = clock
        self._id_factory = id_factory
        self._expenses: list[Expense] = []
    
    def load(self) -> list[Expense]:
        """
        Adopt the stored expenses, or seed the demo records if none exist.
        
        Raises:
            CorruptDataError: If the stored value cannot be parsed
        """
        stored = read_records(self._store, EXPENSES_KEY, _EXPENSE_LIST, self._audit_logger)
        
        if stored is None:
            seeded = demo_expenses(self._clock())
            self._persist(seeded)
            self._expenses = seeded
            if self._audit_logger:
                self._audit_logger.log_demo_data_seeded(EXPENSES_KEY, len(seeded))
        else:
            self._expenses = stored
            if self._audit_logger:
                self._audit_logger.log_stored_data_loaded(EXPENSES_KEY, len(stored))
        
        return self.list_expenses()
    
    def list_expenses(self) -> list[Expense]:
        """All expenses, newest first."""
        return list(self._expenses)
    
    def get(self, expense_id: str) -> Optional[Expense]:
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None
    
    def add(
        self,
        amount: Decimal,
        category: str,
        description: str,
        date: datetime,
    ) -> Expense:
        """
        Record a new expense at the front of the list.
        
        Raises:
            StorageError: If the store write fails (nothing is added)
        """
        expense = Expense(
            id=self._new_id(),
            amount=amount,
            category=category,
            description=description,
            date=date,
        )
        updated = [expense, *self._expenses]
        self._persist(updated)
        self._expenses = updated
        
        if self._audit_logger:
            self._audit_logger.log_expense_added(
                expense_id=expense.id,
                category=expense.category,
                amount=str(expense.amount),
            )
        return expense
    
    def remove(self, expense_id: str) -> bool:
        """
        Delete an expense by id.
        
        Unknown ids are not an error. The resulting list is persisted
        either way.
        
        Returns:
            True if an expense was removed
        """
        updated = [expense for expense in self._expenses if expense.id != expense_id]
        found = len(updated) != len(self._expenses)
        self._persist(updated)
        self._expenses = updated
        
        if self._audit_logger:
            self._audit_logger.log_expense_deleted(expense_id, found)
        return found
    
    def _new_id(self) -> str:
        existing = {expense.id for expense in self._expenses}
        new_id = self._id_factory()
        while new_id in existing:
            new_id = self._id_factory()
        return new_id
    
    def _persist(self, expenses: list[Expense]) -> None:
        write_records(self._store, EXPENSES_KEY, _EXPENSE_LIST, expenses, self._audit_logger)
