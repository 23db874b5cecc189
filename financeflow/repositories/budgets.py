"""
Budget Repository and Budget Draft

The repository holds at most one Budget per category, mirrored to the
key-value store under the `budgets` key. It is only ever changed as a
whole: the Budget page edits a BudgetDraft and commits it with
replace_all(), or throws it away.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Optional

from pydantic import TypeAdapter

from financeflow.audit import AuditLogger
from financeflow.models.expense import Budget
from financeflow.repositories.base import read_records, write_records
from financeflow.services.storage import DuplicateError, KeyValueStore
from financeflow.validation import parse_amount


BUDGETS_KEY = "budgets"

_BUDGET_LIST = TypeAdapter(list[Budget])

DEMO_BUDGETS: tuple[tuple[str, str], ...] = (
    ("Food & Dining", "500"),
    ("Transportation", "300"),
    ("Entertainment", "200"),
    ("Shopping", "400"),
    ("Bills & Utilities", "600"),
    ("Healthcare", "250"),
)


def demo_budgets() -> list[Budget]:
    """The six budgets a first-time user starts with."""
    return [
        Budget(category=category, limit=Decimal(limit))
        for category, limit in DEMO_BUDGETS
    ]


def _sum_limits(budgets: Iterable[Budget]) -> Decimal:
    return sum((budget.limit for budget in budgets), Decimal("0"))


class BudgetRepository:
    """
    Store-backed set of budgets, kept in insertion order for display.
    
    Call load() once at startup before anything else.
    """
    
    def __init__(
        self,
        store: KeyValueStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger
        self._budgets: list[Budget] = []
    
    def load(self) -> list[Budget]:
        """
        Adopt the stored budgets, or seed the demo budgets if none exist.
        
        Raises:
            CorruptDataError: If the stored value cannot be parsed
        """
        stored = read_records(self._store, BUDGETS_KEY, _BUDGET_LIST, self._audit_logger)
        
        if stored is None:
            seeded = demo_budgets()
            write_records(self._store, BUDGETS_KEY, _BUDGET_LIST, seeded, self._audit_logger)
            self._budgets = seeded
            if self._audit_logger:
                self._audit_logger.log_demo_data_seeded(BUDGETS_KEY, len(seeded))
        else:
            self._budgets = stored
            if self._audit_logger:
                self._audit_logger.log_stored_data_loaded(BUDGETS_KEY, len(stored))
        
        return self.list_budgets()
    
    def list_budgets(self) -> list[Budget]:
        return list(self._budgets)
    
    def get(self, category: str) -> Optional[Budget]:
        for budget in self._budgets:
            if budget.category == category:
                return budget
        return None
    
    def total_limit(self) -> Decimal:
        return _sum_limits(self._budgets)
    
    def replace_all(self, budgets: Iterable[Budget]) -> None:
        """
        Replace the whole budget set.
        
        Raises:
            DuplicateError: If two budgets share a category (nothing changes)
            StorageError: If the store write fails (nothing changes)
        """
        replacement = list(budgets)
        
        seen: set[str] = set()
        for budget in replacement:
            if budget.category in seen:
                raise DuplicateError(f"Duplicate budget category: {budget.category}")
            seen.add(budget.category)
        
        write_records(self._store, BUDGETS_KEY, _BUDGET_LIST, replacement, self._audit_logger)
        self._budgets = replacement
        
        if self._audit_logger:
            self._audit_logger.log_budgets_replaced(
                count=len(replacement),
                total_limit=str(_sum_limits(replacement)),
            )


class BudgetDraft:
    """
    Staged, discardable copy of the budget set.
    
    Invalid edits are ignored rather than raised: a new category needs a
    positive limit and must not already be budgeted; an updated limit
    must parse to a non-negative number.
    """
    
    def __init__(self, budgets: Sequence[Budget]):
        self._budgets: list[Budget] = list(budgets)
    
    @classmethod
    def from_repository(cls, repository: BudgetRepository) -> "BudgetDraft":
        return cls(repository.list_budgets())
    
    @property
    def budgets(self) -> list[Budget]:
        return list(self._budgets)
    
    @property
    def total(self) -> Decimal:
        return _sum_limits(self._budgets)
    
    def __contains__(self, category: str) -> bool:
        return any(budget.category == category for budget in self._budgets)
    
    def __len__(self) -> int:
        return len(self._budgets)
    
    def add(self, category: Optional[str], limit_text: object) -> bool:
        """Stage a new budget category. Returns False if the input was ignored."""
        category = (category or "").strip()
        limit = parse_amount(limit_text)
        if not category or limit is None or limit <= 0 or category in self:
            return False
        
        self._budgets.append(Budget(category=category, limit=limit))
        return True
    
    def update_limit(self, category: str, limit_text: object) -> bool:
        """Change a staged limit. Returns False if the input was ignored."""
        limit = parse_amount(limit_text)
        if limit is None:
            return False
        
        updated = False
        for index, budget in enumerate(self._budgets):
            if budget.category == category:
                self._budgets[index] = Budget(category=category, limit=limit)
                updated = True
        return updated
    
    def remove(self, category: str) -> None:
        self._budgets = [
            budget for budget in self._budgets if budget.category != category
        ]
    
    def share_of_total(self, budget: Budget) -> Decimal:
        """Percent of the staged total this budget takes; 0 when the total is 0."""
        total = self.total
        if total == 0:
            return Decimal("0")
        return budget.limit / total * 100

    def allocation(self) -> list[tuple[Budget, Decimal]]:
        """
        Staged budgets with their share of the total, largest limit first.

        Equal limits keep their staged order.
        """
        ranked = sorted(self._budgets, key=lambda budget: budget.limit, reverse=True)
        return [(budget, self.share_of_total(budget)) for budget in ranked]

    def available_categories(self, options: Iterable[str]) -> list[str]:
        """Options that do not have a staged budget yet."""
        return [option for option in options if option not in self]
