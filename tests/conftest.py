"""
Shared fixtures for FinanceFlow tests.

Everything runs against an in-memory store and a fixed clock, so no
test depends on today's date. The JSON store tests use tmp_path.
"""

import pytest

from financeflow.audit import AuditLogger
from financeflow.repositories import BudgetRepository, ExpenseRepository
from financeflow.services.storage import InMemoryStore

from helpers import FIXED_NOW


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def expense_repo(store, clock, audit_logger) -> ExpenseRepository:
    repo = ExpenseRepository(store, audit_logger=audit_logger, clock=clock)
    repo.load()
    return repo


@pytest.fixture
def budget_repo(store, audit_logger) -> BudgetRepository:
    repo = BudgetRepository(store, audit_logger=audit_logger)
    repo.load()
    return repo
