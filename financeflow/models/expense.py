"""
Core Data Models for FinanceFlow

These models define the schemas for the records kept in the store.
They are designed to:
1. Enforce non-negative money values at runtime
2. Round-trip through the JSON layout of the key-value store
3. Stay immutable once created (expenses are never edited)

DESIGN DECISION: Money is held as Decimal in memory and written as a JSON
number in the store, so stored data stays readable by any JSON consumer.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


# =============================================================================
# CATEGORY OPTIONS
# =============================================================================

# Offered on the Add Expense form.
EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Food & Dining",
    "Transportation",
    "Entertainment",
    "Shopping",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Other",
)

# Offered when adding a budget category.
BUDGET_CATEGORY_OPTIONS: tuple[str, ...] = (
    "Food & Dining",
    "Transportation",
    "Entertainment",
    "Shopping",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Personal Care",
    "Gifts & Donations",
    "Insurance",
    "Other",
)


def _to_decimal(v: Any) -> Any:
    """Floats go through str() so 45.5 becomes Decimal('45.5'), not its binary expansion."""
    if isinstance(v, float):
        return Decimal(str(v))
    return v


# =============================================================================
# STORED RECORDS
# =============================================================================

class Expense(BaseModel):
    """
    A single recorded expense.
    
    Expenses are created by the Add Expense form and destroyed by explicit
    deletion. There is no edit operation, so the model is frozen.
    
    `category` is free text. It is expected, not enforced, to match a
    Budget category; an expense in an unbudgeted category simply never
    shows up in budget-relative views.
    """
    model_config = ConfigDict(frozen=True)
    
    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier, never reused"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount spent"
    )
    category: str = Field(
        ...,
        description="Spending category label"
    )
    description: str = Field(
        default="",
        description="What the money was spent on"
    )
    date: datetime = Field(
        ...,
        description="When it was spent (only day, month and year matter)"
    )
    
    @field_validator('amount', mode='before')
    @classmethod
    def coerce_float_amount(cls, v: Any) -> Any:
        return _to_decimal(v)
    
    # Stored as a JSON number. Exact up to 15 significant digits; anything
    # finer comes back rounded to the nearest float.
    @field_serializer('amount', when_used='json')
    def serialize_amount(self, v: Decimal) -> float:
        return float(v)
    

class Budget(BaseModel):
    """
    Monthly spending ceiling for one category.
    
    The category is the key: the Budget Repository holds at most one
    Budget per category.
    """
    model_config = ConfigDict(frozen=True)
    
    category: str = Field(
        ...,
        min_length=1,
        description="Category this limit applies to"
    )
    limit: Decimal = Field(
        ...,
        ge=0,
        description="Monthly spending limit"
    )
    
    @field_validator('limit', mode='before')
    @classmethod
    def coerce_float_limit(cls, v: Any) -> Any:
        return _to_decimal(v)
    
    # Same JSON number layout as Expense.amount
    @field_serializer('limit', when_used='json')
    def serialize_limit(self, v: Decimal) -> float:
        return float(v)


class UserRecord(BaseModel):
    """
    Entry in the signup log.
    
    CRITICAL: This is a log, not a credential store. Login never reads it.
    """
    
    email: str
    name: str = ""
    password: str = ""


# =============================================================================
# FORM VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in submitted form input."""
    
    field: str = Field(
        ...,
        description="Form field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_amount')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ExpenseFormResult(BaseModel):
    """
    Outcome of validating the Add Expense form.
    
    When `is_valid` is False the form stays open; the issues are logged
    but never shown to the user.
    """
    
    is_valid: bool
    amount: Optional[Decimal] = None
    category: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    issues: list[ValidationIssue] = Field(default_factory=list)
    
    @property
    def issue_fields(self) -> list[str]:
        return [issue.field for issue in self.issues]
