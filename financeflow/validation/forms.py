"""
Form Input Validation

DESIGN DECISION: Bad form input is never an exception.
- A required field left empty keeps the form open, with no message
- An amount that does not parse, is NaN, infinite or negative is
  simply not accepted

The validator still records WHAT was wrong, so rejected submissions
show up in the audit log for debugging.
"""

from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from financeflow.models.expense import ExpenseFormResult, ValidationIssue


AmountInput = Union[str, int, float, Decimal, None]
DateInput = Union[date, datetime, str, None]


def parse_amount(raw: AmountInput) -> Optional[Decimal]:
    """
    Parse a money amount typed into a form.

    Returns None for blank, unparsable, NaN, infinite or negative input.
    Zero is a valid amount.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, float):
        raw = str(raw)

    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None

    try:
        value = Decimal(raw)
    except (InvalidOperation, ValueError, TypeError):
        return None

    if not value.is_finite() or value < 0:
        return None
    return value


def parse_date(raw: DateInput) -> Optional[datetime]:
    """
    Parse the expense date field.

    A bare date becomes midnight of that day. Strings must be ISO-8601.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, date):
        return datetime.combine(raw, time.min)

    text = raw.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


class ExpenseFormValidator:
    """
    Validates the Add Expense form.

    All four fields are required. The category is not checked against
    the budget list: any non-empty label is accepted.
    """

    def validate(
        self,
        amount: AmountInput,
        category: Optional[str],
        description: Optional[str],
        expense_date: DateInput,
    ) -> ExpenseFormResult:
        issues: list[ValidationIssue] = []

        parsed_amount = parse_amount(amount)
        if parsed_amount is None:
            if amount is None or (isinstance(amount, str) and not amount.strip()):
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="missing",
                    message="Amount is required",
                ))
            else:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_amount",
                    message=f"Amount must be a non-negative number, got {amount!r}",
                ))

        category = (category or "").strip()
        if not category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required",
            ))

        description = (description or "").strip()
        if not description:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
            ))

        parsed_date = parse_date(expense_date)
        if parsed_date is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing" if not expense_date else "invalid_format",
                message="Date is required (YYYY-MM-DD)",
            ))

        if issues:
            return ExpenseFormResult(is_valid=False, issues=issues)

        return ExpenseFormResult(
            is_valid=True,
            amount=parsed_amount,
            category=category,
            description=description,
            date=parsed_date,
        )
