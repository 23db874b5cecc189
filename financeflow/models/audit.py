"""
Audit Models for FinanceFlow

Every mutation of stored state is logged as an audit event.
This provides:
1. Traceability of what changed the store and when
2. Debugging information when stored data turns out to be corrupt
3. A record of form submissions that were silently rejected

DESIGN DECISION: Audit events go to the structured log only. The
key-value store has a fixed key layout and does not hold them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Expenses
    EXPENSE_ADDED = "expense_added"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_FORM_REJECTED = "expense_form_rejected"
    
    # Budgets
    BUDGETS_REPLACED = "budgets_replaced"
    
    # Startup
    DEMO_DATA_SEEDED = "demo_data_seeded"
    STORED_DATA_LOADED = "stored_data_loaded"
    
    # Session
    USER_SIGNED_UP = "user_signed_up"
    USER_LOGGED_IN = "user_logged_in"
    USER_LOGGED_OUT = "user_logged_out"
    
    # Failures
    CORRUPT_DATA_DETECTED = "corrupt_data_detected"
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.
    
    This is the core unit of the audit trail.
    """
    
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    
    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'budget', 'user')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )
    
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None
    
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )
    
    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.
    
    Usage:
        event = AuditEventBuilder.expense_added(expense_id, category, amount)
        event = AuditEventBuilder.user_logged_in(email)
    """
    
    @staticmethod
    def expense_added(
        expense_id: str,
        category: str,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {category} - {amount}",
            details={
                "category": category,
                "amount": amount,
            },
            is_user_action=True,
        )
    
    @staticmethod
    def expense_deleted(
        expense_id: str,
        found: bool,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            description=(
                "Expense deleted" if found else "Delete requested for unknown expense"
            ),
            details={"found": found},
            is_user_action=True,
        )
    
    @staticmethod
    def expense_form_rejected(
        issues: list[dict],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_FORM_REJECTED,
            severity=AuditSeverity.DEBUG,
            entity_type="form",
            description=f"Expense form rejected with {len(issues)} issues",
            details={"issues": issues},
            is_user_action=True,
        )
    
    @staticmethod
    def budgets_replaced(
        count: int,
        total_limit: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGETS_REPLACED,
            entity_type="budget",
            description=f"Budgets saved: {count} categories",
            details={
                "count": count,
                "total_limit": total_limit,
            },
            is_user_action=True,
        )
    
    @staticmethod
    def demo_data_seeded(
        key: str,
        count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DEMO_DATA_SEEDED,
            entity_type=key,
            description=f"No stored {key}, seeded {count} demo records",
            details={"key": key, "count": count},
        )
    
    @staticmethod
    def stored_data_loaded(
        key: str,
        count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORED_DATA_LOADED,
            severity=AuditSeverity.DEBUG,
            entity_type=key,
            description=f"Loaded {count} {key} from store",
            details={"key": key, "count": count},
        )
    
    @staticmethod
    def user_signed_up(email: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_SIGNED_UP,
            entity_type="user",
            entity_id=email,
            description="New user signed up",
            is_user_action=True,
        )
    
    @staticmethod
    def user_logged_in(email: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_LOGGED_IN,
            entity_type="user",
            entity_id=email,
            description="User logged in",
            is_user_action=True,
        )
    
    @staticmethod
    def user_logged_out(email: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_LOGGED_OUT,
            entity_type="user",
            entity_id=email,
            description="User logged out",
            is_user_action=True,
        )
    
    @staticmethod
    def corrupt_data_detected(
        key: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CORRUPT_DATA_DETECTED,
            severity=AuditSeverity.ERROR,
            entity_type=key,
            description=f"Stored {key} could not be parsed",
            error_message=error_message,
            details={"key": key},
        )
    
    @staticmethod
    def storage_error(
        operation: str,
        key: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            entity_type=key,
            description=f"Storage {operation} failed for '{key}'",
            error_message=error_message,
            details={"operation": operation, "key": key},
        )
