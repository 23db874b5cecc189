"""
Audit Logger

DESIGN DECISION: Every mutation of stored state is logged.
This provides:
1. Traceability of what changed the store
2. Debugging capability when stored data goes bad

The audit logger:
- Is synchronous, like everything else in the app
- Writes to the structured local log only
- Never raises; a logging failure must not break a user action
"""

import logging
from collections import deque
from typing import Optional

import structlog

from financeflow.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through the stdlib root logger at `level`."""
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)


class AuditLogger:
    """
    Central audit logging service.
    
    Emits one `audit_event` log line per AuditEvent, at the level
    matching the event's severity.
    """
    
    def __init__(
        self,
        logger_name: str = "financeflow.audit",
        history_size: int = 200,
    ):
        self._logger = structlog.get_logger(logger_name)
        self._events: deque[AuditEvent] = deque(maxlen=history_size)
    
    @property
    def events(self) -> list[AuditEvent]:
        """Most recent events logged by this instance, oldest first."""
        return list(self._events)
    
    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        self._events.append(event)
        log_dict = event.to_log_dict()
        
        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            logging.getLogger(__name__).warning("audit log write failed: %s", e)
    
    def log_expense_added(self, expense_id: str, category: str, amount: str) -> None:
        """Log a new expense."""
        self.log(AuditEventBuilder.expense_added(
            expense_id=expense_id,
            category=category,
            amount=amount,
        ))
    
    def log_expense_deleted(self, expense_id: str, found: bool) -> None:
        """Log an expense deletion (or a delete of an unknown id)."""
        self.log(AuditEventBuilder.expense_deleted(
            expense_id=expense_id,
            found=found,
        ))
    
    def log_expense_form_rejected(self, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.expense_form_rejected(issues=issues))
    
    def log_budgets_replaced(self, count: int, total_limit: str) -> None:
        """Log a committed budget edit."""
        self.log(AuditEventBuilder.budgets_replaced(
            count=count,
            total_limit=total_limit,
        ))
    
    def log_demo_data_seeded(self, key: str, count: int) -> None:
        self.log(AuditEventBuilder.demo_data_seeded(key=key, count=count))
    
    def log_stored_data_loaded(self, key: str, count: int) -> None:
        self.log(AuditEventBuilder.stored_data_loaded(key=key, count=count))
    
    def log_user_signed_up(self, email: str) -> None:
        self.log(AuditEventBuilder.user_signed_up(email))
    
    def log_user_logged_in(self, email: str) -> None:
        self.log(AuditEventBuilder.user_logged_in(email))
    
    def log_user_logged_out(self, email: Optional[str]) -> None:
        self.log(AuditEventBuilder.user_logged_out(email))
    
    def log_corrupt_data(self, key: str, error_message: str) -> None:
        """Log stored data that failed to parse."""
        self.log(AuditEventBuilder.corrupt_data_detected(
            key=key,
            error_message=error_message,
        ))
    
    def log_storage_error(self, operation: str, key: str, error_message: str) -> None:
        """Log a failed store read or write."""
        self.log(AuditEventBuilder.storage_error(
            operation=operation,
            key=key,
            error_message=error_message,
        ))
