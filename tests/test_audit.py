"""
Tests for the audit logger.
"""

from financeflow.audit import AuditLogger
from financeflow.models.audit import AuditEventType, AuditSeverity


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_events_are_kept_in_order(self):
        audit_logger = AuditLogger()
        audit_logger.log_expense_added("abc", "Other", "5")
        audit_logger.log_expense_deleted("abc", found=True)

        assert [e.event_type for e in audit_logger.events] == [
            AuditEventType.EXPENSE_ADDED,
            AuditEventType.EXPENSE_DELETED,
        ]

    def test_history_is_bounded(self):
        audit_logger = AuditLogger(history_size=2)
        for key in ("expenses", "budgets", "users"):
            audit_logger.log_demo_data_seeded(key, 1)

        assert [e.details["key"] for e in audit_logger.events] == ["budgets", "users"]

    def test_failure_events_are_errors(self):
        audit_logger = AuditLogger()
        audit_logger.log_corrupt_data("expenses", "bad json")
        audit_logger.log_storage_error("set", "budgets", "disk full")

        assert {e.severity for e in audit_logger.events} == {AuditSeverity.ERROR}
        assert audit_logger.events[1].details == {"operation": "set", "key": "budgets"}

    def test_logout_without_session(self):
        audit_logger = AuditLogger()
        audit_logger.log_user_logged_out(None)
        assert audit_logger.events[0].entity_id is None

    def test_form_rejection_is_debug(self):
        audit_logger = AuditLogger()
        audit_logger.log_expense_form_rejected([{"field": "amount"}])
        event = audit_logger.events[0]
        assert event.severity == AuditSeverity.DEBUG
        assert event.details == {"issues": [{"field": "amount"}]}
