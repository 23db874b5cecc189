"""Audit logging package."""

from financeflow.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
