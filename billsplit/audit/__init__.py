"""Audit logging package."""

from billsplit.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
