"""
Data Models Package

This package contains all Pydantic models used in BillSplit.
Everything the ledger returns is one of these frozen snapshots.
"""

from billsplit.models.ledger import (
    BillItem,
    LedgerSummary,
    Participant,
    ParticipantShare,
    ValidationIssue,
)
from billsplit.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "BillItem",
    "LedgerSummary",
    "Participant",
    "ParticipantShare",
    "ValidationIssue",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
