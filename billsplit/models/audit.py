"""
Audit Models for BillSplit

Every user action on the bill is recorded as an AuditEvent.
This provides:
1. A readable activity history in the UI
2. Debugging information when totals look wrong
3. A trail of what was added, edited and removed

DESIGN DECISION: Audit events are append-only. We never modify them.
They live in memory only; persistence is out of scope.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # People
    PARTICIPANT_ADDED = "participant_added"
    PARTICIPANT_REMOVED = "participant_removed"

    # Items
    ITEM_ADDED = "item_added"
    ITEM_UPDATED = "item_updated"
    ITEM_REMOVED = "item_removed"

    # Whole bill
    BILL_RESET = "bill_reset"
    SUMMARY_EXPORTED = "summary_exported"

    # Failures
    VALIDATION_FAILED = "validation_failed"
    SYSTEM_ERROR = "system_error"


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

    This is the core unit of our audit trail.
    Every user action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity ('participant', 'item', 'bill')"
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

    # Error information (if applicable)
    error_code: Optional[str] = None
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
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.participant_added(participant_id, name)
        event = AuditEventBuilder.item_removed(item_id, name)
    """

    @staticmethod
    def participant_added(participant_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PARTICIPANT_ADDED,
            entity_type="participant",
            entity_id=participant_id,
            description=f"Participant added: {name}",
            details={"name": name},
            is_user_action=True,
        )

    @staticmethod
    def participant_removed(
        participant_id: str,
        name: str,
        affected_items: list[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PARTICIPANT_REMOVED,
            entity_type="participant",
            entity_id=participant_id,
            description=f"Participant removed: {name}",
            details={
                "name": name,
                "affected_item_ids": affected_items,
            },
            is_user_action=True,
        )

    @staticmethod
    def item_added(
        item_id: str,
        name: str,
        price: str,
        assignee_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ITEM_ADDED,
            entity_type="item",
            entity_id=item_id,
            description=f"Item added: {name}",
            details={
                "name": name,
                "price": price,
                "assignee_count": assignee_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def item_updated(
        item_id: str,
        name: str,
        price: str,
        assignee_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ITEM_UPDATED,
            entity_type="item",
            entity_id=item_id,
            description=f"Item updated: {name}",
            details={
                "name": name,
                "price": price,
                "assignee_count": assignee_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def item_removed(item_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ITEM_REMOVED,
            entity_type="item",
            entity_id=item_id,
            description=f"Item removed: {name}",
            details={"name": name},
            is_user_action=True,
        )

    @staticmethod
    def bill_reset(participant_count: int, item_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_RESET,
            entity_type="bill",
            description="Bill reset",
            details={
                "participants_cleared": participant_count,
                "items_cleared": item_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def summary_exported(
        item_count: int,
        tax_rate: Optional[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_EXPORTED,
            entity_type="bill",
            description="Summary exported",
            details={
                "item_count": item_count,
                "tax_rate": tax_rate,
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        action: str,
        error_code: str,
        message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"Validation failed on {action}: {message}",
            details={"action": action},
            error_code=error_code,
            error_message=message,
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            details=details or {},
            error_code=error_type,
            error_message=error_message,
        )
