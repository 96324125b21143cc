"""
Audit Logger

DESIGN DECISION: Every user action on the bill is logged.
This provides:
1. Debugging capability when a total looks wrong
2. An activity history the user can look at
3. A record of failed submissions

The audit logger:
- Is synchronous, like the ledger it sits next to
- Keeps a bounded in-memory history (nothing is persisted)
- Never raises into the calling flow
"""

from collections import deque
from typing import Optional

import structlog

from billsplit.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


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


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory history (for the activity panel)
    """

    def __init__(self, history_size: int = 50):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger("billsplit.audit")

    def log(self, event: AuditEvent) -> AuditEvent:
        """
        Log an audit event locally and remember it.

        Returns the event for chaining.
        """
        self._history.append(event)

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
            # Logging must not break the user's action
            self._history.append(AuditEventBuilder.system_error(
                error_type="audit_log_failed",
                error_message=str(e),
                details={"event_id": str(event.event_id)},
            ))

        return event

    def recent_events(self, limit: Optional[int] = None) -> list[AuditEvent]:
        """Most recent events first."""
        events = list(reversed(self._history))
        if limit is not None:
            events = events[:limit]
        return events

    def clear(self) -> None:
        self._history.clear()

    def log_participant_added(self, participant_id: str, name: str) -> None:
        """Log participant creation."""
        self.log(AuditEventBuilder.participant_added(
            participant_id=participant_id,
            name=name,
        ))

    def log_participant_removed(
        self,
        participant_id: str,
        name: str,
        affected_items: list[str],
    ) -> None:
        """Log participant removal and the items it touched."""
        self.log(AuditEventBuilder.participant_removed(
            participant_id=participant_id,
            name=name,
            affected_items=affected_items,
        ))

    def log_item_added(
        self,
        item_id: str,
        name: str,
        price: str,
        assignee_count: int,
    ) -> None:
        """Log item creation."""
        self.log(AuditEventBuilder.item_added(
            item_id=item_id,
            name=name,
            price=price,
            assignee_count=assignee_count,
        ))

    def log_item_updated(
        self,
        item_id: str,
        name: str,
        price: str,
        assignee_count: int,
    ) -> None:
        """Log item edit."""
        self.log(AuditEventBuilder.item_updated(
            item_id=item_id,
            name=name,
            price=price,
            assignee_count=assignee_count,
        ))

    def log_item_removed(self, item_id: str, name: str) -> None:
        """Log item removal."""
        self.log(AuditEventBuilder.item_removed(item_id=item_id, name=name))

    def log_bill_reset(self, participant_count: int, item_count: int) -> None:
        """Log a full reset."""
        self.log(AuditEventBuilder.bill_reset(
            participant_count=participant_count,
            item_count=item_count,
        ))

    def log_summary_exported(self, item_count: int, tax_rate: Optional[str]) -> None:
        """Log summary export."""
        self.log(AuditEventBuilder.summary_exported(
            item_count=item_count,
            tax_rate=tax_rate,
        ))

    def log_validation_failed(self, action: str, error_code: str, message: str) -> None:
        """Log a rejected submission."""
        self.log(AuditEventBuilder.validation_failed(
            action=action,
            error_code=error_code,
            message=message,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
