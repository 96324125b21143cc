"""
Main Orchestrator for BillSplit

This module ties the ledger, the validator and the audit logger together
and turns every user action into a result the UI can show directly.

DESIGN DECISION: The orchestrator enforces the boundaries:
- The UI never touches the ledger's lists, only flow methods and snapshots
- Validation errors become notifications, never crashes
- Every action is audited, including rejected ones

This is the "glue" between a rendering layer (Streamlit today) and the
framework-free ledger.
"""

from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from billsplit.audit import AuditLogger
from billsplit.config import BillSplitSettings, get_settings
from billsplit.errors import LedgerValidationError, NotFoundError
from billsplit.ledger import BillLedger
from billsplit.ledger.ledger import IdFactory
from billsplit.models.ledger import LedgerSummary
from billsplit.summary.calculator import Number, format_currency, format_tax_rate


class NotificationVariant(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Notification(BaseModel):
    """A toast-style message for the user."""
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.variant == NotificationVariant.ERROR


class FlowResult(BaseModel):
    """
    Outcome of one user action.

    value holds whatever the ledger returned (a snapshot, a report, a flag).
    notification is None when there is nothing worth telling the user.
    """
    model_config = ConfigDict(frozen=True)

    success: bool
    value: Any = None
    notification: Optional[Notification] = None


def _success(description: str, value: Any = None) -> FlowResult:
    return FlowResult(
        success=True,
        value=value,
        notification=Notification(title="Success", description=description),
    )


def _error(description: str) -> FlowResult:
    return FlowResult(
        success=False,
        notification=Notification(
            title="Error",
            description=description,
            variant=NotificationVariant.ERROR,
        ),
    )


class BillSplitFlow:
    """
    Orchestrates every user action on one bill.

    Flow for each mutation:
    1. Forward to the ledger (which validates before it mutates)
    2. Audit the outcome
    3. Return a FlowResult with a notification for the UI
    """

    def __init__(
        self,
        ledger: Optional[BillLedger] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[BillSplitSettings] = None,
    ):
        self._settings = settings or get_settings()
        self._ledger = ledger or BillLedger()
        self._audit_logger = audit_logger or AuditLogger(
            history_size=self._settings.activity_history_size,
        )

    @property
    def ledger(self) -> BillLedger:
        return self._ledger

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    @property
    def settings(self) -> BillSplitSettings:
        return self._settings

    def _rejected(self, action: str, error: LedgerValidationError) -> FlowResult:
        self._audit_logger.log_validation_failed(
            action=action,
            error_code=error.code.value,
            message=error.user_message,
        )
        return _error(error.user_message)

    # =========================================================================
    # PEOPLE
    # =========================================================================

    def add_person(self, name: str) -> FlowResult:
        try:
            participant = self._ledger.add_participant(name)
        except LedgerValidationError as e:
            return self._rejected("add_person", e)

        self._audit_logger.log_participant_added(participant.id, participant.name)
        return _success(f"{participant.name} has been added to the group", participant)

    def remove_person(self, participant_id: str) -> FlowResult:
        participant = self._ledger.get_participant(participant_id)
        affected = [item.id for item in self._ledger.items_assigned_to(participant_id)]

        removed = self._ledger.remove_participant(participant_id)
        if not removed:
            return FlowResult(success=True, value=False)

        self._audit_logger.log_participant_removed(
            participant_id=participant_id,
            name=participant.name,
            affected_items=affected,
        )
        return FlowResult(
            success=True,
            value=True,
            notification=Notification(
                title="Removed",
                description=f"{participant.name} has been removed from the group",
                variant=NotificationVariant.INFO,
            ),
        )

    # =========================================================================
    # ITEMS
    # =========================================================================

    def add_item(
        self,
        name: str,
        price: Number,
        assigned_to: Iterable[str],
    ) -> FlowResult:
        try:
            item = self._ledger.add_item(name, price, assigned_to)
        except LedgerValidationError as e:
            return self._rejected("add_item", e)

        self._audit_logger.log_item_added(
            item_id=item.id,
            name=item.name,
            price=str(item.price),
            assignee_count=item.assignee_count,
        )
        return _success(f"{item.name} has been added to the bill", item)

    def edit_item(
        self,
        item_id: str,
        name: str,
        price: Number,
        assigned_to: Iterable[str],
    ) -> FlowResult:
        try:
            item = self._ledger.edit_item(item_id, name, price, assigned_to)
        except LedgerValidationError as e:
            return self._rejected("edit_item", e)
        except NotFoundError as e:
            self._audit_logger.log_error(
                error_type="item_not_found",
                error_message=str(e),
                details={"item_id": item_id},
            )
            return _error("That item no longer exists")

        self._audit_logger.log_item_updated(
            item_id=item.id,
            name=item.name,
            price=str(item.price),
            assignee_count=item.assignee_count,
        )
        return _success(f"{item.name} has been updated", item)

    def remove_item(self, item_id: str) -> FlowResult:
        item = self._ledger.get_item(item_id)
        removed = self._ledger.remove_item(item_id)
        if not removed:
            return FlowResult(success=True, value=False)

        self._audit_logger.log_item_removed(item_id=item_id, name=item.name)
        return FlowResult(
            success=True,
            value=True,
            notification=Notification(
                title="Removed",
                description=f"{item.name} has been removed from the bill",
                variant=NotificationVariant.INFO,
            ),
        )

    def item_issues(
        self,
        name: str,
        price: Optional[Number],
        assigned_to: Iterable[str],
    ) -> list[str]:
        """Messages for everything wrong with an item form, empty if it can be submitted."""
        issues = self._ledger.validator.collect_item_issues(name, price, assigned_to)
        return [issue.message for issue in issues]

    # =========================================================================
    # WHOLE BILL
    # =========================================================================

    def reset(self) -> FlowResult:
        participant_count = len(self._ledger.participants)
        item_count = self._ledger.item_count()

        if not self._ledger.reset_all():
            return FlowResult(success=True, value=False)

        self._audit_logger.log_bill_reset(participant_count, item_count)
        return _success("Bill has been reset", True)

    def summary(self, tax_rate: Optional[Number] = None) -> LedgerSummary:
        return self._ledger.summary(tax_rate)

    def export(self, tax_rate: Optional[Number] = None) -> FlowResult:
        """Build the plain-text report for the clipboard."""
        try:
            report = self._ledger.export_summary(
                tax_rate=tax_rate,
                title=self._settings.summary_title,
            )
        except LedgerValidationError as e:
            return self._rejected("export", e)

        self._audit_logger.log_summary_exported(
            item_count=self._ledger.item_count(),
            tax_rate=format_tax_rate(tax_rate) if tax_rate is not None else None,
        )
        total = format_currency(self._ledger.total_bill())
        return _success(f"Summary ready ({total} total)", report)


def create_app_components(
    settings: Optional[BillSplitSettings] = None,
    id_factory: Optional[IdFactory] = None,
) -> BillSplitFlow:
    """
    Factory function to create a fully wired flow.

    Args:
        settings: Defaults to get_settings().
        id_factory: Unique id generator for the ledger. Defaults to uuid4.
    """
    settings = settings or get_settings()
    audit_logger = AuditLogger(history_size=settings.activity_history_size)
    ledger = BillLedger(id_factory=id_factory)

    return BillSplitFlow(
        ledger=ledger,
        audit_logger=audit_logger,
        settings=settings,
    )
