"""
Tests for BillSplit

Test strategy:
1. Unit tests for individual components (models, validator, calculator)
2. Ledger tests for every mutation, query and the cascade rules
3. Flow tests for notifications and auditing
"""

import pytest
from decimal import Decimal

from pydantic import ValidationError

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


class TestLedgerModels:
    """Tests for ledger snapshot models."""

    def test_participant_creation(self):
        """Test Participant model creation."""
        person = Participant(id="p1", name="Alice")
        assert person.id == "p1"
        assert person.name == "Alice"

    def test_participant_strips_whitespace(self):
        """Test that whitespace is stripped from names."""
        person = Participant(id="p1", name="  Alice  ")
        assert person.name == "Alice"

    def test_participant_rejects_blank_name(self):
        """Test that a name of only spaces is rejected."""
        with pytest.raises(ValidationError):
            Participant(id="p1", name="   ")

    def test_participant_is_frozen(self):
        """Test that snapshots cannot be edited."""
        person = Participant(id="p1", name="Alice")
        with pytest.raises(ValidationError):
            person.name = "Mallory"

    def test_bill_item_creation(self):
        """Test BillItem model creation."""
        item = BillItem(
            id="i1",
            name="Pizza",
            price=Decimal("30.00"),
            assigned_to=("p1", "p2"),
        )
        assert item.price == Decimal("30.00")
        assert item.assignee_count == 2
        assert item.is_assigned_to("p1")
        assert not item.is_assigned_to("p3")

    def test_bill_item_rejects_zero_price(self):
        """Test that non-positive prices are rejected."""
        with pytest.raises(ValidationError):
            BillItem(id="i1", name="Water", price=Decimal("0"), assigned_to=("p1",))

    def test_bill_item_assignees_are_a_tuple(self):
        """Test that a list of assignees is frozen into a tuple."""
        item = BillItem(id="i1", name="Pizza", price=Decimal("1"), assigned_to=["p1"])
        assert item.assigned_to == ("p1",)

    def test_split_label_singular_and_plural(self):
        """Test the 'Split between' caption."""
        one = BillItem(id="i1", name="Soup", price=Decimal("5"), assigned_to=("p1",))
        two = BillItem(id="i2", name="Pizza", price=Decimal("5"), assigned_to=("p1", "p2"))
        assert one.split_label == "Split between 1 person"
        assert two.split_label == "Split between 2 people"

    def test_share_per_assignee(self):
        """Test equal split of the item price."""
        item = BillItem(id="i1", name="Pizza", price=Decimal("30"), assigned_to=("p1", "p2", "p3"))
        assert item.share_per_assignee() == Decimal("10")

    def test_share_per_assignee_when_unassigned(self):
        """Test that an item with nobody assigned splits to zero."""
        item = BillItem(id="i1", name="Wine", price=Decimal("12"), assigned_to=())
        assert item.is_unassigned
        assert item.share_per_assignee() == Decimal("0")


class TestLedgerSummaryModel:
    """Tests for LedgerSummary flags."""

    def test_empty_summary(self):
        """Test is_empty on a fresh bill."""
        summary = LedgerSummary(subtotal=Decimal("0"), item_count=0, participant_count=0)
        assert summary.is_empty is True
        assert summary.has_tax is False
        assert summary.has_unassigned is False

    def test_summary_with_tax_and_unassigned(self):
        """Test has_tax and has_unassigned."""
        summary = LedgerSummary(
            subtotal=Decimal("42"),
            item_count=2,
            participant_count=1,
            tax_rate=Decimal("10"),
            total_with_tax=Decimal("46.2"),
            shares=(ParticipantShare(participant_id="p1", name="Alice", share=Decimal("30")),),
            unassigned_total=Decimal("12"),
        )
        assert summary.has_tax is True
        assert summary.has_unassigned is True
        assert summary.shares[0].share_with_tax is None

    def test_validation_issue_creation(self):
        """Test ValidationIssue model creation."""
        issue = ValidationIssue(field="price", code="invalid_price", message="Please enter a valid price")
        assert issue.field == "price"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.ITEM_ADDED,
            description="Item added: Pizza",
        )
        assert event.event_type == AuditEventType.ITEM_ADDED
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.BILL_RESET,
            description="Bill reset",
            details={"items_cleared": 3},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "bill_reset"
        assert log_dict["details"]["items_cleared"] == 3

    def test_audit_event_builder_participant_removed(self):
        """Test AuditEventBuilder.participant_removed."""
        event = AuditEventBuilder.participant_removed(
            participant_id="p2",
            name="Bob",
            affected_items=["i1", "i2"],
        )
        assert event.event_type == AuditEventType.PARTICIPANT_REMOVED
        assert event.entity_id == "p2"
        assert event.details["affected_item_ids"] == ["i1", "i2"]
        assert event.is_user_action is True

    def test_audit_event_builder_validation_failed(self):
        """Test AuditEventBuilder.validation_failed."""
        event = AuditEventBuilder.validation_failed(
            action="add_item",
            error_code="invalid_price",
            message="Please enter a valid price",
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.error_code == "invalid_price"
        assert event.error_message == "Please enter a valid price"

    def test_audit_event_builder_system_error(self):
        """Test AuditEventBuilder.system_error."""
        event = AuditEventBuilder.system_error(
            error_type="item_not_found",
            error_message="Item not found: i9",
        )
        assert event.event_type == AuditEventType.SYSTEM_ERROR
        assert event.severity == AuditSeverity.ERROR
        assert event.details == {}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
