"""
Core Data Models for BillSplit

These models are the snapshots the ledger hands out. They are designed to:
1. Be immutable, so no caller can edit ledger state behind its back
2. Enforce the basic field rules (non-empty names, positive prices)
3. Be easy to render and to log

DESIGN DECISION: Amounts are Decimal, never float.
Prices arrive from form inputs as floats or strings; they are converted
through str() so that 19.99 stays 19.99 instead of 19.989999...
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Participant(BaseModel):
    """A person sharing the bill."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display name"
    )


class BillItem(BaseModel):
    """
    A priced line on the bill.

    assigned_to keeps the participant ids in the order they were given.
    It is never empty after add/edit, but removing a participant can leave
    an item with nobody assigned. Such an item still counts toward the
    bill total and contributes nothing to any share.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Item name"
    )
    price: Decimal = Field(
        ...,
        gt=0,
        description="Item price in dollars"
    )
    assigned_to: tuple[str, ...] = Field(
        default=(),
        description="Ids of the participants sharing this item"
    )

    @property
    def assignee_count(self) -> int:
        return len(self.assigned_to)

    @property
    def is_unassigned(self) -> bool:
        return not self.assigned_to

    @property
    def split_label(self) -> str:
        """Caption shown under the item, e.g. 'Split between 2 people'."""
        count = self.assignee_count
        noun = "person" if count == 1 else "people"
        return f"Split between {count} {noun}"

    def is_assigned_to(self, participant_id: str) -> bool:
        return participant_id in self.assigned_to

    def share_per_assignee(self) -> Decimal:
        """Equal split of the price among the current assignees."""
        if self.is_unassigned:
            return Decimal("0")
        return self.price / self.assignee_count


class ParticipantShare(BaseModel):
    """One row of the per-person summary table."""
    model_config = ConfigDict(frozen=True)

    participant_id: str
    name: str
    share: Decimal = Field(
        ...,
        description="Amount owed before tax"
    )
    share_with_tax: Optional[Decimal] = Field(
        default=None,
        description="Amount owed after tax, if a tax rate was given"
    )


class LedgerSummary(BaseModel):
    """
    Everything the summary panel needs, computed in one pass.

    NOTE: sum(shares) can be lower than subtotal when some items have no
    assignees left. unassigned_total is exactly that difference.
    """
    model_config = ConfigDict(frozen=True)

    subtotal: Decimal
    item_count: int = Field(ge=0)
    participant_count: int = Field(ge=0)
    tax_rate: Optional[Decimal] = None
    total_with_tax: Optional[Decimal] = None
    shares: tuple[ParticipantShare, ...] = ()
    unassigned_total: Decimal = Decimal("0")

    @property
    def has_tax(self) -> bool:
        return self.tax_rate is not None

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0 and self.participant_count == 0

    @property
    def has_unassigned(self) -> bool:
        return self.unassigned_total > 0


class ValidationIssue(BaseModel):
    """A single problem found in a form submission."""
    model_config = ConfigDict(frozen=True)

    field: str = Field(
        ...,
        description="Field with the issue ('name', 'price', 'assigned_to')"
    )
    code: str = Field(
        ...,
        description="Machine-readable reason, see ValidationErrorCode"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
