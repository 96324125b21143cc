"""
Bill Ledger

The single source of truth for one bill: who is at the table, what was
ordered, and who shared each item.

GUARANTEES:
- Every mutation validates first and mutates second. A raised error means
  the ledger is exactly as it was.
- Removing a participant scrubs their id from every item. Items left with
  nobody assigned are kept; they still count toward the total but toward
  nobody's share.
- Ids are never reused, even after deletion or reset.
- Reads return frozen snapshots. Callers cannot edit ledger state.
"""

from decimal import Decimal
from typing import Callable, Iterable, Optional
from uuid import uuid4

from billsplit.errors import DuplicateIdError, InvalidIdError, NotFoundError
from billsplit.models.ledger import (
    BillItem,
    LedgerSummary,
    Participant,
    ParticipantShare,
)
from billsplit.summary.calculator import Number, apply_tax, to_tax_rate
from billsplit.summary.export import UNKNOWN_NAME, export_summary
from billsplit.validation import LedgerValidator


IdFactory = Callable[[], str]


def default_id_factory() -> str:
    return str(uuid4())


class BillLedger:
    """
    Participants and items of a single bill, kept consistent.

    Usage:
        ledger = BillLedger()
        alice = ledger.add_participant("Alice")
        bob = ledger.add_participant("Bob")
        ledger.add_item("Pizza", 30, [alice.id, bob.id])
        ledger.participant_share(alice.id)  # Decimal("15")
    """

    def __init__(
        self,
        id_factory: Optional[IdFactory] = None,
        validator: Optional[LedgerValidator] = None,
    ):
        """
        Initialize an empty ledger.

        Args:
            id_factory: Returns a fresh unique string per call.
                        Defaults to uuid4 strings.
            validator: Input validator. Defaults to LedgerValidator().
        """
        self._id_factory = id_factory or default_id_factory
        self._validator = validator or LedgerValidator()
        self._participants: list[Participant] = []
        self._items: list[BillItem] = []
        self._issued_ids: set[str] = set()

    # =========================================================================
    # SNAPSHOTS
    # =========================================================================

    @property
    def participants(self) -> tuple[Participant, ...]:
        return tuple(self._participants)

    @property
    def items(self) -> tuple[BillItem, ...]:
        return tuple(self._items)

    @property
    def validator(self) -> LedgerValidator:
        return self._validator

    @property
    def is_empty(self) -> bool:
        return not self._participants and not self._items

    def get_participant(self, participant_id: str) -> Optional[Participant]:
        for participant in self._participants:
            if participant.id == participant_id:
                return participant
        return None

    def get_item(self, item_id: str) -> Optional[BillItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def participant_name(self, participant_id: str) -> str:
        """Name for an id, or 'Unknown' if nobody has it."""
        participant = self.get_participant(participant_id)
        return participant.name if participant else UNKNOWN_NAME

    def assignee_names(self, item: BillItem) -> list[str]:
        return [self.participant_name(pid) for pid in item.assigned_to]

    def items_assigned_to(self, participant_id: str) -> list[BillItem]:
        return [item for item in self._items if item.is_assigned_to(participant_id)]

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def _next_id(self) -> str:
        new_id = self._id_factory()
        # ids are stored verbatim, so reject anything the models would strip
        if not isinstance(new_id, str) or not new_id or new_id != new_id.strip():
            raise InvalidIdError(new_id)
        if new_id in self._issued_ids:
            raise DuplicateIdError(new_id)
        return new_id

    def add_participant(self, name: str) -> Participant:
        """
        Add a participant at the end of the list.

        Raises:
            EmptyNameError: name is blank after trimming
            DuplicateIdError: id factory repeated itself
            InvalidIdError: id factory returned an empty or padded id
        """
        clean_name = self._validator.normalize_name(name, kind="participant")
        participant = Participant(id=self._next_id(), name=clean_name)

        self._issued_ids.add(participant.id)
        self._participants.append(participant)
        return participant

    def remove_participant(self, participant_id: str) -> bool:
        """
        Remove a participant and scrub their id from every item.

        Unknown ids are a no-op. Items are never deleted here, even when
        this leaves them with nobody assigned.

        Returns:
            True if a participant was removed
        """
        remaining = [p for p in self._participants if p.id != participant_id]
        removed = len(remaining) != len(self._participants)

        self._participants = remaining
        self._items = [
            item.model_copy(update={
                "assigned_to": tuple(pid for pid in item.assigned_to if pid != participant_id),
            })
            if item.is_assigned_to(participant_id) else item
            for item in self._items
        ]
        return removed

    def add_item(
        self,
        name: str,
        price: Number,
        assigned_to: Iterable[str],
    ) -> BillItem:
        """
        Add an item at the end of the list.

        Assignee ids are taken as given: they are not checked against the
        participant list and duplicates are kept.

        Raises:
            EmptyNameError, InvalidPriceError, NoAssigneesError (first one wins)
            DuplicateIdError: id factory repeated itself
            InvalidIdError: id factory returned an empty or padded id
        """
        clean_name, clean_price, assignees = self._validator.validate_item(
            name, price, assigned_to
        )
        item = BillItem(
            id=self._next_id(),
            name=clean_name,
            price=clean_price,
            assigned_to=assignees,
        )

        self._issued_ids.add(item.id)
        self._items.append(item)
        return item

    def edit_item(
        self,
        item_id: str,
        name: str,
        price: Number,
        assigned_to: Iterable[str],
    ) -> BillItem:
        """
        Replace name, price and assignees of an item in place.

        The item keeps its id and its position.

        Raises:
            EmptyNameError, InvalidPriceError, NoAssigneesError (first one wins)
            NotFoundError: no item has this id
        """
        clean_name, clean_price, assignees = self._validator.validate_item(
            name, price, assigned_to
        )

        for index, item in enumerate(self._items):
            if item.id == item_id:
                updated = BillItem(
                    id=item.id,
                    name=clean_name,
                    price=clean_price,
                    assigned_to=assignees,
                )
                self._items[index] = updated
                return updated

        raise NotFoundError("item", item_id)

    def remove_item(self, item_id: str) -> bool:
        """Remove an item. Unknown ids are a no-op. Returns True if removed."""
        remaining = [item for item in self._items if item.id != item_id]
        removed = len(remaining) != len(self._items)
        self._items = remaining
        return removed

    def reset_all(self) -> bool:
        """
        Clear participants and items.

        Returns:
            False if there was nothing to reset
        """
        if self.is_empty:
            return False
        self._participants = []
        self._items = []
        return True

    # =========================================================================
    # CALCULATIONS
    # =========================================================================

    def total_bill(self) -> Decimal:
        return sum((item.price for item in self._items), Decimal("0"))

    def item_count(self) -> int:
        return len(self._items)

    def participant_share(self, participant_id: str) -> Decimal:
        """
        What one participant owes before tax.

        Each item they are assigned to adds price / number of assignees,
        using the assignees as they are right now.
        """
        return sum(
            (item.share_per_assignee() for item in self.items_assigned_to(participant_id)),
            Decimal("0"),
        )

    def unassigned_total(self) -> Decimal:
        """Sum of items nobody is assigned to (counted in the total, in no share)."""
        return sum(
            (item.price for item in self._items if item.is_unassigned),
            Decimal("0"),
        )

    def total_with_tax(self, tax_rate: Number) -> Decimal:
        return apply_tax(self.total_bill(), tax_rate)

    def participant_share_with_tax(self, participant_id: str, tax_rate: Number) -> Decimal:
        return apply_tax(self.participant_share(participant_id), tax_rate)

    def summary(self, tax_rate: Optional[Number] = None) -> LedgerSummary:
        """
        Compute the whole summary panel.

        Args:
            tax_rate: Percent, or None when tax is switched off.
        """
        rate = to_tax_rate(tax_rate) if tax_rate is not None else None
        subtotal = self.total_bill()

        shares = []
        for participant in self._participants:
            share = self.participant_share(participant.id)
            shares.append(ParticipantShare(
                participant_id=participant.id,
                name=participant.name,
                share=share,
                share_with_tax=apply_tax(share, rate) if rate is not None else None,
            ))

        return LedgerSummary(
            subtotal=subtotal,
            item_count=self.item_count(),
            participant_count=len(self._participants),
            tax_rate=rate,
            total_with_tax=apply_tax(subtotal, rate) if rate is not None else None,
            shares=tuple(shares),
            unassigned_total=self.unassigned_total(),
        )

    def export_summary(
        self,
        tax_rate: Optional[Number] = None,
        title: Optional[str] = None,
    ) -> str:
        """Plain-text report for the clipboard. See billsplit.summary.export."""
        return export_summary(self, tax_rate=tax_rate, title=title)
