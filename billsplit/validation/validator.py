"""
Ledger Input Validation

DESIGN DECISION: Item input is checked in a fixed order:

1. NAME     - non-empty after trimming
2. PRICE    - a finite number greater than zero
3. ASSIGNEES - at least one participant id

The ledger only ever sees the FIRST failure (raised as an exception), so
the user gets one notification and fixes one thing at a time. Forms can
instead ask for every issue at once via collect_item_issues() to decide
whether the submit button is enabled.

IMPORTANT: Validation never silently fixes input beyond trimming names.
Assignee ids are not checked against the participant list and duplicates
are kept as given.
"""

from decimal import Decimal
from typing import Iterable, Optional

from billsplit.errors import (
    EmptyNameError,
    InvalidPriceError,
    LedgerValidationError,
    NoAssigneesError,
)
from billsplit.models.ledger import ValidationIssue
from billsplit.summary.calculator import Number, to_decimal


NAME_MESSAGES = {
    "participant": "Please enter a name",
    "item": "Please enter an item name",
}
PRICE_MESSAGE = "Please enter a valid price"
ASSIGNEES_MESSAGE = "Please assign this item to at least one person"


class LedgerValidator:
    """
    Normalises and validates ledger input.

    Stateless; one instance can be shared by any number of ledgers.
    """

    def normalize_name(self, name: Optional[str], kind: str = "item") -> str:
        """Trim a name, rejecting empty results."""
        trimmed = (name or "").strip()
        if not trimmed:
            raise EmptyNameError(NAME_MESSAGES[kind], field="name")
        return trimmed

    def normalize_price(self, price: Optional[Number]) -> Decimal:
        """Convert a price to Decimal, rejecting non-numbers, NaN, infinities and values <= 0."""
        if price is None:
            raise InvalidPriceError(PRICE_MESSAGE, field="price")
        try:
            value = to_decimal(price)
        except ValueError as e:
            raise InvalidPriceError(PRICE_MESSAGE, field="price") from e
        if not value.is_finite() or value <= 0:
            raise InvalidPriceError(PRICE_MESSAGE, field="price")
        return value

    def normalize_assignees(self, assigned_to: Optional[Iterable[str]]) -> tuple[str, ...]:
        """Freeze the assignee ids, rejecting an empty selection."""
        if isinstance(assigned_to, str):
            assigned_to = (assigned_to,) if assigned_to else ()
        ids = tuple(assigned_to or ())
        if not ids:
            raise NoAssigneesError(ASSIGNEES_MESSAGE, field="assigned_to")
        return ids

    def validate_item(
        self,
        name: Optional[str],
        price: Optional[Number],
        assigned_to: Optional[Iterable[str]],
    ) -> tuple[str, Decimal, tuple[str, ...]]:
        """
        Run all item checks in order.

        Returns:
            (trimmed_name, price, assignee_ids)

        Raises:
            The first LedgerValidationError encountered.
        """
        clean_name = self.normalize_name(name, kind="item")
        clean_price = self.normalize_price(price)
        clean_assignees = self.normalize_assignees(assigned_to)
        return clean_name, clean_price, clean_assignees

    def collect_item_issues(
        self,
        name: Optional[str],
        price: Optional[Number],
        assigned_to: Optional[Iterable[str]],
    ) -> list[ValidationIssue]:
        """
        Report every problem with an item form at once.

        Same checks and same order as validate_item(), but nothing is raised.
        """
        checks = (
            lambda: self.normalize_name(name, kind="item"),
            lambda: self.normalize_price(price),
            lambda: self.normalize_assignees(assigned_to),
        )

        issues = []
        for check in checks:
            try:
                check()
            except LedgerValidationError as e:
                issues.append(ValidationIssue(
                    field=e.field,
                    code=e.code.value,
                    message=e.user_message,
                ))
        return issues
