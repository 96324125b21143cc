"""Shared fixtures: a ledger with predictable ids."""

from itertools import count

import pytest

from billsplit.ledger import BillLedger


def sequential_ids(prefix: str = "id"):
    """Id factory returning id-1, id-2, ..."""
    counter = count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def ledger() -> BillLedger:
    return BillLedger(id_factory=sequential_ids())


@pytest.fixture
def alice_and_bob(ledger):
    """Ledger with Alice and Bob already seated."""
    alice = ledger.add_participant("Alice")
    bob = ledger.add_participant("Bob")
    return ledger, alice, bob
