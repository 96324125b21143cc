"""Bill ledger package."""

from billsplit.ledger.ledger import BillLedger, default_id_factory

__all__ = ["BillLedger", "default_id_factory"]
