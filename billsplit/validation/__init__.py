"""Input validation package."""

from billsplit.validation.validator import LedgerValidator

__all__ = ["LedgerValidator"]
