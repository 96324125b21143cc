"""Configuration package."""

from billsplit.config.settings import BillSplitSettings, get_settings

__all__ = [
    "BillSplitSettings",
    "get_settings",
]
