"""Bill arithmetic and export package."""

from billsplit.summary.calculator import (
    apply_tax,
    format_currency,
    format_tax_rate,
    to_decimal,
    to_tax_rate,
)
from billsplit.summary.export import UNKNOWN_NAME, export_summary

__all__ = [
    "UNKNOWN_NAME",
    "apply_tax",
    "export_summary",
    "format_currency",
    "format_tax_rate",
    "to_decimal",
    "to_tax_rate",
]
