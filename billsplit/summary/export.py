"""
Plain-Text Summary Export

Builds the text users paste into a group chat. Layout, in order:

    Bill Summary
    ============

    Subtotal: $42.00 (2 items)
    Tax rate: 10%                      <- only with a tax rate
    Total with tax: $46.20             <- only with a tax rate

    Items:
    - Pizza: $30.00 (Alice, Bob)
    - Wine: $12.00 (unassigned)

    Per person:
    - Alice: $15.00 (with tax: $16.50)
    - Bob: $15.00 (with tax: $16.50)

    Unassigned: $12.00                 <- only if some item has nobody left

Assignee ids that no longer resolve to a participant are printed as
"Unknown".
"""

from typing import TYPE_CHECKING, Optional

from billsplit.config import get_settings
from billsplit.summary.calculator import Number, format_currency, format_tax_rate

if TYPE_CHECKING:
    from billsplit.ledger.ledger import BillLedger


UNKNOWN_NAME = "Unknown"


def _count_label(count: int) -> str:
    return f"{count} item" if count == 1 else f"{count} items"


def export_summary(
    ledger: "BillLedger",
    tax_rate: Optional[Number] = None,
    title: Optional[str] = None,
) -> str:
    """
    Render the ledger as a deterministic plain-text report.

    Args:
        ledger: The bill to export
        tax_rate: Percent, or None to leave tax out entirely
        title: Header line. Defaults to settings.summary_title.
    """
    summary = ledger.summary(tax_rate)
    header = title or get_settings().summary_title

    lines = [header, "=" * len(header), ""]

    lines.append(
        f"Subtotal: {format_currency(summary.subtotal)} "
        f"({_count_label(summary.item_count)})"
    )
    if summary.has_tax:
        lines.append(f"Tax rate: {format_tax_rate(summary.tax_rate)}")
        lines.append(f"Total with tax: {format_currency(summary.total_with_tax)}")

    lines.append("")
    lines.append("Items:")
    if not ledger.items:
        lines.append("- none")
    for item in ledger.items:
        if item.is_unassigned:
            who = "unassigned"
        else:
            who = ", ".join(ledger.assignee_names(item))
        lines.append(f"- {item.name}: {format_currency(item.price)} ({who})")

    lines.append("")
    lines.append("Per person:")
    if not summary.shares:
        lines.append("- none")
    for row in summary.shares:
        line = f"- {row.name}: {format_currency(row.share)}"
        if row.share_with_tax is not None:
            line += f" (with tax: {format_currency(row.share_with_tax)})"
        lines.append(line)

    if summary.has_unassigned:
        lines.append("")
        lines.append(f"Unassigned: {format_currency(summary.unassigned_total)}")

    return "\n".join(lines)
