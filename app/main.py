"""
Streamlit Frontend for BillSplit

The screen people pass around the table at the end of dinner.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Every action gives visible feedback
3. Clear error messages in simple language
4. Nothing is computed here; the flow and the ledger do the math

One BillSplitFlow lives in st.session_state per browser session, so two
people opening the app never share a bill.
"""

from decimal import Decimal

import streamlit as st

from billsplit.models.ledger import BillItem
from billsplit.orchestrator import (
    BillSplitFlow,
    FlowResult,
    NotificationVariant,
    create_app_components,
)
from billsplit.summary import format_currency, format_tax_rate


# Page configuration
st.set_page_config(
    page_title="BillSplit",
    page_icon="🧾",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


def get_flow() -> BillSplitFlow:
    """Get or create the flow for this browser session."""
    if "flow" not in st.session_state:
        st.session_state.flow = create_app_components()
    return st.session_state.flow


def notify(result: FlowResult) -> None:
    """Show a flow notification as a toast."""
    note = result.notification
    if note is None:
        return
    icon = {
        NotificationVariant.SUCCESS: "✅",
        NotificationVariant.ERROR: "❌",
        NotificationVariant.INFO: "ℹ️",
    }[note.variant]
    st.toast(f"**{note.title}**: {note.description}", icon=icon)


def main():
    """Main application entry point."""
    flow = get_flow()

    st.title("🧾 BillSplit")
    st.markdown("Add the people, add what was ordered, and see who owes what.")

    col1, col2 = st.columns(2)
    with col1:
        render_people_section(flow)
    with col2:
        render_items_section(flow)

    st.markdown("---")
    render_summary_section(flow)

    st.markdown("---")
    render_footer(flow)


def render_people_section(flow: BillSplitFlow):
    """Add and remove participants."""
    st.subheader("👥 People")

    with st.form("add_person", clear_on_submit=True):
        name = st.text_input("Name", placeholder="Enter name")
        if st.form_submit_button("Add"):
            notify(flow.add_person(name))

    people = flow.ledger.participants
    if not people:
        st.info("No people added yet. Add people to split the bill with!")
        return

    for person in people:
        name_col, button_col = st.columns([5, 1])
        name_col.markdown(f"**{person.name}**")
        if button_col.button("✖", key=f"remove_person_{person.id}", help=f"Remove {person.name}"):
            notify(flow.remove_person(person.id))
            st.rerun()


def render_item_form(flow: BillSplitFlow, key: str, item: BillItem = None):
    """
    Name/price/assignee form shared by "add" and "edit".

    Returns (name, price, assigned_to, submitted).
    """
    people = flow.ledger.participants

    with st.form(key, clear_on_submit=item is None):
        name = st.text_input(
            "Item",
            value=item.name if item else "",
            placeholder="Enter item",
        )
        price = st.number_input(
            "Price ($)",
            value=float(item.price) if item else None,
            min_value=0.0,
            step=0.01,
            format="%.2f",
        )

        st.markdown("Split between:")
        assigned_to = [
            person.id
            for person in people
            if st.checkbox(
                person.name,
                value=bool(item and item.is_assigned_to(person.id)),
                key=f"{key}_{person.id}",
            )
        ]

        submitted = st.form_submit_button("Save" if item else "Add Item")

    return name, price, assigned_to, submitted


def render_items_section(flow: BillSplitFlow):
    """Add, edit and remove items."""
    st.subheader("🍕 Items")

    if not flow.ledger.participants:
        st.warning("Add people first before assigning items")
    else:
        name, price, assigned_to, submitted = render_item_form(flow, "add_item")
        if submitted:
            price_value = Decimal(str(price)) if price is not None else None
            issues = flow.item_issues(name, price_value, assigned_to)
            if issues:
                for issue in issues:
                    st.error(issue)
            else:
                notify(flow.add_item(name, price_value, assigned_to))

    items = flow.ledger.items
    if not items:
        st.info("No items added yet. Add items to split!")
        return

    for item in items:
        with st.container(border=True):
            info_col, button_col = st.columns([5, 1])
            info_col.markdown(f"**{item.name}**")
            info_col.caption(f"{format_currency(item.price)} • {item.split_label}")
            if item.is_unassigned:
                info_col.caption("⚠️ Nobody is assigned to this item")
            else:
                info_col.caption(", ".join(flow.ledger.assignee_names(item)))

            if button_col.button("✖", key=f"remove_item_{item.id}", help=f"Remove {item.name}"):
                notify(flow.remove_item(item.id))
                st.rerun()

            with st.expander("Edit"):
                name, price, assigned_to, submitted = render_item_form(
                    flow, f"edit_item_{item.id}", item
                )
                if submitted:
                    price_value = Decimal(str(price)) if price is not None else None
                    notify(flow.edit_item(item.id, name, price_value, assigned_to))
                    st.rerun()


def render_summary_section(flow: BillSplitFlow):
    """Totals, per-person table, tax and export."""
    settings = flow.settings
    st.subheader("📊 Bill Summary")

    if flow.ledger.is_empty:
        st.info("Add people and items to see the bill summary")
        return

    include_tax = st.toggle("Include tax")
    tax_rate = None
    if include_tax:
        entered = st.number_input(
            "Tax rate (%)",
            value=float(settings.default_tax_rate),
            min_value=float(settings.min_tax_rate),
            max_value=float(settings.max_tax_rate),
            step=0.25,
        )
        tax_rate = settings.clamp_tax_rate(Decimal(str(entered)))

    summary = flow.summary(tax_rate)

    total_col, tax_col = st.columns(2)
    with total_col:
        st.markdown("**Total bill**")
        st.markdown(
            f'<div class="big-number">{format_currency(summary.subtotal)}</div>',
            unsafe_allow_html=True,
        )
        st.caption(f"{summary.item_count} item(s)")
    if summary.has_tax:
        with tax_col:
            st.markdown(f"**Total with tax ({format_tax_rate(summary.tax_rate)})**")
            st.markdown(
                f'<div class="big-number">{format_currency(summary.total_with_tax)}</div>',
                unsafe_allow_html=True,
            )

    if summary.shares:
        rows = []
        for row in summary.shares:
            entry = {"Person": row.name, "Amount": format_currency(row.share)}
            if row.share_with_tax is not None:
                entry["With tax"] = format_currency(row.share_with_tax)
            rows.append(entry)
        st.table(rows)

    if summary.has_unassigned:
        st.warning(
            f"{format_currency(summary.unassigned_total)} of items have nobody "
            "assigned and are not included in anyone's amount."
        )

    st.caption("Each item is split equally among the people assigned to it.")

    if st.button("📋 Export summary"):
        result = flow.export(tax_rate)
        notify(result)
        if result.success:
            st.code(result.value, language=None)


def render_footer(flow: BillSplitFlow):
    """Reset button and activity log."""
    if st.button(
        "🗑️ Reset Bill",
        type="primary",
        disabled=flow.ledger.is_empty,
    ):
        notify(flow.reset())
        st.rerun()

    with st.expander("🕘 Activity"):
        events = flow.audit_logger.recent_events(limit=20)
        if not events:
            st.caption("Nothing yet.")
        for event in events:
            st.markdown(
                f"`{event.timestamp.strftime('%H:%M:%S')}` {event.description}"
            )


if __name__ == "__main__":
    main()
