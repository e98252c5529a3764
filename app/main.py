"""
Streamlit Frontend for the Budget Planner

This is the presentation layer. It owns the widgets, the delete
confirmation step and the chart display; every budgeting rule lives
in budget_planner.store.

DESIGN PRINCIPLES:
1. The page only calls store commands and reads store queries
2. Deleting an entry always asks for confirmation first
3. A broken chart never breaks the rest of the page
"""

import streamlit as st

from budget_planner.audit import AuditLogger
from budget_planner.formatting import describe_entry, format_currency
from budget_planner.models.entry import (
    CATEGORIES_BY_KIND,
    Entry,
    EntryKind,
)
from budget_planner.services.chart import PlotlyPieRenderer, render_chart
from budget_planner.services.storage import StorageError
from budget_planner.store import LedgerStore, create_ledger_store


# Page configuration
st.set_page_config(
    page_title="Budget Planner",
    page_icon="💰",
    layout="centered",
)

st.markdown("""
<style>
    .negative {
        color: #dc3545;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_audit_logger() -> AuditLogger:
    return AuditLogger()


@st.cache_resource
def get_store() -> LedgerStore:
    """Get or create the ledger store (cached for the server process)."""
    return create_ledger_store(audit_logger=get_audit_logger())


def run_command(command, *args) -> bool:
    """Run a store mutation, showing storage failures instead of crashing."""
    try:
        return bool(command(*args))
    except StorageError as e:
        st.error(f"Could not save your change: {e}")
        return False


def main():
    """Main application entry point."""
    store = get_store()

    st.title("Budget Planner")

    render_budget_goal_section(store)
    render_entry_form(store, EntryKind.INCOME)
    render_entry_form(store, EntryKind.EXPENSE)
    render_summary_section(store)
    render_chart_section(store)
    render_entry_list(store, EntryKind.INCOME)
    render_entry_list(store, EntryKind.EXPENSE)


def render_budget_goal_section(store: LedgerStore):
    """Budget goal input and over-budget warning."""
    st.subheader("Set Monthly Budget Goal")

    with st.form("budget_goal_form", clear_on_submit=True):
        raw_goal = st.text_input(
            "Monthly budget goal",
            placeholder="Enter budget goal",
            label_visibility="collapsed",
        )
        if st.form_submit_button("Set Budget"):
            if run_command(store.set_budget_goal, raw_goal):
                st.rerun()

    if store.budget_goal > 0:
        st.info(f"Monthly Budget Goal: {format_currency(store.budget_goal)}")
    if store.is_over_budget:
        st.warning(
            f"Warning: Expenses ({format_currency(store.total_expenses)}) "
            "exceed budget goal!"
        )


def render_entry_form(store: LedgerStore, kind: EntryKind):
    """Amount + category form for one entry kind."""
    label = "Income" if kind == EntryKind.INCOME else "Expense"
    command = store.add_income if kind == EntryKind.INCOME else store.add_expense

    st.subheader(f"Add {label}")

    with st.form(f"{kind.value}_form", clear_on_submit=True):
        col1, col2 = st.columns([2, 1])
        with col1:
            raw_amount = st.text_input(
                f"{label} amount",
                placeholder="Enter amount",
                label_visibility="collapsed",
            )
        with col2:
            category = st.selectbox(
                f"{label} category",
                options=CATEGORIES_BY_KIND[kind],
                label_visibility="collapsed",
            )
        if st.form_submit_button(f"Add {label}"):
            if run_command(command, raw_amount, category):
                st.rerun()


def render_summary_section(store: LedgerStore):
    """Totals and balance."""
    st.subheader("Summary")

    st.markdown(f"Total Income: {format_currency(store.total_income)}")
    st.markdown(f"Total Expenses: {format_currency(store.total_expenses)}")

    balance_text = format_currency(store.balance)
    if store.balance < 0:
        st.markdown(
            f'Balance: <span class="negative">{balance_text}</span>',
            unsafe_allow_html=True,
        )
    else:
        st.markdown(f"Balance: {balance_text}")


def render_chart_section(store: LedgerStore):
    """Expense breakdown pie chart."""
    st.subheader("Expense Breakdown")

    result = render_chart(
        store.chart_projection(),
        PlotlyPieRenderer(),
        audit_logger=get_audit_logger(),
    )
    if result.ok:
        st.plotly_chart(result.figure)
    else:
        st.error(result.error_message)


def render_entry_list(store: LedgerStore, kind: EntryKind):
    """Entry list with a two-step delete."""
    label = "Income" if kind == EntryKind.INCOME else "Expense"
    entries = store.income_entries if kind == EntryKind.INCOME else store.expense_entries

    st.subheader(f"{label} List")

    if not entries:
        st.caption(f"No {label.lower()} entries yet")
        return

    for entry in entries:
        col1, col2 = st.columns([4, 1])
        with col1:
            st.markdown(f"{format_currency(entry.amount)} - {entry.category}")
        with col2:
            if st.button("Delete", key=f"delete_{kind.value}_{entry.id}"):
                st.session_state.pending_delete = (kind.value, entry.id)
                st.rerun()

        if st.session_state.get("pending_delete") == (kind.value, entry.id):
            render_delete_confirmation(store, kind, entry)


def render_delete_confirmation(store: LedgerStore, kind: EntryKind, entry: Entry):
    """Ask before calling delete_entry."""
    st.warning(f"Are you sure you want to delete {describe_entry(kind, entry)}?")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Yes, delete", key=f"confirm_{kind.value}_{entry.id}", type="primary"):
            run_command(store.delete_entry, kind, entry.id)
            st.session_state.pending_delete = None
            st.rerun()
    with col2:
        if st.button("Cancel", key=f"cancel_{kind.value}_{entry.id}"):
            st.session_state.pending_delete = None
            st.rerun()


if __name__ == "__main__":
    main()
