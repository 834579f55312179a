"""
Streamlit Frontend for Monthly Ledger

The page a user opens every month to record what came in, what went
out and how their cards and loans are progressing.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Explicit confirmation before overwriting a month
3. Clear error messages in simple language
4. Visual feedback for all operations

The session (current month + components) lives in st.session_state.
Ledger notices are drained after every run and shown as toasts.
"""

import streamlit as st

from monthly_ledger.config import get_settings
from monthly_ledger.errors import ImportDocumentError, LedgerError
from monthly_ledger.finance import format_percent, installment_breakdown
from monthly_ledger.ledger import DebtFormInput, DuplicationOutcome
from monthly_ledger.models.ledger import Section
from monthly_ledger.models.month_key import MONTH_KEYS, month_name, successor
from monthly_ledger.models.notice import NoticeSeverity
from monthly_ledger.orchestrator import LedgerSession, create_app_components
from monthly_ledger.reports import (
    category_breakdown,
    format_currency,
    history,
    recommendations,
)


# Page configuration
st.set_page_config(
    page_title="Monthly Ledger",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

SECTION_LABELS = {
    Section.INCOMES: "💵 Incomes",
    Section.FIXED_EXPENSES: "🏠 Fixed expenses",
    Section.PURCHASES: "🛒 Purchases",
    Section.REVOLVING_DEBTS: "💳 Cards",
    Section.INSTALLMENT_LOANS: "🏦 Loans",
    Section.SAVINGS_GOALS: "🎯 Savings",
}


def get_session() -> LedgerSession:
    """Get or create the ledger session for this browser session."""
    if "ledger_session" not in st.session_state:
        st.session_state.ledger_session = create_app_components()
    return st.session_state.ledger_session


def money(value: float) -> str:
    return format_currency(value, get_settings().app.currency_symbol)


def show_notices(session: LedgerSession):
    """Turn pending ledger notices into toasts."""
    for notice in session.notices.drain():
        if notice.severity == NoticeSeverity.DEBUG:
            continue
        icon = "⚠️" if notice.severity in (NoticeSeverity.WARNING, NoticeSeverity.ERROR) else "✅"
        st.toast(notice.message, icon=icon)


def run_action(action, *args, **kwargs):
    """Run a ledger operation and show its error, if any, in plain words."""
    try:
        return action(*args, **kwargs)
    except LedgerError as e:
        st.error(str(e))
        return None


def main():
    """Main application entry point."""
    session = get_session()

    render_sidebar(session)

    key = session.current_month
    month = session.month_data(key)
    closed = session.is_closed(key)

    st.title(f"📒 {month_name(key)}")
    if closed:
        st.warning("🔒 This month is closed. Reopen it from the sidebar to make changes.")

    render_summary(session)

    tabs = st.tabs([SECTION_LABELS[section] for section in Section] + ["📊 Reports"])
    for tab, section in zip(tabs, Section):
        with tab:
            render_section(session, section, month, closed)
    with tabs[-1]:
        render_reports(session, month)

    show_notices(session)


def render_sidebar(session: LedgerSession):
    """Month selector, month actions and import/export."""
    st.sidebar.title("💰 Monthly Ledger")
    st.sidebar.markdown("---")

    current = session.current_month
    selected = st.sidebar.selectbox(
        "Month",
        options=MONTH_KEYS,
        index=MONTH_KEYS.index(current),
        format_func=month_name,
    )
    if selected != current:
        run_action(session.select_month, selected)
        st.rerun()

    closed = session.is_closed()
    if st.sidebar.button("🔓 Reopen month" if closed else "🔒 Close month"):
        run_action(session.toggle_month_closed)
        st.rerun()

    st.sidebar.markdown("---")
    st.sidebar.markdown("**Copy this month**")
    target = st.sidebar.selectbox(
        "Copy to",
        options=MONTH_KEYS,
        index=MONTH_KEYS.index(successor(current)),
        format_func=month_name,
    )
    overwrite = st.sidebar.checkbox(
        "Overwrite if the target already has entries",
        value=False,
    )
    if st.sidebar.button("📋 Duplicate"):
        outcome = run_action(session.duplicate_to, target, lambda: overwrite)
        if outcome == DuplicationOutcome.CANCELLED:
            st.sidebar.info(f"{month_name(target)} already has entries. Tick overwrite to replace them.")
        elif outcome == DuplicationOutcome.DUPLICATED:
            st.rerun()

    st.sidebar.markdown("---")
    st.sidebar.download_button(
        "⬇️ Export data",
        data=session.export_json(),
        file_name="ledger-export.json",
        mime="application/json",
    )
    uploaded = st.sidebar.file_uploader("⬆️ Import data", type=["json"])
    if uploaded and st.sidebar.button("Replace all data with this file"):
        try:
            session.import_json(uploaded.read())
            st.rerun()
        except ImportDocumentError as e:
            st.sidebar.error(f"Import rejected: {e}")


def render_summary(session: LedgerSession):
    summary = session.summary()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Income", money(summary.total_income))
    col2.metric("Expenses", money(summary.total_expenses))
    col3.metric("Free balance", money(summary.free_balance))
    rate = summary.savings_rate
    col4.metric("Savings rate", "-" if rate is None else f"{rate:.1f}%")


def render_section(session: LedgerSession, section: Section, month, closed: bool):
    """List + add form for one section."""
    key = session.current_month
    entries = month.section(section)

    if not entries:
        st.info("Nothing here yet.")

    for entry in entries:
        cols = st.columns([4, 2, 1, 1])
        cols[0].markdown(f"**{entry.name}** · day {entry.day_of_month}")

        if section.is_debt:
            cols[1].markdown(
                f"{money(entry.computed_installment or 0)} / month · "
                f"{entry.installments_paid}/{entry.term_months} paid"
            )
        elif section == Section.SAVINGS_GOALS:
            cols[1].progress(entry.progress, text=f"{money(entry.current_amount)} of {money(entry.target_amount)}")
        else:
            cols[1].markdown(money(entry.amount))

        if section.has_paid_flag:
            label = "✅ Paid" if entry.paid else "⬜ Unpaid"
            if cols[2].button(label, key=f"paid-{entry.id}", disabled=closed):
                run_action(session.editor.toggle_paid, key, section, entry.id)
                st.rerun()

        if cols[3].button("🗑️", key=f"del-{entry.id}", disabled=closed):
            run_action(session.editor.remove, key, section, entry.id)
            st.rerun()

    if section.has_paid_flag and entries:
        if st.button("Mark all as paid", key=f"all-{section.value}", disabled=closed):
            run_action(session.editor.mark_all_paid, key, section)
            st.rerun()

    if section == Section.SAVINGS_GOALS and entries:
        render_deposit_form(session, entries, closed)

    if not closed:
        with st.expander("➕ Add"):
            if section.is_debt:
                render_debt_form(session, section)
            elif section == Section.SAVINGS_GOALS:
                render_savings_form(session)
            else:
                render_amount_form(session, section)


def render_amount_form(session: LedgerSession, section: Section):
    with st.form(f"add-{section.value}", clear_on_submit=True):
        name = st.text_input("Name *")
        amount = st.number_input("Amount *", min_value=0.0, step=1000.0)
        category = st.text_input("Category", placeholder="Others")
        day = st.number_input("Day of month", min_value=1, max_value=31, value=1)
        if st.form_submit_button("Add", type="primary"):
            run_action(session.editor.add, session.current_month, section, {
                "name": name,
                "amount": amount,
                "category": category,
                "day_of_month": int(day),
            })
            st.rerun()


def render_debt_form(session: LedgerSession, section: Section):
    loan = section == Section.INSTALLMENT_LOANS
    with st.form(f"add-{section.value}", clear_on_submit=True):
        raw = {
            "name": st.text_input("Name *"),
            "total_principal": st.number_input("Amount financed *", min_value=0.0, step=100000.0),
            "term_months": st.number_input("Installments *", min_value=1, value=12),
            "installments_paid": st.number_input("Installments already paid", min_value=0, value=0),
            "rate": st.text_input("Monthly rate (%)", value="0", help="Use a comma for decimals, e.g. 1,85"),
        }
        if loan:
            raw["insurance"] = st.text_input("Insurance over principal (%)", value="0")
            raw["insurance_tax"] = st.text_input("Tax on insurance (%)", value="0")

        if st.form_submit_button("Add", type="primary"):
            try:
                fields = DebtFormInput.from_form(raw).to_fields(section)
                entry = session.editor.add(session.current_month, section, fields)
            except LedgerError as e:
                st.error(str(e))
                return
            breakdown = installment_breakdown(
                entry.total_principal,
                entry.monthly_rate,
                entry.term_months,
                getattr(entry, "insurance_pct", 0.0),
                getattr(entry, "insurance_tax_pct", 0.0),
            )
            st.success(
                f"Installment {money(breakdown.total)} "
                f"(base {money(breakdown.base)}, rate {format_percent(entry.monthly_rate)}%)"
            )


def render_savings_form(session: LedgerSession):
    with st.form("add-savings", clear_on_submit=True):
        name = st.text_input("Goal *")
        target = st.number_input("Target *", min_value=0.0, step=100000.0)
        current = st.number_input("Saved so far", min_value=0.0, step=100000.0)
        if st.form_submit_button("Add", type="primary"):
            run_action(session.editor.add, session.current_month, Section.SAVINGS_GOALS, {
                "name": name,
                "target_amount": target,
                "current_amount": current,
            })
            st.rerun()


def render_deposit_form(session: LedgerSession, goals, closed: bool):
    with st.form("deposit", clear_on_submit=True):
        goal = st.selectbox("Deposit into", options=goals, format_func=lambda g: g.name)
        amount = st.number_input("Amount", min_value=0.0, step=50000.0)
        if st.form_submit_button("Deposit", disabled=closed):
            run_action(session.editor.deposit_savings, session.current_month, goal.id, amount)
            st.rerun()


def render_reports(session: LedgerSession, month):
    """Category split, history and tips."""
    st.markdown("### Spending by category")
    shares = category_breakdown(month)
    if shares:
        st.dataframe(
            [{"Category": s.category, "Amount": money(s.amount), "Share": f"{s.share:.1f}%"} for s in shares],
            hide_index=True,
        )
    else:
        st.info("No expenses recorded this month.")

    st.markdown("### History")
    st.dataframe(
        [
            {
                "Month": row.month_name,
                "Income": money(row.income),
                "Expenses": money(row.expenses),
                "Balance": money(row.balance),
                "Savings rate": "-" if row.savings_rate is None else f"{row.savings_rate:.1f}%",
            }
            for row in history(session.store)
        ],
        hide_index=True,
    )

    st.markdown("### Tips")
    for tip in recommendations(session.summary()):
        st.markdown(f"- **{tip.title}**: {tip.detail}")


if __name__ == "__main__":
    main()
