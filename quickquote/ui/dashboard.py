"""Streamlit dashboard to move quotes through their stages and review income."""
from datetime import date
from pathlib import Path

import streamlit as st

# Allow running via "streamlit run quickquote/ui/dashboard.py" without installing the package
# by ensuring the repository root is on ``sys.path``.
if __package__ in {None, ""}:
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[2]))

from quickquote.core.config import load_settings
from quickquote.core.errors import ValidationError
from quickquote.core.logging import configure_logging
from quickquote.core.models import ACCEPTED, COMPLETE, DRAFT, SCHEDULED_WORK, SENT, STAGES, LineItem, Quote
from quickquote.lifecycle import new_quote
from quickquote.reporting import MONTH_NAMES, compare_with_previous, next_period, previous_period
from quickquote.reporting.templates import statement_rows
from quickquote.state import AppState
from quickquote.storage import JsonFileKeyValueStore, QuoteStore, TransitionOutcome

# Button label and store method for the action available in each stage.
STAGE_ACTIONS = {
    DRAFT: ("Send", "send_draft"),
    SENT: ("Mark accepted", "accept"),
    ACCEPTED: ("Deposit paid", "mark_deposit_paid"),
    SCHEDULED_WORK: ("Work complete", "mark_work_complete"),
    COMPLETE: ("Final payment received", "mark_final_payment"),
}


def _load_session() -> tuple[QuoteStore, AppState]:
    """Open the store once per session so reruns keep the same objects."""

    if "store" not in st.session_state:
        configure_logging()
        settings = load_settings()
        storage = JsonFileKeyValueStore(settings.data_dir)
        store = QuoteStore(storage)
        store.load()
        st.session_state.store = store
        st.session_state.settings = settings
        st.session_state.app_state = AppState(storage).load()
        today = date.today()
        st.session_state.period = (today.month, today.year)
    return st.session_state.store, st.session_state.app_state


def _report_outcome(outcome: TransitionOutcome, success: str) -> None:
    if outcome.ok:
        st.success(success)
    else:
        st.info(outcome.message or "Nothing to do.")


def _run_action(store: QuoteStore, app_state: AppState, stage: str, quote: Quote) -> None:
    label, method = STAGE_ACTIONS[stage]
    try:
        if method == "send_draft":
            outcome = store.send_draft(quote.id, business=app_state.business)
        else:
            outcome = getattr(store, method)(quote.id)
    except ValidationError as exc:
        st.warning(str(exc))
        return
    _report_outcome(outcome, f"{label}: {quote.customer_name or quote.id}")


def _resend(store: QuoteStore, quote: Quote) -> None:
    _report_outcome(store.resend(quote.id), "Quote resent successfully!")
    st.rerun()


def _render_quote(store: QuoteStore, app_state: AppState, stage: str, quote: Quote) -> None:
    with st.container(border=True):
        left, right = st.columns([3, 1])
        left.markdown(f"**{quote.customer_name or 'Unnamed client'}** · {quote.service or 'Quote'}")
        left.caption(f"R{quote.amount:,.2f} · {quote.id}")
        if stage == SENT and quote.sent_dates:
            left.caption(f"Sent {len(quote.sent_dates)} time(s), last on {quote.sent_dates[-1]}")

        if stage == COMPLETE and quote.is_paid:
            right.write("Paid")
        elif right.button(STAGE_ACTIONS[stage][0], key=f"{stage}-{quote.id}"):
            _run_action(store, app_state, stage, quote)
            st.rerun()

        if stage == SENT and right.button("Resend", key=f"resend-{quote.id}"):
            _resend(store, quote)
        if stage == DRAFT and right.button("Delete", key=f"delete-{quote.id}"):
            _report_outcome(store.delete_draft(quote.id), "Draft deleted")
            st.rerun()


def _render_new_quote(store: QuoteStore) -> None:
    settings = st.session_state.settings
    with st.expander("New quote"):
        with st.form("new-quote", clear_on_submit=True):
            customer = st.text_input("Customer name")
            phone = st.text_input("Phone number")
            description = st.text_input("Description")
            quantity = st.number_input("Quantity", min_value=0.0, value=1.0)
            price = st.number_input("Unit price", min_value=0.0, value=0.0)
            vat = st.number_input("VAT %", 0.0, 100.0, float(settings.default_vat_percentage))
            deposit = st.number_input("Deposit %", 0.0, 100.0, float(settings.default_deposit_percentage))
            if st.form_submit_button("Save draft"):
                quote = new_quote(
                    settings,
                    customer_name=customer,
                    phone_number=phone,
                    description=description,
                    line_items=[LineItem(description=description, quantity=quantity, price=price)],
                    vat_percentage=vat,
                    deposit_percentage=deposit,
                )
                _report_outcome(store.save_draft(quote), "Draft saved")


def _render_board(store: QuoteStore, app_state: AppState) -> None:
    _render_new_quote(store)
    tabs = st.tabs([f"{stage} ({len(store.quotes(stage))})" for stage in STAGES])
    for tab, stage in zip(tabs, STAGES):
        with tab:
            quotes = store.quotes(stage)
            if not quotes:
                st.caption("No quotes here yet.")
            for quote in quotes:
                _render_quote(store, app_state, stage, quote)


def _render_reports(store: QuoteStore) -> None:
    month, year = st.session_state.period
    prev_col, label_col, next_col = st.columns([1, 3, 1])
    if prev_col.button("◀", key="prev-month"):
        st.session_state.period = previous_period(month, year)
        st.rerun()
    label_col.subheader(f"{MONTH_NAMES[month - 1]} {year}")
    if next_col.button("▶", key="next-month"):
        st.session_state.period = next_period(month, year)
        st.rerun()

    comparison = compare_with_previous(store.collection, month, year)
    report, deltas = comparison.current, comparison.deltas
    first, second, third = st.columns(3)
    first.metric("Gross Revenue", f"R{report.gross_revenue:,.2f}", f"{deltas['revenue']:.0f}%")
    second.metric("Net Revenue", f"R{report.net_revenue:,.2f}", f"{deltas['net_revenue']:.0f}%")
    third.metric("Service Fees", f"R{report.service_fees:,.2f}")
    fourth, fifth, sixth = st.columns(3)
    fourth.metric("Jobs Completed", report.jobs_completed, f"{deltas['jobs_completed']:.0f}%")
    fifth.metric("Quote Conversion", f"{report.quote_conversion:.0f}%", f"{deltas['quote_conversion']:.0f}%")
    sixth.metric("Average Job", f"R{report.average_job_size:,.2f}", f"{deltas['average_job_size']:.0f}%")

    rows = statement_rows(report)
    if rows:
        st.dataframe(rows, use_container_width=True)
    else:
        st.caption("No payments received this month.")


def main() -> None:
    st.set_page_config(page_title="QuickQuote", layout="wide")
    store, app_state = _load_session()
    st.title(app_state.business.name or "QuickQuote")

    views = ["Quotes"] + (["Reports"] if app_state.can_open("report") else [])
    view = st.sidebar.radio("View", views)
    if view == "Reports":
        _render_reports(store)
    else:
        _render_board(store, app_state)


if __name__ == "__main__":
    main()
