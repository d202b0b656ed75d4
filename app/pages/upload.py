"""CSV upload page."""

from __future__ import annotations

import streamlit as st

from app.layout import card
from app.state import clear_drafts, get_snapshot, set_snapshot
from config import get_settings
from core import CsvFormatError, create_snapshot, load_transactions, summarize_upload
from core.logging_setup import get_logger
from core.models import UploadSummary

logger = get_logger(__name__)


def _render_summary(summary: UploadSummary) -> None:
    metric_cols = st.columns((1, 1, 1))
    metric_cols[0].metric("Transactions", f"{summary['total_transactions']:,}")
    metric_cols[1].metric("People", len(summary["people"]))
    metric_cols[2].metric("Categories", len(summary["categories"]))
    date_range = summary["date_range"]
    if date_range["start"]:
        st.caption(f"Rows run from {date_range['start']} to {date_range['end']}.")
    if summary["people"]:
        st.caption("People: " + ", ".join(summary["people"]))


def render_page() -> None:
    settings = get_settings()

    with card("Upload expenses", suffix=f"max {settings.max_upload_mb:g} MB"):
        st.write(
            "Export your shared expenses as CSV with `Date, Description, Category, Cost, Currency` "
            "followed by one column per person."
        )
        uploaded = st.file_uploader("Expense CSV", type=["csv"], accept_multiple_files=False)
        if uploaded is not None and st.button("Process file", type="primary"):
            try:
                transactions = load_transactions(uploaded.getvalue(), max_upload_mb=settings.max_upload_mb)
            except CsvFormatError as exc:
                st.error(str(exc))
                return

            if not transactions:
                st.warning("The file did not contain any usable transactions.")
                return

            set_snapshot(create_snapshot(transactions))
            clear_drafts()
            logger.info("Stored upload %s with %d transactions", uploaded.name, len(transactions))
            st.session_state["upload_summary"] = summarize_upload(transactions)
            st.success("File processed. Review store groupings on the Refine page next.")

    summary = st.session_state.get("upload_summary")
    if summary and get_snapshot() is not None:
        with card("Current upload"):
            _render_summary(summary)
            st.markdown('<a href="?page=refine" target="_self">Continue to store refinement →</a>', unsafe_allow_html=True)
