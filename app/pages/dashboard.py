"""Filterable spending dashboard."""

from __future__ import annotations

from typing import Any

import pandas as pd
import streamlit as st

from app.layout import card, describe_filters, render_sidebar_filters
from config import get_settings
from core import MalformedFilterError
from core.models import SessionSnapshot, TransactionPage
from core.service import analyze, dataset_metadata, parse_filters
from visualization import (
    build_category_chart,
    build_person_chart,
    build_store_chart,
    build_timeline_chart,
)


def _transactions_table(page: TransactionPage) -> pd.DataFrame:
    rows = [
        {
            "Date": transaction.date,
            "Store": transaction.description,
            "Category": transaction.category,
            "Cost": transaction.cost,
            "Currency": transaction.currency,
            **{share.name: share.amount for share in transaction.shares},
        }
        for transaction in page["transactions"]
    ]
    return pd.DataFrame(rows)


def _render_table(snapshot: SessionSnapshot, params: dict[str, Any]) -> None:
    page_size = get_settings().default_page_size
    page_number = int(st.session_state.get("dashboard_page", 1))
    page = analyze(snapshot, {**params, "page": page_number, "pageSize": page_size})
    total_pages = max(1, -(-page["total"] // page_size))
    if page_number > total_pages:
        page_number = total_pages
        page = analyze(snapshot, {**params, "page": page_number, "pageSize": page_size})

    table = _transactions_table(page)
    if table.empty:
        st.info("No transactions match the current filters.")
    else:
        st.dataframe(table, hide_index=True, use_container_width=True)

    nav_cols = st.columns((1, 2, 1))
    if nav_cols[0].button("← Previous", disabled=page_number <= 1):
        st.session_state["dashboard_page"] = page_number - 1
        st.rerun()
    nav_cols[1].caption(f"Page {page_number} of {total_pages} · {page['total']} transactions")
    if nav_cols[2].button("Next →", disabled=page_number >= total_pages):
        st.session_state["dashboard_page"] = page_number + 1
        st.rerun()


def render_page(snapshot: SessionSnapshot) -> None:
    params = render_sidebar_filters(dataset_metadata(snapshot))
    try:
        filters = parse_filters(params)
    except MalformedFilterError as exc:
        st.error(str(exc))
        return

    st.caption(describe_filters(filters))

    with card("Spending over time"):
        interval = st.radio("Interval", ["day", "week", "month"], index=2, horizontal=True)
        points = analyze(snapshot, {**params, "groupBy": "time", "interval": interval})
        st.plotly_chart(build_timeline_chart(points, currency_symbol=None), use_container_width=True)

    category_col, store_col = st.columns(2, gap="large")
    with category_col:
        with card("By category"):
            chart = build_category_chart(analyze(snapshot, {**params, "groupBy": "category"}))
            st.plotly_chart(chart, use_container_width=True, key="category-donut")
    with store_col:
        with card("By store"):
            chart = build_store_chart(analyze(snapshot, {**params, "groupBy": "store"}))
            st.plotly_chart(chart, use_container_width=True, key="store-bars")

    with card("By person", suffix="net shares"):
        chart = build_person_chart(analyze(snapshot, {**params, "groupBy": "person"}))
        st.plotly_chart(chart, use_container_width=True, key="person-bars")

    with card("Transactions"):
        _render_table(snapshot, params)

