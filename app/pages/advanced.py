"""Advanced analytics: balances, heatmap, store and category insight, budgets."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from analytics import (
    get_balance_analytics,
    get_budget_intelligence,
    get_category_trends,
    get_store_analytics,
)
from app.layout import card
from config import get_settings
from core import MalformedFilterError, PersonNotFoundError
from core.models import BalanceAnalytics, BudgetIntelligence, SessionSnapshot
from core.service import dataset_metadata, payment_pattern_for, spending_heatmap
from visualization import build_balance_chart, build_budget_chart, build_heatmap_chart


def _render_balances(balances: BalanceAnalytics) -> None:
    current = balances["current_balance"]
    if current:
        metric_cols = st.columns(min(len(current), 4))
        for index, (person, balance) in enumerate(current.items()):
            metric_cols[index % len(metric_cols)].metric(
                person,
                f"{balance:,.2f}",
                f"{balances['payment_frequency'].get(person, 0)} shares",
                delta_color="off",
            )
    st.plotly_chart(build_balance_chart(balances["balance_history"]), use_container_width=True, key="balances")

    period = balances["largest_imbalance_period"]
    if period["max_imbalance"] > 0:
        st.caption(f"Largest imbalance of {period['max_imbalance']:,.2f} between {period['start']} and {period['end']}.")


def _render_heatmap(snapshot: SessionSnapshot) -> None:
    date_range = dataset_metadata(snapshot)["date_range"]
    params: dict[str, str] = {}
    if st.toggle("Limit to a date range", key="heatmap-limit") and date_range["start"]:
        range_cols = st.columns(2)
        params["startDate"] = range_cols[0].text_input("From", value=date_range["start"], key="heatmap-start")
        params["endDate"] = range_cols[1].text_input("To", value=date_range["end"], key="heatmap-end")
    try:
        days = spending_heatmap(snapshot, params)
    except MalformedFilterError as exc:
        st.error(str(exc))
        return
    st.plotly_chart(build_heatmap_chart(days), use_container_width=True, key="heatmap")


def _render_stores(snapshot: SessionSnapshot) -> None:
    stores = get_store_analytics(snapshot.transactions, snapshot.store_mappings)
    if not stores:
        st.info("No store activity recorded.")
        return
    table = pd.DataFrame(
        [
            {
                "Store": row["store_name"],
                "Visits": row["visit_frequency"],
                "Average": row["average_spend"],
                "Total": row["total_spent"],
                "First visit": row["first_visited"],
                "Last visit": row["last_visited"],
                "Busiest day": max(row["popular_days"], key=lambda day: day["frequency"])["day"]
                if row["popular_days"]
                else "",
            }
            for row in stores
        ]
    )
    st.dataframe(table, hide_index=True, use_container_width=True)


def _render_category_trends(snapshot: SessionSnapshot) -> None:
    trends = get_category_trends(snapshot.transactions, snapshot.store_mappings)
    if not trends:
        st.info("No category trends yet.")
        return
    table = pd.DataFrame(
        [
            {
                "Category": trend["category"],
                "Growth": trend["growth_rate"],
                "Average": trend["average_transaction_size"],
                "Largest": trend["largest_transaction"].cost,
                "Top store": trend["common_stores"][0]["store"] if trend["common_stores"] else "",
            }
            for trend in trends
        ]
    )
    st.dataframe(
        table,
        hide_index=True,
        use_container_width=True,
        column_config={"Growth": st.column_config.NumberColumn(format="%.1f%%")},
    )


def _render_budget(budget: BudgetIntelligence) -> None:
    st.plotly_chart(build_budget_chart(budget["category_recommendations"]), use_container_width=True, key="budget")

    if budget["anomalies"]:
        st.caption("Unusually high transactions")
        st.dataframe(
            pd.DataFrame(
                [
                    {
                        "Date": anomaly["transaction"].date,
                        "Store": anomaly["transaction"].description,
                        "Category": anomaly["transaction"].category,
                        "Cost": anomaly["transaction"].cost,
                        "Score": round(anomaly["score"], 2),
                    }
                    for anomaly in budget["anomalies"]
                ]
            ),
            hide_index=True,
            use_container_width=True,
        )

    if budget["predicted_next_month_spending"]:
        st.caption("Next month forecast")
        st.dataframe(pd.DataFrame(budget["predicted_next_month_spending"]), hide_index=True, use_container_width=True)


def _render_person(snapshot: SessionSnapshot) -> None:
    people = dataset_metadata(snapshot)["people"]
    if not people:
        st.info("No people found in this upload.")
        return
    person = st.selectbox("Person", people, key="pattern-person")
    try:
        pattern = payment_pattern_for(snapshot, person)
    except PersonNotFoundError as exc:
        st.info(str(exc))
        return

    metric_cols = st.columns(2)
    metric_cols[0].metric("Average transaction", f"{pattern['average_transaction_size']:,.2f}")
    weekdays = pattern["payment_frequency"]
    busiest = max(weekdays, key=weekdays.get) if weekdays else "n/a"
    metric_cols[1].metric("Busiest weekday", busiest)
    if pattern["preferred_stores"]:
        st.dataframe(pd.DataFrame(pattern["preferred_stores"]), hide_index=True, use_container_width=True)


def render_page(snapshot: SessionSnapshot) -> None:
    settings = get_settings()

    with card("Balances"):
        _render_balances(get_balance_analytics(snapshot.transactions))

    with card("Daily spending heatmap"):
        _render_heatmap(snapshot)

    left, right = st.columns(2, gap="large")
    with left:
        with card("Stores"):
            _render_stores(snapshot)
    with right:
        with card("Category trends"):
            _render_category_trends(snapshot)

    with card("Budget intelligence"):
        _render_budget(get_budget_intelligence(snapshot.transactions, **settings.budget_kwargs))

    with card("Payment patterns"):
        _render_person(snapshot)
