"""Smoke tests for the Plotly chart builders."""

from __future__ import annotations

from analytics import get_balance_analytics, get_budget_intelligence, get_spending_heatmap
from visualization import (
    build_balance_chart,
    build_budget_chart,
    build_category_chart,
    build_heatmap_chart,
    build_store_chart,
    build_timeline_chart,
)


def test_empty_inputs_render_placeholder_figures():
    for figure in (build_timeline_chart([]), build_category_chart([]), build_store_chart([]), build_heatmap_chart([])):
        assert len(figure.data) == 0
        assert figure.layout.annotations


def test_timeline_and_store_charts_plot_points():
    points = [{"label": "2025-01", "amount": 100.0}, {"label": "2025-02", "amount": 80.0}]

    timeline = build_timeline_chart(points)
    stores = build_store_chart([{"label": "Shell", "amount": 80.0}, {"label": "Netflix", "amount": 15.0}])

    assert list(timeline.data[0].x) == ["2025-01", "2025-02"]
    # horizontal bars list the largest store last so it renders on top
    assert list(stores.data[0].y) == ["Netflix", "Shell"]


def test_analytics_results_feed_charts(household_transactions):
    balance = build_balance_chart(get_balance_analytics(household_transactions)["balance_history"])
    heatmap = build_heatmap_chart(get_spending_heatmap(household_transactions))
    budget = build_budget_chart(get_budget_intelligence(household_transactions)["category_recommendations"])

    assert {trace.name for trace in balance.data} >= {"Ana", "Ben"}
    assert heatmap.data[0].type == "heatmap"
    assert len(budget.data) == 2


def test_palette_cycles_to_cover_every_series():
    from visualization import theme_tokens

    tokens = theme_tokens()
    colours = tokens.palette(len(tokens.series_palette) + 2)

    assert colours[: len(tokens.series_palette)] == list(tokens.series_palette)
    assert colours[-2:] == list(tokens.series_palette[:2])
