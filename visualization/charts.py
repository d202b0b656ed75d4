"""Plotly chart builders for the SplitSpend dashboard."""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from core.models import BalancePoint, CategoryRecommendation, HeatmapDay, SpendingPoint

from .theme import theme_tokens

TOKENS = theme_tokens()

_WEEKDAY_ORDER = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

__all__ = [
    "build_timeline_chart",
    "build_category_chart",
    "build_store_chart",
    "build_person_chart",
    "build_balance_chart",
    "build_heatmap_chart",
    "build_budget_chart",
]


def _empty_plotly_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=TOKENS.muted_color, size=14, family=TOKENS.text_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=20, b=0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def _transparent_layout(fig: go.Figure, **kwargs) -> go.Figure:
    fig.update_layout(
        margin=dict(l=0, r=0, t=20, b=0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
        **kwargs,
    )
    return fig


def build_timeline_chart(points: Sequence[SpendingPoint], currency_symbol: str | None = "$") -> go.Figure:
    """Render spend per time bucket as a filled line."""

    if not points:
        return _empty_plotly_figure("No spending in the selected range.")

    df = pd.DataFrame(points)
    prefix = currency_symbol or ""
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=df["label"],
            y=df["amount"],
            mode="lines+markers",
            name="Spend",
            line=dict(color=TOKENS.timeline_color, width=3, shape="spline", smoothing=0.45),
            marker=dict(size=7, color=TOKENS.timeline_color, line=dict(color=TOKENS.surface_color, width=1.5)),
            fill="tozeroy",
            fillcolor=TOKENS.timeline_fill,
            hovertemplate=f"%{{x}}<br>{prefix}%{{y:,.2f}}<extra></extra>",
        )
    )

    peaks = df.nlargest(min(3, len(df)), "amount")
    fig.add_trace(
        go.Scatter(
            x=peaks["label"],
            y=peaks["amount"],
            mode="markers",
            name="Peaks",
            marker=dict(size=10, color=TOKENS.peak_marker_color, line=dict(color=TOKENS.surface_color, width=2)),
            hoverinfo="skip",
            showlegend=False,
        )
    )

    return _transparent_layout(
        fig,
        xaxis_title="Period",
        yaxis_title="Spend",
        hovermode="x unified",
        xaxis=dict(showgrid=False, type="category"),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.grid_color, zeroline=False),
    )


def build_category_chart(points: Sequence[SpendingPoint]) -> go.Figure:
    """Render a donut chart of spend by category."""

    positive = [point for point in points if point["amount"] > 0]
    if not positive:
        return _empty_plotly_figure("No category spend recorded.")

    data = pd.DataFrame(positive)
    fig = px.pie(
        data,
        names="label",
        values="amount",
        hole=0.55,
        color="label",
        color_discrete_sequence=TOKENS.palette(len(data)),
    )
    fig.update_traces(
        textposition="inside",
        texttemplate="%{label}<br>%{percent:.1%}",
        hovertemplate="%{label}<br>Spend: %{value:,.2f}<extra></extra>",
        marker=dict(line=dict(color=TOKENS.surface_color, width=2)),
    )
    fig.update_layout(
        margin=dict(l=0, r=0, t=0, b=0),
        legend=dict(
            title="",
            orientation="v",
            yanchor="middle",
            y=0.5,
            xanchor="left",
            x=1.05,
            font=dict(color=TOKENS.text_color, family=TOKENS.text_font, size=TOKENS.text_size),
        ),
    )
    return fig


def _horizontal_bars(points: Sequence[SpendingPoint], *, axis_title: str, color: str, limit: int) -> go.Figure:
    data = pd.DataFrame(list(points)[:limit]).iloc[::-1].copy()
    data["formatted_amount"] = data["amount"].map(lambda value: f"{value:,.2f}")
    fig = px.bar(
        data,
        x="amount",
        y="label",
        orientation="h",
        text="formatted_amount",
        color_discrete_sequence=[color],
    )
    fig.update_traces(textposition="outside", cliponaxis=False, hovertemplate="%{y}<br>%{text}<extra></extra>")
    fig.update_layout(
        margin=dict(l=0, r=10, t=20, b=0),
        xaxis=dict(title="Amount", showgrid=False, zeroline=True, zerolinecolor=TOKENS.zero_line_color),
        yaxis=dict(title=axis_title, automargin=True),
        bargap=0.35,
        height=max(240, 28 * len(data)),
    )
    return fig


def build_store_chart(points: Sequence[SpendingPoint], limit: int = 15) -> go.Figure:
    """Render the top canonical stores by spend."""

    if not points:
        return _empty_plotly_figure("Confirm store groupings to see spend by store.")
    return _horizontal_bars(points, axis_title="Store", color=TOKENS.store_bar_color, limit=limit)


def build_person_chart(points: Sequence[SpendingPoint]) -> go.Figure:
    """Render each person's net share total."""

    if not points:
        return _empty_plotly_figure("No shares recorded.")
    return _horizontal_bars(points, axis_title="Person", color=TOKENS.person_bar_color, limit=len(points))


def build_balance_chart(history: Sequence[BalancePoint]) -> go.Figure:
    """Render each person's running balance as a stepped line."""

    if not history:
        return _empty_plotly_figure("No balance history yet.")

    df = pd.DataFrame(history)
    # keep the last balance recorded per person per day
    df = df.groupby(["person", "date"], as_index=False, sort=False).last()
    fig = px.line(
        df,
        x="date",
        y="balance",
        color="person",
        line_shape="hv",
        color_discrete_sequence=TOKENS.palette(df["person"].nunique()),
    )
    fig.add_hline(y=0, line=dict(color=TOKENS.muted_color, width=1, dash="dot"))
    return _transparent_layout(
        fig,
        xaxis_title="Date",
        yaxis_title="Balance",
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0, title=""),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.grid_color),
    )


def build_heatmap_chart(days: Sequence[HeatmapDay]) -> go.Figure:
    """Render a calendar heatmap with ISO weeks as columns and weekdays as rows."""

    if not days:
        return _empty_plotly_figure("No spending to plot.")

    df = pd.DataFrame(days)
    df["year_week"] = df["date"].str.slice(0, 4) + "-W" + df["week_of_year"].map(lambda week: f"{week:02d}")
    grid = df.pivot_table(index="day_of_week", columns="year_week", values="amount", aggfunc="sum")
    grid = grid.reindex([day for day in _WEEKDAY_ORDER if day in grid.index])

    fig = go.Figure(
        go.Heatmap(
            z=grid.to_numpy(),
            x=list(grid.columns),
            y=list(grid.index),
            colorscale=list(TOKENS.heatmap_scale),
            hoverongaps=False,
            hovertemplate="%{x} %{y}<br>Spend: %{z:,.2f}<extra></extra>",
        )
    )
    return _transparent_layout(fig, xaxis=dict(title="Week", type="category"), yaxis=dict(title=""))


def build_budget_chart(recommendations: Sequence[CategoryRecommendation]) -> go.Figure:
    """Compare each category's monthly average with its suggested budget."""

    if not recommendations:
        return _empty_plotly_figure("Not enough data for budget suggestions.")

    df = pd.DataFrame(recommendations)
    fig = go.Figure()
    fig.add_trace(
        go.Bar(x=df["category"], y=df["current_monthly_average"], name="Monthly average", marker_color=TOKENS.budget_average_color)
    )
    fig.add_trace(
        go.Bar(x=df["category"], y=df["suggested_budget"], name="Suggested budget", marker_color=TOKENS.budget_suggested_color)
    )
    return _transparent_layout(
        fig,
        barmode="group",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.grid_color),
    )
