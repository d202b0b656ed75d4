"""Plotly colour and typography tokens for the SplitSpend charts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeTokens:
    text_color: str = "#334155"
    text_font: str = "Inter"
    text_size: int = 12
    muted_color: str = "#94A3B8"
    surface_color: str = "#FFFFFF"
    grid_color: str = "rgba(148, 163, 184, 0.25)"
    zero_line_color: str = "#CBD5F5"

    # spending timeline
    timeline_color: str = "#0F766E"
    timeline_fill: str = "rgba(15, 118, 110, 0.12)"
    peak_marker_color: str = "#EA580C"

    # dimension bars
    store_bar_color: str = "#0369A1"
    person_bar_color: str = "#7C3AED"

    # budget comparison
    budget_average_color: str = "#0F766E"
    budget_suggested_color: str = "#94A3B8"

    # categories and people share one qualitative palette
    series_palette: tuple[str, ...] = (
        "#0F766E",
        "#0369A1",
        "#DC2626",
        "#EA580C",
        "#16A34A",
        "#7C3AED",
        "#CA8A04",
        "#DB2777",
    )
    heatmap_scale: tuple[str, ...] = ("#F0FDFA", "#5EEAD4", "#0F766E", "#134E4A")

    def palette(self, size: int) -> list[str]:
        """Cycle ``series_palette`` to cover ``size`` series."""

        colours = list(self.series_palette)
        repeats = (size // len(colours)) + 1
        return (colours * repeats)[:size]


_TOKENS = ThemeTokens()


def theme_tokens() -> ThemeTokens:
    return _TOKENS
