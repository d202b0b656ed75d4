"""Shared layout primitives for the SplitSpend Streamlit app."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Any

import streamlit as st

from core.models import AnalysisFilters, DatasetMetadata


@dataclass(frozen=True)
class NavigationLink:
    slug: str
    label: str
    enabled: bool = True


NAV_LINKS: tuple[NavigationLink, ...] = (
    NavigationLink("upload", "Upload"),
    NavigationLink("refine", "Refine stores"),
    NavigationLink("dashboard", "Dashboard"),
    NavigationLink("advanced", "Advanced"),
)


def inject_css() -> None:
    """Inject card and navigation styling into the Streamlit app."""

    st.markdown(
        """
        <style>
          :root {
            --radius: 12px;
            --card-bg: #FFFFFF;
            --border: #E6EAF2;
          }

          body, [data-testid="stAppViewContainer"] > .main {
            background: #F4F6FB;
          }

          .block-container {
            max-width: 1200px;
            padding-top: 2.5rem;
          }

          .ss-nav {
            display: flex;
            align-items: center;
            justify-content: space-between;
            padding: 0.9rem 0;
          }

          .ss-nav__brand {
            font-size: 1.5rem;
            font-weight: 700;
            color: #0B3FD6;
          }

          .ss-nav__links {
            display: flex;
            gap: 1.6rem;
          }

          .ss-nav__link,
          .ss-nav__link:visited {
            font-weight: 600;
            color: #475569;
            text-decoration: none;
          }

          .ss-nav__link.is-active {
            color: #1D4ED8;
          }

          [data-testid="stVerticalBlock"]:has(> .ss-card-anchor) {
            background: var(--card-bg);
            border: 1px solid var(--border);
            border-radius: var(--radius);
            padding: 1.1rem 1.25rem;
          }

          .ss-card__head {
            display: flex;
            justify-content: space-between;
            font-weight: 600;
            margin-bottom: 0.5rem;
          }

          .ss-chip {
            font-size: 0.75rem;
            color: #2563EB;
            background: rgba(37, 99, 235, 0.08);
            border-radius: 999px;
            padding: 0.1rem 0.6rem;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str, suffix: str | None = None):
    """Render content inside a reusable card."""

    chip_html = f'<span class="ss-chip">{suffix}</span>' if suffix else ""
    container = st.container()
    with container:
        st.markdown('<div class="ss-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="ss-card__head"><span>{title}</span>{chip_html}</div>',
            unsafe_allow_html=True,
        )
        yield


def determine_active_page(valid_pages: list[str], default: str = "upload") -> str:
    """Resolve the page slug from the URL, falling back to ``default``."""

    raw_page = st.query_params.get("page", default)
    if isinstance(raw_page, list):
        raw_page = raw_page[0] if raw_page else default
    return raw_page if raw_page in valid_pages else default


def render_navbar(active_page: str) -> None:
    link_markup: list[str] = []
    for link in NAV_LINKS:
        css_class = "ss-nav__link" + (" is-active" if link.slug == active_page else "")
        if link.enabled:
            link_markup.append(f'<a class="{css_class}" href="?page={link.slug}" target="_self">{link.label}</a>')
        else:
            link_markup.append(f'<span class="{css_class}">{link.label}</span>')

    st.markdown(
        f"""
        <nav class="ss-nav">
            <div class="ss-nav__brand">SplitSpend</div>
            <div class="ss-nav__links">{''.join(link_markup)}</div>
        </nav>
        """,
        unsafe_allow_html=True,
    )


def render_sidebar_filters(metadata: DatasetMetadata) -> dict[str, Any]:
    """Render filter controls and return them as analysis query parameters."""

    params: dict[str, Any] = {}
    date_range = metadata["date_range"]
    with st.sidebar:
        st.markdown("### Filters")
        if date_range["start"] and date_range["end"]:
            lower = date.fromisoformat(date_range["start"])
            upper = date.fromisoformat(date_range["end"])
            chosen = st.date_input("Dates", value=(lower, upper), min_value=lower, max_value=upper)
            if isinstance(chosen, (list, tuple)) and len(chosen) == 2:
                params["startDate"] = chosen[0].isoformat()
                params["endDate"] = chosen[1].isoformat()

        for key, label in (("people", "People"), ("categories", "Categories"), ("stores", "Stores")):
            options = metadata[key]
            if not options:
                continue
            selected = st.multiselect(label, options)
            if selected:
                params[key] = ",".join(selected)

        if not metadata["stores"]:
            st.caption("Confirm store groupings on the Refine page to filter by store.")
    return params


def describe_filters(filters: AnalysisFilters) -> str:
    parts: list[str] = []
    if filters.start_date or filters.end_date:
        parts.append(f"{filters.start_date or '…'} → {filters.end_date or '…'}")
    for label, values in (("people", filters.people), ("categories", filters.categories), ("stores", filters.stores)):
        if values:
            parts.append(f"{len(values)} {label}")
    return " · ".join(parts) or "All transactions"
