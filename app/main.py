"""SplitSpend Streamlit entry point."""

from __future__ import annotations

import streamlit as st

from app.layout import NAV_LINKS, determine_active_page, inject_css, render_navbar
from app.pages import (
    render_advanced_page,
    render_dashboard_page,
    render_refine_page,
    render_upload_page,
)
from app.state import get_snapshot
from config import get_settings
from core import NoDataError, require_data
from core.logging_setup import configure_logging, get_logger

logger = get_logger(__name__)


def main() -> None:
    """Application entrypoint for the SplitSpend dashboard."""

    st.set_page_config(
        page_title="SplitSpend",
        page_icon="💸",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    settings = get_settings()
    configure_logging(settings.log_level)

    inject_css()
    valid_pages = [link.slug for link in NAV_LINKS if link.enabled]
    active_page = determine_active_page(valid_pages)
    render_navbar(active_page)

    if active_page == "upload":
        render_upload_page()
        return
    if active_page == "refine":
        render_refine_page()
        return

    try:
        snapshot = require_data(get_snapshot())
    except NoDataError as exc:
        st.info(str(exc))
        render_upload_page()
        return

    logger.debug("Rendering %s for %d transactions", active_page, len(snapshot.transactions))
    if active_page == "advanced":
        render_advanced_page(snapshot)
    else:
        render_dashboard_page(snapshot)


if __name__ == "__main__":
    main()
