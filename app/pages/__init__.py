"""Page modules for the SplitSpend Streamlit application."""

from .advanced import render_page as render_advanced_page
from .dashboard import render_page as render_dashboard_page
from .refine import render_page as render_refine_page
from .upload import render_page as render_upload_page

__all__ = [
    "render_advanced_page",
    "render_dashboard_page",
    "render_refine_page",
    "render_upload_page",
]
