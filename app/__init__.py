"""Streamlit front end for SplitSpend."""

from app.main import main

__all__ = ["main"]
