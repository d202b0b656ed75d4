"""Application configuration utilities."""

from .settings import DEFAULT_PAGE_SIZE, DEFAULT_SIMILARITY_THRESHOLD, Settings, get_settings

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_SIMILARITY_THRESHOLD",
    "Settings",
    "get_settings",
]
