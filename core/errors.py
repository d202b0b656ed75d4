"""Error types and the single error-reporting seam for analytics entry points."""

from __future__ import annotations

import functools
from typing import Callable, TypeVar

from core.logging_setup import get_logger

__all__ = [
    "SplitSpendError",
    "NoDataError",
    "MalformedFilterError",
    "CsvFormatError",
    "PersonNotFoundError",
    "ComputationError",
    "safe_entry_point",
]

logger = get_logger(__name__)

T = TypeVar("T")


class SplitSpendError(RuntimeError):
    """Base class for errors surfaced to the boundary layer."""


class NoDataError(SplitSpendError):
    """Raised when no transactions have been uploaded for the session."""

    def __init__(self, message: str = "No transaction data found. Please upload a CSV file first.") -> None:
        super().__init__(message)


class MalformedFilterError(SplitSpendError, ValueError):
    """Raised when query or body parameters cannot be interpreted."""


class CsvFormatError(SplitSpendError, ValueError):
    """Raised when an uploaded CSV cannot be turned into transactions."""


class PersonNotFoundError(SplitSpendError, LookupError):
    """Raised when a payment pattern is requested for an unknown person."""


class ComputationError(SplitSpendError):
    """Wraps an unexpected failure inside an analytics computation."""


def safe_entry_point(default_factory: Callable[[], T]) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Return ``default_factory()`` instead of raising from an analytics entry point.

    The wrapped failure is logged as a :class:`ComputationError` so that one
    broken view never takes the rest of the dashboard down with it.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                error = ComputationError(f"{func.__name__} failed: {exc}")
                logger.exception("%s", error)
                return default_factory()

        return wrapper

    return decorator
