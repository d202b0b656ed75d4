"""Core domain package for the SplitSpend application."""

from .data_loader import load_transactions, summarize_upload
from .errors import (
    ComputationError,
    CsvFormatError,
    MalformedFilterError,
    NoDataError,
    PersonNotFoundError,
    SplitSpendError,
    safe_entry_point,
)
from .models import AnalysisFilters, SessionSnapshot, Share, StoreGrouping, Transaction
from .session import create_snapshot, require_data

__all__ = [
    "AnalysisFilters",
    "ComputationError",
    "CsvFormatError",
    "MalformedFilterError",
    "NoDataError",
    "PersonNotFoundError",
    "SessionSnapshot",
    "Share",
    "SplitSpendError",
    "StoreGrouping",
    "Transaction",
    "create_snapshot",
    "load_transactions",
    "require_data",
    "safe_entry_point",
    "summarize_upload",
]
