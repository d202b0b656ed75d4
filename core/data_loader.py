"""CSV ingestion for shared-expense exports."""

from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO, Final, Sequence

import pandas as pd

from core.errors import CsvFormatError
from core.logging_setup import get_logger
from core.models import Share, Transaction, UploadSummary

__all__ = ["REQUIRED_COLUMNS", "load_transactions", "summarize_upload"]

logger = get_logger(__name__)

REQUIRED_COLUMNS: Final[tuple[str, ...]] = ("Date", "Description", "Category", "Cost", "Currency")
_BYTES_PER_MB: Final[int] = 1024 * 1024


def _read_bytes(source: str | Path | bytes | BinaryIO) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"CSV file not found: {path}")
        return path.read_bytes()
    return source.read()


def load_transactions(
    source: str | Path | bytes | BinaryIO,
    *,
    max_upload_mb: float | None = None,
) -> list[Transaction]:
    """Parse an expense-sharing CSV into transactions.

    The fixed columns are ``Date, Description, Category, Cost, Currency``;
    every other column names a person and holds their signed share. Rows
    missing a description, with a date that is not a real ``YYYY-MM-DD``
    calendar day, or with a non-numeric cost are skipped. Dates are stored
    zero-padded so that string comparison stays chronological.
    """

    payload = _read_bytes(source)
    if max_upload_mb is not None and len(payload) > max_upload_mb * _BYTES_PER_MB:
        raise CsvFormatError(f"CSV exceeds the {max_upload_mb:g} MB upload limit.")

    try:
        raw = pd.read_csv(io.BytesIO(payload), dtype=str, keep_default_na=False, skipinitialspace=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise CsvFormatError(f"Could not parse CSV: {exc}") from exc

    raw.columns = [str(column).strip() for column in raw.columns]
    missing = [column for column in REQUIRED_COLUMNS if column not in raw.columns]
    if missing:
        raise CsvFormatError(f"CSV is missing required columns: {', '.join(missing)}")

    people = [
        column
        for column in raw.columns
        if column and column not in REQUIRED_COLUMNS and not column.startswith("Unnamed:")
    ]
    costs = pd.to_numeric(raw["Cost"].str.strip(), errors="coerce")
    dates = pd.to_datetime(raw["Date"].str.strip(), format="%Y-%m-%d", errors="coerce")
    amounts = raw[people].apply(lambda col: pd.to_numeric(col.str.strip(), errors="coerce")) if people else None

    transactions: list[Transaction] = []
    skipped = 0
    for index, row in raw.iterrows():
        parsed_date = dates.loc[index]
        description = row["Description"].strip()
        cost = costs.loc[index]
        if pd.isna(parsed_date) or not description or pd.isna(cost):
            skipped += 1
            continue

        shares: list[Share] = []
        if amounts is not None:
            for person in people:
                amount = amounts.at[index, person]
                if not pd.isna(amount):
                    shares.append(Share(name=person, amount=float(amount)))

        transactions.append(
            Transaction(
                date=parsed_date.strftime("%Y-%m-%d"),
                description=description,
                category=row["Category"].strip(),
                cost=float(cost),
                currency=row["Currency"].strip(),
                shares=tuple(shares),
            )
        )

    if skipped:
        logger.debug("Skipped %d incomplete or invalid CSV rows", skipped)
    logger.info("Parsed %d transactions for %d people", len(transactions), len(people))
    return transactions


def summarize_upload(transactions: Sequence[Transaction]) -> UploadSummary:
    """Summarise a freshly parsed upload using its first and last rows."""

    return {
        "total_transactions": len(transactions),
        "date_range": {
            "start": transactions[0].date if transactions else "",
            "end": transactions[-1].date if transactions else "",
        },
        "people": list(dict.fromkeys(share.name for transaction in transactions for share in transaction.shares)),
        "categories": list(dict.fromkeys(transaction.category for transaction in transactions)),
    }
