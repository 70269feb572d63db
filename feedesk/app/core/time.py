"""Time utilities for timezone-aware UTC datetimes."""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime for defaults and onupdate hooks."""
    return datetime.now(UTC)


def today() -> date:
    return utc_now().date()


def format_date_ddmmyyyy(value: date | str | None) -> str:
    """Render an ISO date as DD-MM-YYYY; '-' when missing."""
    if not value:
        return "-"
    text = value.isoformat() if isinstance(value, date) else str(value)
    parts = text[:10].split("-")
    if len(parts) != 3 or not all(parts):
        return text
    year, month, day = parts
    return f"{day}-{month}-{year}"
