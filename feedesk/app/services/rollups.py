"""Time-bucketed collection rollups and top-N lists for the dashboard."""

from datetime import date
from typing import Callable, Dict, Iterable, List

from feedesk.app.core.time import format_date_ddmmyyyy
from feedesk.app.schemas.dashboard import RollupBucket
from feedesk.app.schemas.expenditure import Expenditure
from feedesk.app.schemas.invoice import Invoice

MONTH = "month"
DAY = "day"

_KEY_LENGTHS = {MONTH: 7, DAY: 10}
_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _received(record) -> int:
    return record.amount_received


def bucket_key(value, granularity: str) -> str:
    if granularity not in _KEY_LENGTHS:
        raise ValueError(f"Unsupported rollup granularity: {granularity}")
    if not value:
        return ""
    text = value.isoformat() if isinstance(value, date) else str(value)
    return text[: _KEY_LENGTHS[granularity]]


def bucket_label(key: str, granularity: str) -> str:
    if granularity == DAY:
        return format_date_ddmmyyyy(key)
    year, _, month = key.partition("-")
    month_index = int(month) if month.isdigit() and 1 <= int(month) <= 12 else 1
    return f"{_MONTH_ABBR[month_index - 1]} {year}"


def rollup(
    records: Iterable,
    granularity: str,
    window_size: int,
    amount: Callable[[object], int] = _received,
) -> List[RollupBucket]:
    """Sum ``amount`` and count records per calendar month or day.

    Only the latest ``window_size`` buckets are returned, oldest first.
    Records without a date are skipped.
    """
    buckets: Dict[str, Dict[str, int]] = {}
    for record in records:
        key = bucket_key(getattr(record, "date", None), granularity)
        if not key:
            continue
        bucket = buckets.setdefault(key, {"collected": 0, "invoices": 0})
        bucket["collected"] += amount(record)
        bucket["invoices"] += 1

    keys = sorted(buckets)
    window = keys[-window_size:] if window_size > 0 else []
    return [
        RollupBucket(
            key=key,
            label=bucket_label(key, granularity),
            collected=buckets[key]["collected"],
            invoices=buckets[key]["invoices"],
        )
        for key in window
    ]


def top_outstanding(invoices: Iterable[Invoice], limit: int = 5) -> List[Invoice]:
    owing = [invoice for invoice in invoices if invoice.remaining_amount > 0]
    return sorted(owing, key=lambda invoice: invoice.remaining_amount, reverse=True)[:limit]


def top_expenditures(expenditures: Iterable[Expenditure], limit: int = 5) -> List[Expenditure]:
    return sorted(expenditures, key=lambda expenditure: expenditure.amount, reverse=True)[:limit]
