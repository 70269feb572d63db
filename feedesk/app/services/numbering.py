"""Suggested invoice numbers."""

import re
from typing import Iterable

from feedesk.app.core.settings import get_settings

_DIGITS = re.compile(r"([0-9]+)")


def _invoice_number_of(record) -> str:
    if isinstance(record, str):
        return record
    if isinstance(record, dict):
        return str(record.get("invoice_number") or record.get("invoice_no") or "")
    return str(getattr(record, "invoice_number", "") or "")


def next_invoice_number(records: Iterable, prefix: str | None = None, width: int | None = None) -> str:
    """Return the number after the highest numeric invoice number seen.

    Advisory only: nothing stops another session from handing out the same
    number.
    """
    settings = get_settings()
    prefix = settings.invoice_prefix if prefix is None else prefix
    width = settings.invoice_number_width if width is None else width

    highest = 0
    for record in records:
        match = _DIGITS.search(_invoice_number_of(record))
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{prefix}{highest + 1:0{width}d}"
