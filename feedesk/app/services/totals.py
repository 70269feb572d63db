"""Invoice total, received and remaining amounts."""

from typing import Iterable

from feedesk.app.core.errors import ValidationError
from feedesk.app.schemas.invoice import InvoiceTotals
from feedesk.app.services.amounts import normalize_amount
from feedesk.app.services.fee_items import item_amount


def compute_totals(items: Iterable, amount_received_raw) -> InvoiceTotals:
    """Derive totals for a set of fee items; rejects received > total."""
    total = sum(normalize_amount(item_amount(item)) for item in items)
    received = normalize_amount(amount_received_raw)
    if received > total:
        raise ValidationError("received-exceeds-total", "Amount received cannot exceed the total amount.")
    return InvoiceTotals(total=total, received=received, remaining=max(total - received, 0))
