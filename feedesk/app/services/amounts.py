"""Whole-number currency normalization.

Parsing follows what a browser form accepts as a number: ASCII digits
only, and anything beyond the double range counts as non-finite.
"""

import sys
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

WHOLE = Decimal("1")
LARGEST_FINITE = Decimal(sys.float_info.max)
# enough digits to quantize anything up to LARGEST_FINITE exactly
_QUANTIZE_PRECISION = 400


def _parse(raw) -> Decimal | None:
    if raw is None or isinstance(raw, bool):
        return None
    text = raw.strip() if isinstance(raw, str) else str(raw)
    if not text:
        return Decimal(0)
    if not text.isascii() or "_" in text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite() or abs(value) > LARGEST_FINITE:
        return None
    return value


def normalize_amount(raw) -> int:
    """Coerce any input to a non-negative whole amount. Never raises."""
    value = _parse(raw)
    if value is None:
        return 0
    with localcontext() as ctx:
        ctx.prec = _QUANTIZE_PRECISION
        rounded = int(value.quantize(WHOLE, rounding=ROUND_HALF_UP))
    return max(rounded, 0)


def sanitize_amount_input(raw) -> str:
    """Normalize an amount while it is being typed; blank stays blank."""
    if raw is None or (isinstance(raw, str) and raw == ""):
        return ""
    if _parse(raw) is None:
        return ""
    return str(normalize_amount(raw))
