"""Editable fee item rows for one invoice."""

from typing import Callable, Iterable, List

from feedesk.app.core.errors import ValidationError
from feedesk.app.core.settings import get_settings
from feedesk.app.schemas.fee_item import FeeItem, FeeItemInput
from feedesk.app.services.amounts import normalize_amount, sanitize_amount_input

FIELDS = ("label", "amount")


def item_label(item) -> str:
    if isinstance(item, (tuple, list)):
        return str(item[0] or "")
    if isinstance(item, dict):
        return str(item.get("label") or "")
    return str(getattr(item, "label", "") or "")


def item_amount(item):
    if isinstance(item, (tuple, list)):
        return item[1]
    if isinstance(item, dict):
        return item.get("amount")
    return getattr(item, "amount", None)


def _blank() -> FeeItemInput:
    return FeeItemInput(label="", amount="")


def _as_row(item) -> FeeItemInput:
    amount = item_amount(item)
    return FeeItemInput(label=item_label(item), amount="" if amount is None else amount)


def _identity(value: str) -> str:
    return value


class FeeItemSet:
    """Ordered fee rows as edited on the collect-fee form.

    The set is never empty: removing the last row leaves a blank one.
    ``label_transform`` is applied to every label edit (the office form
    plugs a transliteration helper in here).
    """

    def __init__(
        self,
        items: Iterable | None = None,
        label_transform: Callable[[str], str] | None = None,
        initial_rows: int | None = None,
    ):
        self._label_transform = label_transform or _identity
        if items is None:
            count = initial_rows if initial_rows is not None else get_settings().initial_fee_rows
            self._rows = [_blank() for _ in range(max(count, 1))]
        else:
            self._rows = [_as_row(item) for item in items] or [_blank()]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self):
        return iter(list(self._rows))

    @property
    def rows(self) -> List[FeeItemInput]:
        return list(self._rows)

    def add(self) -> int:
        self._rows.append(_blank())
        return len(self._rows) - 1

    def update(self, index: int, field: str, value) -> FeeItemInput:
        if field not in FIELDS:
            raise ValidationError("unknown-field", f"Unknown fee item field: {field}")
        row = self._rows[index]
        if field == "label":
            updated = row.model_copy(update={"label": self._label_transform(str(value or ""))})
        else:
            updated = row.model_copy(update={"amount": sanitize_amount_input(value)})
        self._rows[index] = updated
        return updated

    def remove(self, index: int) -> None:
        del self._rows[index]
        if not self._rows:
            self._rows.append(_blank())

    def clean(self) -> List[FeeItem]:
        """Rows worth storing, in display order with fresh sort indexes."""
        kept = []
        for row in self:
            label = row.label.strip()
            amount = normalize_amount(row.amount)
            if label or amount > 0:
                kept.append((label, amount))
        return [FeeItem(label=label, amount=amount, sort_order=index) for index, (label, amount) in enumerate(kept)]

    def validate(self) -> None:
        complete = any(row.label.strip() and normalize_amount(row.amount) > 0 for row in self.rows)
        if not complete:
            raise ValidationError("incomplete-items", "Enter a name and an amount for at least one fee item.")
