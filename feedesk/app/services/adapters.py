"""Conversion between raw store rows and ledger entities.

Store rows are plain dicts keyed by column name. Everything read back from
the store goes through these functions so amounts are always normalized
and item order always follows ``sort_order``.
"""

from collections import defaultdict
from typing import Dict, Iterable, List

from feedesk.app.schemas.expenditure import Expenditure
from feedesk.app.schemas.fee_item import FeeItem
from feedesk.app.schemas.invoice import Invoice, InvoiceTotals
from feedesk.app.services.amounts import normalize_amount


def fee_item_from_row(row: dict) -> FeeItem:
    return FeeItem(
        id=row.get("id"),
        label=row.get("item_name") or "",
        amount=normalize_amount(row.get("amount")),
        sort_order=row.get("sort_order") or 0,
    )


def invoice_from_row(row: dict, item_rows: Iterable[dict] = ()) -> Invoice:
    ordered = sorted(item_rows, key=lambda item: item.get("sort_order") or 0)
    return Invoice(
        id=row["id"],
        created_at=row["created_at"],
        date=row["payment_date"],
        student_name=row.get("student_name") or "",
        father_name=row.get("father_name") or "",
        class_name=row.get("class_name") or "",
        invoice_number=row.get("invoice_no") or "",
        items=[fee_item_from_row(item) for item in ordered],
        total_amount=normalize_amount(row.get("total_amount")),
        amount_received=normalize_amount(row.get("amount_received")),
        remaining_amount=normalize_amount(row.get("remaining_amount")),
    )


def group_item_rows(item_rows: Iterable[dict]) -> Dict[int, List[dict]]:
    grouped: Dict[int, List[dict]] = defaultdict(list)
    for item in item_rows:
        grouped[item["payment_id"]].append(item)
    return grouped


def invoice_to_row(
    *,
    date,
    student_name: str,
    father_name: str,
    class_name: str,
    invoice_number: str,
    totals: InvoiceTotals,
) -> dict:
    return {
        "invoice_no": invoice_number,
        "payment_date": date,
        "student_name": student_name,
        "father_name": father_name,
        "class_name": class_name,
        "total_amount": totals.total,
        "amount_received": totals.received,
        "remaining_amount": totals.remaining,
    }


def invoice_row_snapshot(invoice: Invoice) -> dict:
    """Parent row values of a committed invoice, used to undo an update."""
    return invoice_to_row(
        date=invoice.date,
        student_name=invoice.student_name,
        father_name=invoice.father_name,
        class_name=invoice.class_name,
        invoice_number=invoice.invoice_number,
        totals=InvoiceTotals(
            total=invoice.total_amount,
            received=invoice.amount_received,
            remaining=invoice.remaining_amount,
        ),
    )


def item_to_row(payment_id: int, item: FeeItem) -> dict:
    return {
        "payment_id": payment_id,
        "item_name": item.label,
        "amount": item.amount,
        "sort_order": item.sort_order,
    }


def expenditure_from_row(row: dict) -> Expenditure:
    return Expenditure(
        id=row["id"],
        date=row["expense_date"],
        title=row.get("title") or "",
        amount=normalize_amount(row.get("amount")),
        notes=row.get("notes") or "",
        created_at=row["created_at"],
        updated_at=row.get("updated_at") or row["created_at"],
    )


def expenditure_to_row(*, date, title: str, amount: int, notes: str) -> dict:
    return {
        "expense_date": date,
        "title": title,
        "amount": amount,
        "notes": notes,
    }
