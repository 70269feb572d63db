"""Fee invoice routes."""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from feedesk.app.api.deps import get_ledger
from feedesk.app.schemas.invoice import (
    HistorySummary,
    Invoice,
    InvoiceDraft,
    InvoiceFilter,
    InvoicePreview,
    NextInvoiceNumber,
)
from feedesk.app.services.ledger import Ledger, history_summary, prepare_invoice

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _filter_params(
    search: str = "",
    class_name: str = "",
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
) -> InvoiceFilter:
    return InvoiceFilter(search=search, class_name=class_name, date_from=date_from, date_to=date_to)


@router.get("/", response_model=List[Invoice])
async def list_invoices(
    criteria: InvoiceFilter = Depends(_filter_params),
    ledger: Ledger = Depends(get_ledger),
):
    return ledger.filter(criteria)


@router.get("/summary", response_model=HistorySummary)
async def get_history_summary(
    criteria: InvoiceFilter = Depends(_filter_params),
    ledger: Ledger = Depends(get_ledger),
):
    return history_summary(ledger.filter(criteria))


@router.get("/classes", response_model=List[str])
async def list_classes(ledger: Ledger = Depends(get_ledger)):
    return ledger.class_options()


@router.get("/next-number", response_model=NextInvoiceNumber)
async def get_next_invoice_number(ledger: Ledger = Depends(get_ledger)):
    return NextInvoiceNumber(invoice_number=ledger.suggested_invoice_number)


@router.post("/preview", response_model=InvoicePreview)
async def preview_invoice(payload: InvoiceDraft):
    items, totals = prepare_invoice(payload)
    return InvoicePreview(items=items, **totals.model_dump())


@router.post("/", response_model=Invoice, status_code=status.HTTP_201_CREATED)
async def create_invoice(payload: InvoiceDraft, ledger: Ledger = Depends(get_ledger)):
    return ledger.create_invoice(payload)


@router.get("/{invoice_id}", response_model=Invoice)
async def get_invoice(invoice_id: int, ledger: Ledger = Depends(get_ledger)):
    return ledger.get_invoice(invoice_id)


@router.put("/{invoice_id}", response_model=Invoice)
async def update_invoice(invoice_id: int, payload: InvoiceDraft, ledger: Ledger = Depends(get_ledger)):
    return ledger.update_invoice(invoice_id, payload)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(invoice_id: int, ledger: Ledger = Depends(get_ledger)):
    ledger.delete_invoice(invoice_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
