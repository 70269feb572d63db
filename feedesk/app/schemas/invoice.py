"""Invoice schemas.

``InvoiceDraft`` is what the office enters before anything is written;
``Invoice`` is a committed record with derived totals.
"""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from feedesk.app.schemas.fee_item import FeeItem, FeeItemInput, RawAmount


class InvoiceDraft(BaseModel):
    date: Optional[dt.date] = None
    student_name: str = ""
    father_name: str = ""
    class_name: str = ""
    invoice_number: str = ""
    items: List[FeeItemInput] = Field(default_factory=list)
    amount_received: RawAmount = "0"


class InvoiceTotals(BaseModel):
    total: int
    received: int
    remaining: int


class InvoicePreview(InvoiceTotals):
    items: List[FeeItem]


class Invoice(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: dt.datetime
    date: dt.date
    student_name: str
    father_name: str
    class_name: str
    invoice_number: str
    items: List[FeeItem]
    total_amount: int
    amount_received: int
    remaining_amount: int


class InvoiceFilter(BaseModel):
    search: str = ""
    class_name: str = ""
    date_from: Optional[dt.date] = None
    date_to: Optional[dt.date] = None


class HistorySummary(BaseModel):
    records: int
    billed: int
    collected: int
    outstanding: int


class NextInvoiceNumber(BaseModel):
    invoice_number: str
