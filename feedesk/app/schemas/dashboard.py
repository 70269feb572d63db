"""Dashboard schemas for income vs. expenditure overviews."""

from typing import List

from pydantic import BaseModel

from feedesk.app.schemas.expenditure import Expenditure
from feedesk.app.schemas.invoice import Invoice


class RollupBucket(BaseModel):
    key: str
    label: str
    collected: int
    invoices: int


class DashboardTotals(BaseModel):
    billed: int
    collected: int
    outstanding: int
    spent: int
    net: int


class DashboardSummary(BaseModel):
    as_of: str
    invoice_count: int
    expenditure_count: int
    totals: DashboardTotals
    month_collected: int
    today_collected: int
    month_spent: int
    monthly_collections: List[RollupBucket]
    daily_collections: List[RollupBucket]
    top_outstanding: List[Invoice]
    top_expenditures: List[Expenditure]
