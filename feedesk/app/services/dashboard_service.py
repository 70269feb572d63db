"""Income vs. expenditure dashboard built from the session ledger."""

from datetime import date

from feedesk.app.core.settings import get_settings
from feedesk.app.core.time import today as utc_today
from feedesk.app.schemas.dashboard import DashboardSummary, DashboardTotals
from feedesk.app.services.ledger import Ledger
from feedesk.app.services.rollups import DAY, MONTH, bucket_key, rollup, top_expenditures, top_outstanding


def get_dashboard_summary(ledger: Ledger, *, today: date | None = None) -> DashboardSummary:
    settings = get_settings()
    today = today or utc_today()
    month_key = bucket_key(today, MONTH)

    invoices = ledger.invoices
    expenditures = ledger.expenditures

    billed = sum(invoice.total_amount for invoice in invoices)
    collected = sum(invoice.amount_received for invoice in invoices)
    outstanding = sum(invoice.remaining_amount for invoice in invoices)
    spent = sum(expenditure.amount for expenditure in expenditures)

    month_collected = sum(
        invoice.amount_received for invoice in invoices if bucket_key(invoice.date, MONTH) == month_key
    )
    today_collected = sum(invoice.amount_received for invoice in invoices if invoice.date == today)
    month_spent = sum(
        expenditure.amount for expenditure in expenditures if bucket_key(expenditure.date, MONTH) == month_key
    )

    return DashboardSummary(
        as_of=today.isoformat(),
        invoice_count=len(invoices),
        expenditure_count=len(expenditures),
        totals=DashboardTotals(
            billed=billed,
            collected=collected,
            outstanding=outstanding,
            spent=spent,
            net=collected - spent,
        ),
        month_collected=month_collected,
        today_collected=today_collected,
        month_spent=month_spent,
        monthly_collections=rollup(invoices, MONTH, settings.dashboard_months),
        daily_collections=rollup(invoices, DAY, settings.dashboard_days),
        top_outstanding=top_outstanding(invoices, settings.dashboard_top_n),
        top_expenditures=top_expenditures(expenditures, settings.dashboard_top_n),
    )
