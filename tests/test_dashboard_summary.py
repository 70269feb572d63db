from datetime import date

import pytest

from feedesk.app.db.base import Base
from feedesk.app.db.session import SessionLocal, engine
from feedesk.app.schemas.expenditure import ExpenditureDraft
from feedesk.app.schemas.invoice import InvoiceDraft
from feedesk.app.services.dashboard_service import get_dashboard_summary
from feedesk.app.services.ledger import Ledger


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def record_invoice(ledger: Ledger, day: date, total: str, received: str, student: str = "Ali"):
    return ledger.create_invoice(
        InvoiceDraft(
            date=day,
            student_name=student,
            items=[{"label": "Tuition", "amount": total}],
            amount_received=received,
        )
    )


def test_dashboard_summary_totals_and_series():
    ledger = Ledger.from_session_factory(SessionLocal)
    ledger.load()
    record_invoice(ledger, date(2024, 1, 5), "500", "500", "Ali")
    record_invoice(ledger, date(2024, 1, 20), "400", "100", "Sara")
    record_invoice(ledger, date(2024, 2, 1), "300", "200", "Bilal")
    record_invoice(ledger, date(2024, 2, 10), "250", "50", "Hina")
    ledger.create_expenditure(ExpenditureDraft(date=date(2024, 2, 2), title="Paint", amount="120"))
    ledger.create_expenditure(ExpenditureDraft(date=date(2024, 1, 15), title="Chalk", amount="30"))

    summary = get_dashboard_summary(ledger, today=date(2024, 2, 10))

    assert summary.as_of == "2024-02-10"
    assert summary.invoice_count == 4
    assert summary.expenditure_count == 2
    assert summary.totals.billed == 1450
    assert summary.totals.collected == 850
    assert summary.totals.outstanding == 600
    assert summary.totals.spent == 150
    assert summary.totals.net == 700
    assert summary.month_collected == 250
    assert summary.today_collected == 50
    assert summary.month_spent == 120
    assert [(b.key, b.collected, b.invoices) for b in summary.monthly_collections] == [
        ("2024-01", 600, 2),
        ("2024-02", 250, 2),
    ]
    assert [b.label for b in summary.daily_collections] == ["05-01-2024", "20-01-2024", "01-02-2024", "10-02-2024"]
    assert [invoice.student_name for invoice in summary.top_outstanding] == ["Sara", "Hina", "Bilal"]
    assert [expenditure.title for expenditure in summary.top_expenditures] == ["Paint", "Chalk"]


def test_dashboard_summary_empty_ledger():
    ledger = Ledger.from_session_factory(SessionLocal)
    ledger.load()

    summary = get_dashboard_summary(ledger, today=date(2024, 2, 10))

    assert summary.invoice_count == 0
    assert summary.totals.net == 0
    assert summary.monthly_collections == []
    assert summary.top_outstanding == []
