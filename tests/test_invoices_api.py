import pytest
from fastapi.testclient import TestClient

from feedesk.app.db.base import Base
from feedesk.app.db.session import engine
from feedesk.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    app.state.ledger = None
    yield
    app.state.ledger = None
    Base.metadata.drop_all(bind=engine)


def invoice_payload(student="Ali", class_name="5A", payment_date="2024-01-05", items=None, received="0", **extra):
    payload = {
        "date": payment_date,
        "student_name": student,
        "father_name": "Karim",
        "class_name": class_name,
        "items": items if items is not None else [{"label": "Tuition", "amount": "500"}],
        "amount_received": received,
    }
    payload.update(extra)
    return payload


def create_invoice(client: TestClient, **kwargs):
    resp = client.post("/invoices/", json=invoice_payload(**kwargs))
    assert resp.status_code == 201
    return resp.json()


def test_create_invoice_returns_derived_totals():
    client = TestClient(app)

    data = create_invoice(
        client,
        items=[{"label": "Tuition", "amount": "500.7"}, {"label": "", "amount": "0"}],
        received="200",
    )

    assert data["invoice_number"] == "INV-0001"
    assert data["total_amount"] == 501
    assert data["amount_received"] == 200
    assert data["remaining_amount"] == 301
    assert data["items"] == [{"id": data["items"][0]["id"], "label": "Tuition", "amount": 501, "sort_order": 0}]

    next_resp = client.get("/invoices/next-number")
    assert next_resp.json() == {"invoice_number": "INV-0002"}


def test_create_invoice_validation_errors():
    client = TestClient(app)

    resp = client.post("/invoices/", json=invoice_payload(items=[{"label": "Tuition", "amount": 300}], received="400"))
    assert resp.status_code == 400
    assert resp.json()["detail"] == "received-exceeds-total"

    resp = client.post("/invoices/", json=invoice_payload(items=[{"label": "", "amount": 300}]))
    assert resp.status_code == 400
    assert resp.json()["detail"] == "incomplete-items"

    assert client.get("/invoices/").json() == []


def test_preview_does_not_save():
    client = TestClient(app)

    resp = client.post("/invoices/preview", json=invoice_payload(items=[{"label": "Tuition", "amount": "250"}], received="100"))

    assert resp.status_code == 200
    assert resp.json()["total"] == 250
    assert resp.json()["remaining"] == 150
    assert client.get("/invoices/").json() == []


def test_list_filters_and_summary():
    client = TestClient(app)
    create_invoice(client, student="Ali", class_name="5A", payment_date="2024-01-05", received="100")
    create_invoice(client, student="Sara", class_name="6B", payment_date="2024-01-20", received="500")
    create_invoice(client, student="Bilal", class_name="5A", payment_date="2024-02-01")

    resp = client.get("/invoices/", params={"class_name": "5A"})
    assert [row["student_name"] for row in resp.json()] == ["Bilal", "Ali"]

    resp = client.get("/invoices/", params={"search": "sar", "date_from": "2024-01-01", "date_to": "2024-01-31"})
    assert [row["student_name"] for row in resp.json()] == ["Sara"]

    summary = client.get("/invoices/summary", params={"class_name": "5A"}).json()
    assert summary == {"records": 2, "billed": 1000, "collected": 100, "outstanding": 900}

    assert sorted(client.get("/invoices/classes").json()) == ["5A", "6B"]


def test_update_and_delete_invoice():
    client = TestClient(app)
    created = create_invoice(client, received="100")

    resp = client.put(
        f"/invoices/{created['id']}",
        json=invoice_payload(items=[{"label": "Transport", "amount": 150}], received="150"),
    )
    assert resp.status_code == 200
    assert resp.json()["total_amount"] == 150
    assert resp.json()["remaining_amount"] == 0
    assert resp.json()["invoice_number"] == created["invoice_number"]

    resp = client.delete(f"/invoices/{created['id']}")
    assert resp.status_code == 204
    assert client.get(f"/invoices/{created['id']}").status_code == 404
    assert client.get("/invoices/").json() == []


def test_missing_invoice_returns_404():
    client = TestClient(app)

    assert client.get("/invoices/999").status_code == 404
    assert client.put("/invoices/999", json=invoice_payload()).status_code == 404
    assert client.delete("/invoices/999").status_code == 404


def test_oversized_amount_returns_400():
    client = TestClient(app)

    resp = client.post("/invoices/", json=invoice_payload(items=[{"label": "Tuition", "amount": "1e19"}]))

    assert resp.status_code == 400
    assert resp.json()["detail"] == "amount-too-large"
