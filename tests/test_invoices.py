"""
Tests for the /invoices routes.
"""

from datetime import date, datetime, timezone

import pytest
from sqlalchemy import insert

from biztime.db.schema import invoices


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


@pytest.fixture()
def invoice_id(engine, company) -> int:
    with engine.begin() as conn:
        result = conn.execute(
            insert(invoices).values(comp_code=company["code"], amt=100).returning(invoices.c.id)
        )
        return result.scalar_one()


class TestListInvoices:
    """Tests for GET /invoices."""

    def test_empty(self, client) -> None:
        response = client.get("/invoices")

        assert response.status_code == 200
        assert response.json() == {"invoices": []}

    def test_raw_columns(self, client, invoice_id) -> None:
        response = client.get("/invoices")

        assert response.status_code == 200
        [invoice] = response.json()["invoices"]
        assert invoice["id"] == invoice_id
        assert invoice["comp_code"] == "testcode"
        assert invoice["amt"] == 100
        assert invoice["paid"] is False
        assert invoice["add_date"] == _today()
        assert invoice["paid_date"] is None


class TestGetInvoice:
    """Tests for GET /invoices/{id}."""

    def test_includes_company(self, client, invoice_id) -> None:
        response = client.get(f"/invoices/{invoice_id}")

        assert response.status_code == 200
        assert response.json() == {
            "invoice": {
                "id": invoice_id,
                "amt": 100,
                "paid": False,
                "add_date": _today(),
                "paid_date": None,
                "company": {
                    "code": "testcode",
                    "name": "Test Company",
                    "description": "Test description",
                },
            }
        }

    def test_unknown_id_is_404(self, client) -> None:
        response = client.get("/invoices/999")

        assert response.status_code == 404
        assert response.json() == {"message": "Invoice with ID '999' not found"}

    def test_non_integer_id_is_400(self, client) -> None:
        response = client.get("/invoices/abc")

        assert response.status_code == 400
        assert "invoice_id" in response.json()["message"]


class TestCreateInvoice:
    """Tests for POST /invoices."""

    def test_creates_unpaid_invoice(self, client, company) -> None:
        response = client.post("/invoices", json={"comp_code": "testcode", "amt": 200.00})

        assert response.status_code == 201
        invoice = response.json()["invoice"]
        assert invoice["amt"] == 200
        assert invoice["comp_code"] == "testcode"
        assert invoice["paid"] is False
        assert invoice["paid_date"] is None
        assert invoice["add_date"] == _today()
        assert isinstance(invoice["id"], int)

    def test_unknown_company_is_404(self, client) -> None:
        response = client.post("/invoices", json={"comp_code": "non-existent", "amt": 200.00})

        assert response.status_code == 404
        assert response.json() == {"message": "Company with code 'non-existent' not found"}

    def test_unknown_company_is_404_even_with_bad_amount(self, client) -> None:
        response = client.post("/invoices", json={"comp_code": "non-existent", "amt": -5})

        assert response.status_code == 404
        assert response.json()["message"] == "Company with code 'non-existent' not found"

    @pytest.mark.parametrize("amt", [-10.00, 0, None])
    def test_non_positive_amount_is_400(self, client, company, amt) -> None:
        response = client.post("/invoices", json={"comp_code": "testcode", "amt": amt})

        assert response.status_code == 400
        assert response.json() == {"message": "Amount must be a positive number"}

    def test_missing_comp_code_is_400(self, client) -> None:
        response = client.post("/invoices", json={"amt": 10})

        assert response.status_code == 400
        assert response.json() == {"message": "'comp_code' is required"}

    def test_non_numeric_amount_is_400(self, client, company) -> None:
        response = client.post("/invoices", json={"comp_code": "testcode", "amt": "lots"})

        assert response.status_code == 400
        assert "amt" in response.json()["message"]

    def test_numeric_string_amount_is_400(self, client, company) -> None:
        response = client.post("/invoices", json={"comp_code": "testcode", "amt": "12.5"})

        assert response.status_code == 400
        assert "amt" in response.json()["message"]

    @pytest.mark.parametrize("amt", ["Infinity", "NaN"])
    def test_non_finite_amount_is_400(self, client, company, amt) -> None:
        response = client.post(
            "/invoices",
            content=f'{{"comp_code": "testcode", "amt": {amt}}}',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert "amt" in response.json()["message"]
        assert client.get("/invoices").json() == {"invoices": []}


class TestUpdateInvoice:
    """Tests for PUT /invoices/{id}."""

    def test_marking_paid_sets_paid_date(self, client, invoice_id) -> None:
        response = client.put(f"/invoices/{invoice_id}", json={"amt": 300.00, "paid": True})

        assert response.status_code == 200
        invoice = response.json()["invoice"]
        assert invoice["amt"] == 300
        assert invoice["paid"] is True
        assert invoice["paid_date"] == _today()

    def test_paid_then_unpaid_clears_paid_date(self, client, invoice_id) -> None:
        client.put(f"/invoices/{invoice_id}", json={"amt": 100, "paid": True})

        response = client.put(f"/invoices/{invoice_id}", json={"amt": 100, "paid": False})

        assert response.status_code == 200
        assert response.json()["invoice"]["paid"] is False
        assert response.json()["invoice"]["paid_date"] is None

    def test_paid_absent_keeps_previous_state(self, client, invoice_id) -> None:
        client.put(f"/invoices/{invoice_id}", json={"amt": 100, "paid": True})

        response = client.put(f"/invoices/{invoice_id}", json={"amt": 150})

        assert response.status_code == 200
        invoice = response.json()["invoice"]
        assert invoice["amt"] == 150
        assert invoice["paid"] is True
        assert invoice["paid_date"] == _today()

    def test_paid_absent_on_unpaid_invoice_keeps_null(self, client, invoice_id) -> None:
        response = client.put(f"/invoices/{invoice_id}", json={"amt": 150})

        assert response.status_code == 200
        assert response.json()["invoice"]["paid"] is False
        assert response.json()["invoice"]["paid_date"] is None

    def test_paid_null_clears_paid_date(self, client, invoice_id) -> None:
        client.put(f"/invoices/{invoice_id}", json={"amt": 100, "paid": True})

        response = client.put(f"/invoices/{invoice_id}", json={"amt": 100, "paid": None})

        assert response.status_code == 200
        assert response.json()["invoice"]["paid"] is False
        assert response.json()["invoice"]["paid_date"] is None

    def test_paying_again_refreshes_paid_date(self, client, engine, company) -> None:
        with engine.begin() as conn:
            old_id = conn.execute(
                insert(invoices)
                .values(comp_code="testcode", amt=100, paid=True, paid_date=date(2018, 1, 1))
                .returning(invoices.c.id)
            ).scalar_one()

        response = client.put(f"/invoices/{old_id}", json={"amt": 100, "paid": True})

        assert response.status_code == 200
        assert response.json()["invoice"]["paid"] is True
        assert response.json()["invoice"]["paid_date"] == _today()

    @pytest.mark.parametrize(
        "body",
        [
            {"amt": "12.5"},
            {"amt": True},
            {"amt": 100, "paid": "yes"},
            {"amt": 100, "paid": 1},
        ],
    )
    def test_coercible_values_are_400(self, client, invoice_id, body) -> None:
        response = client.put(f"/invoices/{invoice_id}", json=body)

        assert response.status_code == 400
        assert client.get(f"/invoices/{invoice_id}").json()["invoice"]["paid"] is False

    @pytest.mark.parametrize("amt", ["Infinity", "NaN"])
    def test_non_finite_amount_is_400(self, client, invoice_id, amt) -> None:
        response = client.put(
            f"/invoices/{invoice_id}",
            content=f'{{"amt": {amt}, "paid": true}}',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert "amt" in response.json()["message"]
        assert client.get(f"/invoices/{invoice_id}").json()["invoice"]["amt"] == 100

    @pytest.mark.parametrize("amt", [-300.00, 0])
    def test_non_positive_amount_is_400(self, client, invoice_id, amt) -> None:
        response = client.put(f"/invoices/{invoice_id}", json={"amt": amt, "paid": True})

        assert response.status_code == 400
        assert response.json() == {"message": "Amount must be a positive number"}

    def test_unknown_id_is_404(self, client) -> None:
        response = client.put("/invoices/999", json={"amt": 300.00, "paid": True})

        assert response.status_code == 404
        assert response.json() == {"message": "Invoice with ID '999' not found"}


class TestDeleteInvoice:
    """Tests for DELETE /invoices/{id}."""

    def test_deletes(self, client, invoice_id) -> None:
        response = client.delete(f"/invoices/{invoice_id}")

        assert response.status_code == 200
        assert response.json() == {"status": "deleted"}
        assert client.get(f"/invoices/{invoice_id}").status_code == 404

    def test_unknown_id_is_404(self, client) -> None:
        response = client.delete("/invoices/999")

        assert response.status_code == 404
        assert response.json() == {"message": "Invoice with ID '999' not found"}
