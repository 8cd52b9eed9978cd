"""
End-to-end flow through the public API.

Registers a customer, opens a loan application for them, then reads it back
individually and through the customer's listing.
"""

from decimal import Decimal

from fastapi.testclient import TestClient


def test_customer_applies_for_a_loan(client: TestClient):
    response = client.post("/api/v1/customers", json={"fullName": "John Doe", "email": "john@example.com"})
    assert response.status_code == 201
    customer = response.json()["data"]

    response = client.post(
        "/api/v1/loan-applications",
        json={"customerId": customer["id"], "amount": 25000, "termMonths": 48, "annualInterestRate": 4.5},
    )
    assert response.status_code == 201
    application = response.json()["data"]

    response = client.get(f"/api/v1/loan-applications/{application['id']}")
    assert response.status_code == 200
    fetched = response.json()["data"]
    assert fetched["amount"] == "25000.00"
    assert fetched["annualInterestRate"] == "4.50"
    assert fetched["customerId"] == customer["id"]
    # 25000 at 4.5% over 48 months
    assert Decimal("565") < Decimal(fetched["monthlyPayment"]) < Decimal("575")

    response = client.get(f"/api/v1/customers/{customer['id']}/loan-applications")
    assert response.status_code == 200
    listing = response.json()
    assert [a["id"] for a in listing["data"]] == [application["id"]]
    assert listing["pagination"]["total"] == 1

    # the customer cannot be removed while the application exists
    assert client.delete(f"/api/v1/customers/{customer['id']}").status_code == 409


def test_customer_lifecycle(client: TestClient):
    customer = client.post(
        "/api/v1/customers", json={"fullName": "Ada Lovelace", "email": "ada@example.com"}
    ).json()["data"]

    updated = client.patch(
        f"/api/v1/customers/{customer['id']}", json={"email": "ada.lovelace@example.com"}
    ).json()["data"]
    assert updated["email"] == "ada.lovelace@example.com"
    assert updated["fullName"] == "Ada Lovelace"

    listing = client.get("/api/v1/customers").json()
    assert [c["email"] for c in listing["data"]] == ["ada.lovelace@example.com"]

    assert client.delete(f"/api/v1/customers/{customer['id']}").status_code == 204
    assert client.get("/api/v1/customers").json()["pagination"]["total"] == 0
