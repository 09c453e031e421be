"""Tests for invoice endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient

from photo_studio.api.app import create_app


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _register(client: TestClient, email: str) -> tuple[str, str]:
    body = client.post(
        "/api/auth/register",
        json={"name": "Client", "email": email, "password": "pw"},
    ).json()
    return body["token"], body["user"]["id"]


def _invoice(user_id: str, **overrides: object) -> dict[str, object]:
    return {
        "userId": user_id,
        "description": "Wedding coverage",
        "dueDate": "2026-07-01",
        "items": [
            {"description": "Photography", "quantity": 2, "unitPrice": 150},
            {"description": "Album", "quantity": 1, "unitPrice": 80.5},
        ],
        **overrides,
    }


def test_admin_creates_invoice(container, admin_token) -> None:
    client = TestClient(create_app(container))
    _, user_id = _register(client, "ada@example.com")

    response = client.post(
        "/api/invoices", json=_invoice(user_id), headers=_auth(admin_token)
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Invoice created"
    invoice = body["invoice"]
    assert invoice["amount"] == 380.5
    assert invoice["status"] == "sent"
    assert invoice["adminName"] == "Prince"
    assert [item["total"] for item in invoice["items"]] == [300.0, 80.5]


def test_invoice_validation(container, admin_token) -> None:
    client = TestClient(create_app(container))
    client_token, user_id = _register(client, "ada@example.com")

    as_client = client.post(
        "/api/invoices", json=_invoice(user_id), headers=_auth(client_token)
    )
    mismatch = client.post(
        "/api/invoices",
        json=_invoice(user_id, amount=999),
        headers=_auth(admin_token),
    )
    negative = client.post(
        "/api/invoices",
        json=_invoice(
            user_id,
            items=[{"description": "Refund", "quantity": 1, "unitPrice": -5}],
        ),
        headers=_auth(admin_token),
    )
    bad_status = client.post(
        "/api/invoices",
        json=_invoice(user_id, status="void"),
        headers=_auth(admin_token),
    )

    assert as_client.status_code == 403
    assert mismatch.status_code == 400
    assert negative.status_code == 400
    assert bad_status.status_code == 400


def test_invoice_visibility(container, admin_token) -> None:
    client = TestClient(create_app(container))
    alice_token, alice = _register(client, "alice@example.com")
    _, bob = _register(client, "bob@example.com")
    for user_id in (alice, bob, bob):
        client.post("/api/invoices", json=_invoice(user_id), headers=_auth(admin_token))

    own = client.get(f"/api/invoices?userId={bob}", headers=_auth(alice_token))
    everything = client.get("/api/invoices", headers=_auth(admin_token))
    filtered = client.get(f"/api/invoices?userId={bob}", headers=_auth(admin_token))
    anonymous = client.get("/api/invoices")

    assert [invoice["userId"] for invoice in own.json()] == [alice]
    assert len(everything.json()) == 3
    assert len(filtered.json()) == 2
    assert anonymous.status_code == 401


def test_invoice_status_update(container, admin_token) -> None:
    client = TestClient(create_app(container))
    client_token, user_id = _register(client, "ada@example.com")
    invoice_id = client.post(
        "/api/invoices", json=_invoice(user_id), headers=_auth(admin_token)
    ).json()["invoice"]["id"]

    denied = client.put(
        f"/api/invoices/{invoice_id}/status",
        json={"status": "paid"},
        headers=_auth(client_token),
    )
    paid = client.put(
        f"/api/invoices/{invoice_id}/status",
        json={"status": "paid"},
        headers=_auth(admin_token),
    )
    missing = client.put(
        f"/api/invoices/{uuid4()}/status",
        json={"status": "paid"},
        headers=_auth(admin_token),
    )

    assert denied.status_code == 403
    assert paid.json()["invoice"]["status"] == "paid"
    assert missing.status_code == 404
    assert missing.json() == {"message": "Invoice not found"}


def test_unexpected_errors_are_hidden(container, admin_token) -> None:
    def explode(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("postgres said something secret")

    container.invoice_service.repository.list_invoices = explode
    client = TestClient(create_app(container), raise_server_exceptions=False)

    response = client.get("/api/invoices", headers=_auth(admin_token))

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
