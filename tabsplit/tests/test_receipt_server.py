from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from tabsplit.domain.editing import add_participant, assign_item
from tabsplit.domain.money import Money
from tabsplit.domain.receipt import Receipt, ReceiptItem
from tabsplit.receipt.serialization import receipt_to_dict
from tabsplit.runtime.receipt_server import app
from tabsplit.runtime.receipt_storage import ReceiptStore, get_receipt_store


@pytest.fixture
def client(store: ReceiptStore) -> Iterator[TestClient]:
    app.dependency_overrides[get_receipt_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _split_receipt() -> Receipt:
    receipt = Receipt(
        merchant_name="Taqueria Sol",
        items=[ReceiptItem(name="Tacos", amount=Money(1000))],
        tax=Money(100),
        tip=Money(200),
    )
    ana = add_participant(receipt, "Ana")
    ben = add_participant(receipt, "Ben")
    assign_item(receipt, receipt.items[0].id, [ana.id, ben.id])
    return receipt


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_parse_lines(client: TestClient) -> None:
    response = client.post(
        "/parse",
        json={"lines": ["Taqueria Sol", "2 Tacos 10.00", "Subtotal 10.00", "Tax 1.00", "Total 11.00"]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["merchant_name"] == "Taqueria Sol"
    assert [item["amount_cents"] for item in body["items"]] == [500, 500]
    assert body["total_cents"] == 1100
    assert body["warnings"] == []
    assert body["raw_text"].startswith("Taqueria Sol\n")


@pytest.mark.parametrize("payload", [{"lines": "Tacos 10.00"}, {"lines": [1, 2]}, {"lines": [], "full_text": 3}])
def test_parse_rejects_bad_body(client: TestClient, payload: dict) -> None:
    response = client.post("/parse", json=payload)

    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_parse_rejects_non_json(client: TestClient) -> None:
    response = client.post("/parse", content=b"not json", headers={"content-type": "application/json"})

    assert response.status_code == 400


def test_allocate(client: TestClient) -> None:
    response = client.post("/allocate", json=receipt_to_dict(_split_receipt()))

    assert response.status_code == 200
    body = response.json()
    assert [row["total_cents"] for row in body["rows"]] == [650, 650]
    assert body["unallocated_total_cents"] == 0


def test_allocate_rejects_invalid_receipt(client: TestClient) -> None:
    response = client.post("/allocate", json={"items": [{"name": "Tacos"}]})

    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid receipt:")


def test_stored_receipt_endpoints(client: TestClient, store: ReceiptStore) -> None:
    receipt = store.add(_split_receipt())

    listing = client.get("/receipts").json()["receipts"]
    assert [entry["id"] for entry in listing] == [receipt.id]
    assert listing[0]["name"] == "Taqueria Sol"
    assert listing[0]["fully_assigned"] is True

    detail = client.get(f"/receipts/{receipt.id}")
    assert detail.status_code == 200
    assert detail.json()["participants"][0]["name"] == "Ana"

    allocation = client.get(f"/receipts/{receipt.id}/allocation")
    assert allocation.status_code == 200
    assert allocation.json()["sum_totals_cents"] == 1300


def test_unknown_receipt_is_404(client: TestClient) -> None:
    response = client.get("/receipts/missing/allocation")

    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "Receipt not found: missing"}


def test_delete_receipt(client: TestClient, store: ReceiptStore) -> None:
    receipt = store.add(_split_receipt())

    response = client.delete(f"/receipts/{receipt.id}")

    assert response.status_code == 200
    assert response.json() == {"status": "deleted", "id": receipt.id}
    assert store.list() == []
    assert client.delete(f"/receipts/{receipt.id}").status_code == 404


def test_rename_receipt(client: TestClient, store: ReceiptStore) -> None:
    receipt = store.add(_split_receipt())

    response = client.put(f"/receipts/{receipt.id}/name", json={"name": " Team lunch "})

    assert response.status_code == 200
    assert response.json()["display_name"] == "Team lunch"
    assert client.get("/receipts").json()["receipts"][0]["name"] == "Team lunch"

    cleared = client.put(f"/receipts/{receipt.id}/name", json={"name": None})
    assert cleared.json()["display_name"] is None
    assert client.get("/receipts").json()["receipts"][0]["name"] == "Taqueria Sol"


@pytest.mark.parametrize("payload", [{}, {"name": 5}, ["Team lunch"]])
def test_rename_rejects_bad_body(client: TestClient, store: ReceiptStore, payload: object) -> None:
    receipt = store.add(_split_receipt())

    assert client.put(f"/receipts/{receipt.id}/name", json=payload).status_code == 400


def test_rename_unknown_receipt_is_404(client: TestClient) -> None:
    assert client.put("/receipts/missing/name", json={"name": "x"}).status_code == 404
