"""HTTP and WebSocket surface, exercised through FastAPI's TestClient."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from bakery_pos.bootstrap import build_app
from bakery_pos.settings import Settings

JANE_ORDER = {
    "createdBy": 1,
    "customerName": "Jane",
    "items": [
        {"productId": 7, "productName": "Sourdough Loaf", "unitPrice": "8.99", "quantity": 2}
    ],
}


@pytest.fixture()
def client():
    app = build_app(Settings(seed_demo_data=False, cors_origins_raw="http://localhost:5173"))
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def seeded_client():
    with TestClient(build_app(Settings(seed_demo_data=True))) as c:
        yield c


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "terminals": 0}


def test_health_counts_live_terminals(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()

        assert client.get("/health").json()["terminals"] == 1


def test_create_order(client):
    resp = client.post("/api/orders", json=JANE_ORDER)

    assert resp.status_code == 201
    body = resp.json()
    assert resp.headers["location"] == f"/api/orders/{body['id']}"
    assert body["orderNumber"] == "#3001"
    assert body["subtotal"] == "17.98"
    assert body["taxAmount"] == "1.53"
    assert body["total"] == "19.51"
    assert body["status"] == "placed"
    assert body["completedAt"] is None
    assert body["items"][0]["totalPrice"] == "17.98"


def test_create_rejects_empty_items(client):
    resp = client.post("/api/orders", json={**JANE_ORDER, "items": []})

    assert resp.status_code == 400
    assert resp.json()["type"] == "RequestValidationError"
    assert client.get("/api/orders").json() == []


def test_create_rejects_negative_quantity(client):
    item = {**JANE_ORDER["items"][0], "quantity": -1}

    resp = client.post("/api/orders", json={**JANE_ORDER, "items": [item]})

    assert resp.status_code == 400


def test_create_rejects_inconsistent_total(client):
    resp = client.post("/api/orders", json={**JANE_ORDER, "total": "99.00"})

    assert resp.status_code == 400
    assert resp.json()["type"] == "ValidationError"


def test_get_unknown_order(client):
    resp = client.get("/api/orders/999999")

    assert resp.status_code == 404
    assert resp.json()["type"] == "OrderNotFound"


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/orders/0"),
        ("patch", "/api/orders/0"),
        ("delete", "/api/orders/-1"),
    ],
)
def test_non_positive_ids_are_not_found(client, method, path):
    kwargs = {"json": {"status": "completed"}} if method == "patch" else {}

    resp = getattr(client, method)(path, **kwargs)

    assert resp.status_code == 404
    assert resp.json()["type"] == "OrderNotFound"


def test_get_by_number(client):
    created = client.post("/api/orders", json=JANE_ORDER).json()

    assert client.get("/api/orders/by-number/%233001").json()["id"] == created["id"]
    assert client.get("/api/orders/by-number/3001").json()["id"] == created["id"]
    assert client.get("/api/orders/by-number/3999").status_code == 404


def test_patch_completes_order(client):
    order_id = client.post("/api/orders", json=JANE_ORDER).json()["id"]

    resp = client.patch(f"/api/orders/{order_id}", json={"status": "completed"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "completed"
    assert body["completedAt"] is not None
    assert body["customerName"] == "Jane"


def test_patch_rejects_unknown_status(client):
    order_id = client.post("/api/orders", json=JANE_ORDER).json()["id"]

    resp = client.patch(f"/api/orders/{order_id}", json={"status": "burnt"})

    assert resp.status_code == 400


def test_patch_unknown_order(client):
    assert client.patch("/api/orders/404", json={"status": "placed"}).status_code == 404


def test_delete_order(client):
    order_id = client.post("/api/orders", json=JANE_ORDER).json()["id"]

    resp = client.delete(f"/api/orders/{order_id}")

    assert resp.status_code == 200
    assert resp.json() == {"id": order_id, "message": "Order deleted successfully"}
    assert client.get(f"/api/orders/{order_id}").status_code == 404
    assert client.delete(f"/api/orders/{order_id}").status_code == 404


def test_list_filters_by_status(client):
    client.post("/api/orders", json=JANE_ORDER)
    client.post("/api/orders", json={**JANE_ORDER, "status": "processing"})

    statuses = [o["status"] for o in client.get("/api/orders", params={"status": "processing"}).json()]

    assert statuses == ["processing"]
    assert client.get("/api/orders", params={"status": "nope"}).status_code == 400


def test_dashboard(client):
    client.post("/api/orders", json=JANE_ORDER)

    stats = client.get("/api/dashboard/stats").json()

    assert stats == {"todayOrders": 1, "revenue": "0.00", "pendingOrders": 1, "activeProducts": 0}


def test_recent_orders_newest_first(client):
    ids = [client.post("/api/orders", json=JANE_ORDER).json()["id"] for _ in range(6)]

    recent = [o["id"] for o in client.get("/api/dashboard/recent-orders").json()]

    assert recent == list(reversed(ids))[:5]


def test_seeded_app(seeded_client):
    orders = seeded_client.get("/api/orders").json()

    assert len(orders) == 4
    assert seeded_client.get("/api/orders/by-number/%233001").status_code == 200
    assert orders[0]["customer"]["name"] == "Sarah Williams"

    stats = seeded_client.get("/api/dashboard/stats").json()
    assert stats["todayOrders"] == 4
    assert stats["revenue"] == "82.41"
    assert stats["pendingOrders"] == 2
    assert stats["activeProducts"] == 11


def test_websocket_receives_lifecycle_events(client):
    with client.websocket_connect("/ws") as ws:
        assert ws.receive_json()["type"] == "CONNECTED"

        order_id = client.post("/api/orders", json=JANE_ORDER).json()["id"]
        created = ws.receive_json()
        assert created["type"] == "ORDER_CREATED"
        assert created["data"]["id"] == order_id
        assert created["data"]["orderNumber"] == "#3001"

        client.patch(f"/api/orders/{order_id}", json={"status": "processing"})
        updated = ws.receive_json()
        assert updated["type"] == "ORDER_UPDATED"
        assert updated["data"]["status"] == "processing"

        client.delete(f"/api/orders/{order_id}")
        assert ws.receive_json() == {"type": "ORDER_DELETED", "data": {"id": order_id}}


def test_every_terminal_gets_the_event(client):
    with client.websocket_connect("/ws") as a, client.websocket_connect("/ws") as b:
        a.receive_json()
        b.receive_json()

        client.post("/api/orders", json=JANE_ORDER)

        assert a.receive_json()["type"] == "ORDER_CREATED"
        assert b.receive_json()["type"] == "ORDER_CREATED"


def test_failed_request_broadcasts_nothing(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()

        assert client.get("/api/orders/1").status_code == 404
        client.post("/api/orders", json={**JANE_ORDER, "total": "1.00"})
        client.post("/api/orders", json=JANE_ORDER)

        assert ws.receive_json()["type"] == "ORDER_CREATED"
