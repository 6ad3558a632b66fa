"""Integration tests for the Ordering FastAPI endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api.routes import cart_router, order_router, shift_router
from ordering.order.order import Order
from protean.integrations.fastapi import register_exception_handlers
from protean.utils.globals import current_domain


@pytest.fixture()
def client():
    app = FastAPI()
    for router in (cart_router, shift_router, order_router):
        app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def ready_to_checkout(client, add_address, add_product):
    add_address()
    add_product(price=10.0)
    shift_id = client.post("/shifts", json={"name": "Morning", "start_time": "08:00", "end_time": "12:00"}).json()[
        "shift_id"
    ]
    client.post("/cart/items", json={"user_id": "user-1", "product_id": "prod-1", "quantity": 2})
    return shift_id


def _checkout(client, shift_id, **overrides):
    body = {
        "user_id": "user-1",
        "full_name": "Sara Ali",
        "phone": "0551234567",
        "address_id": "addr-1",
        "shift_id": shift_id,
        "payment_method": "CARD",
        "terms_accepted": True,
    }
    body.update(overrides)
    return client.post("/orders", json=body)


class TestCartEndpoints:
    def test_add_and_count(self, client):
        response = client.post("/cart/items", json={"guest_id": "guest-abc", "product_id": "prod-1", "quantity": 2})
        assert response.status_code == 200
        assert response.json() == {"count": 2}

        response = client.get("/cart/count", params={"guest_id": "guest-abc"})
        assert response.json() == {"count": 2}

    def test_quantity_above_cap_is_unprocessable(self, client):
        response = client.post("/cart/items", json={"user_id": "user-1", "product_id": "prod-1", "quantity": 100})
        assert response.status_code == 422

    def test_merge(self, client):
        client.post("/cart/items", json={"guest_id": "guest-abc", "product_id": "prod-1", "quantity": 2})
        response = client.post("/cart/merge", json={"guest_id": "guest-abc", "user_id": "user-1"})
        assert response.status_code == 200
        assert response.json() == {"items": [{"product_id": "prod-1", "quantity": 2}]}

    def test_sync(self, client):
        response = client.post(
            "/cart/sync",
            json={
                "user_id": "user-1",
                "items": [{"product_id": "prod-3", "quantity": 4}],
                "client_timestamp": "2026-01-01T10:00:00Z",
            },
        )
        assert response.status_code == 200
        assert response.json()["items"] == [{"product_id": "prod-3", "quantity": 4}]

    def test_missing_item_is_bad_request(self, client):
        client.post("/cart/items", json={"user_id": "user-1", "product_id": "prod-1"})
        response = client.post("/cart/items/remove", json={"user_id": "user-1", "product_id": "prod-2"})
        assert response.status_code == 400


class TestCheckoutEndpoint:
    def test_place_order(self, client, ready_to_checkout):
        response = _checkout(client, ready_to_checkout)
        assert response.status_code == 201
        data = response.json()
        assert data["order_number"].startswith("ORD-")

        order = current_domain.repository_for(Order).get(data["order_id"])
        assert order.payment_method == "CARD"
        assert client.get("/cart/count", params={"user_id": "user-1"}).json() == {"count": 0}

    def test_unknown_payment_method(self, client, ready_to_checkout):
        response = _checkout(client, ready_to_checkout, payment_method="CHEQUE")
        assert response.status_code == 422

    def test_terms_not_accepted(self, client, ready_to_checkout):
        response = _checkout(client, ready_to_checkout, terms_accepted=False)
        assert response.status_code == 400


class TestOrderEndpoints:
    @pytest.fixture()
    def order_id(self, client, ready_to_checkout, add_driver):
        add_driver()
        return _checkout(client, ready_to_checkout).json()["order_id"]

    def test_driver_flow(self, client, order_id):
        assert client.put(f"/orders/{order_id}/assign", json={"driver_id": "driver-1"}).status_code == 200

        response = client.post(f"/orders/{order_id}/trip", json={"driver_id": "driver-1", "latitude": 24.7})
        assert response.status_code == 201

        response = client.put(f"/orders/{order_id}/trip/location", json={"latitude": 24.71, "longitude": 46.6})
        assert response.status_code == 200

        assert client.put(f"/orders/{order_id}/deliver", json={"driver_id": "driver-1"}).status_code == 200
        assert current_domain.repository_for(Order).get(order_id).status == "DELIVERED"

    def test_bulk_assign(self, client, order_id):
        response = client.post("/orders/bulk-assign", json={"order_ids": [order_id], "driver_id": "driver-1"})
        assert response.status_code == 200
        assert response.json() == {"assigned": [order_id], "failed": []}

    def test_status_update(self, client, order_id):
        response = client.put(f"/orders/{order_id}/status", json={"status": "CANCELED", "notes": "Duplicate"})
        assert response.status_code == 200
        assert response.json() == {"order_id": order_id, "status": "CANCELED"}

    def test_cancel(self, client, order_id):
        response = client.put(f"/orders/{order_id}/cancel", json={"reason": "Changed my mind", "cancelled_by": "Customer"})
        assert response.status_code == 200

    def test_counts_and_listing(self, client, order_id):
        assert client.get("/orders/counts").json()["PENDING"] == 1

        response = client.get("/orders", params={"status": "PENDING"})
        assert [o["order_id"] for o in response.json()] == [order_id]

    def test_unknown_order(self, client, add_driver):
        add_driver()
        response = client.put("/orders/ord-404/assign", json={"driver_id": "driver-1"})
        assert response.status_code == 404
