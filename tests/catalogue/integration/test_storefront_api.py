"""Integration tests for the Catalogue FastAPI endpoints."""

import pytest
from catalogue.api import category_router, offer_router, product_router, settings_router, wishlist_router
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    for router in (product_router, category_router, offer_router, settings_router, wishlist_router):
        app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app)


def _create_product(client, **overrides):
    body = {"name": "Spring Water 330ml", "price": 18.5, "is_published": True}
    body.update(overrides)
    response = client.post("/products", json=body)
    assert response.status_code == 201
    return response.json()["product_id"]


class TestCategoryEndpoints:
    def test_create_and_list(self, client):
        response = client.post("/categories", json={"name": "Bottled Water"})
        assert response.status_code == 201

        listed = client.get("/categories").json()
        assert [c["slug"] for c in listed] == ["bottled-water"]

    def test_deactivated_category_is_hidden(self, client):
        category_id = client.post("/categories", json={"name": "Coolers"}).json()["category_id"]
        assert client.put(f"/categories/{category_id}/deactivate").status_code == 200
        assert client.get("/categories").json() == []


class TestProductEndpoints:
    def test_browse_with_category_filter(self, client):
        client.post("/categories", json={"name": "Water"})
        _create_product(client, name="Spring Water", category_slug="water")
        _create_product(client, name="Paper Cups")

        response = client.get("/products", params={"slug": "water"})
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["products"][0]["name"] == "Spring Water"
        assert data["current_page"] == 1

    def test_price_change_is_visible_in_listing(self, client):
        product_id = _create_product(client, price=10.0)
        response = client.put(f"/products/{product_id}/price", json={"price": 8.0, "compare_at_price": 10.0})
        assert response.status_code == 200

        card = client.get("/products").json()["products"][0]
        assert card["price"] == 8.0
        assert card["compare_at_price"] == 10.0

    def test_publish_flow(self, client):
        product_id = _create_product(client, is_published=False)
        assert client.get("/products").json()["total"] == 0

        assert client.put(f"/products/{product_id}/publish").status_code == 200
        assert client.get("/products").json()["total"] == 1

        assert client.delete(f"/products/{product_id}").status_code == 200
        assert client.get("/products").json()["total"] == 0

    def test_best_sellers_empty(self, client):
        _create_product(client)
        assert client.get("/products/best-sellers").json() == {"products": [], "total": 0}

    def test_invalid_compare_at_price_returns_400(self, client):
        response = client.post("/products", json={"name": "Water", "price": 10.0, "compare_at_price": 5.0})
        assert response.status_code == 400

    def test_unknown_product_returns_404(self, client):
        assert client.put("/products/missing/publish").status_code == 404

    def test_non_positive_price_returns_422(self, client):
        assert client.post("/products", json={"name": "Water", "price": 0}).status_code == 422


class TestOfferEndpoints:
    def test_create_toggle_and_list(self, client):
        response = client.post("/offers", json={"title": "Summer deal", "discount_percentage": 10, "product_ids": ["p-1"]})
        assert response.status_code == 201
        offer_id = response.json()["offer_id"]

        assert client.get("/offers").json()[0]["product_ids"] == ["p-1"]

        toggled = client.put(f"/offers/{offer_id}/toggle").json()
        assert toggled == {"offer_id": offer_id, "is_active": False}
        assert client.get("/offers").json() == []


class TestSettingsEndpoints:
    def test_defaults_then_update(self, client):
        assert client.get("/settings").json()["shipping_fee"] == 25.0

        response = client.put("/settings", json={"shipping_fee": 30.0, "currency": "SAR"})
        assert response.status_code == 200
        assert response.json()["shipping_fee"] == 30.0
        assert response.json()["tax_percentage"] == 15.0


class TestWishlistEndpoints:
    def test_save_list_and_remove(self, client):
        product_id = _create_product(client)

        response = client.post("/wishlist", json={"user_id": "user-1", "product_id": product_id})
        assert response.status_code == 201
        assert response.json() == {"count": 1}
        assert client.get("/wishlist/users/user-1/count").json() == {"count": 1}
        assert client.get(f"/wishlist/users/user-1/products/{product_id}").json()["in_wishlist"] is True

        listed = client.get("/wishlist/users/user-1").json()
        assert listed["total"] == 1
        assert listed["in_stock"] == 1
        assert listed["products"][0]["product"]["name"] == "Spring Water 330ml"

        assert client.delete(f"/wishlist/users/user-1/products/{product_id}").json() == {"count": 0}
        assert client.get("/wishlist/users/user-1").json()["products"] == []

    def test_duplicate_returns_400(self, client):
        product_id = _create_product(client)
        client.post("/wishlist", json={"user_id": "user-1", "product_id": product_id})
        response = client.post("/wishlist", json={"user_id": "user-1", "product_id": product_id})
        assert response.status_code == 400
