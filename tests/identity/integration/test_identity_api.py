"""Integration tests for the Identity FastAPI endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from identity.api import auth_router, user_router
from identity.user.user import User
from protean import current_domain
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(auth_router)
    app.include_router(user_router)
    register_exception_handlers(app)
    return TestClient(app)


def _register(client, phone="0551234567"):
    response = client.post("/auth/register", json={"name": "Sara Ali", "phone": phone, "password": "secret1"})
    assert response.status_code == 201
    return response.json()["user_id"]


class TestAuthEndpoints:
    def test_register_and_login(self, client):
        user_id = _register(client)

        response = client.post("/auth/login", json={"phone": "0551234567", "password": "secret1"})
        assert response.status_code == 200
        assert response.json()["user_id"] == user_id

    def test_duplicate_phone_returns_400(self, client):
        _register(client)
        response = client.post("/auth/register", json={"name": "Other", "phone": "0551234567", "password": "secret1"})
        assert response.status_code == 400

    def test_bad_credentials_return_400(self, client):
        _register(client)
        response = client.post("/auth/login", json={"phone": "0551234567", "password": "wrong!!"})
        assert response.status_code == 400


class TestUserEndpoints:
    def test_create_driver_and_list_by_role(self, client):
        response = client.post(
            "/users",
            json={
                "role": "Driver",
                "name": "Khalid Driver",
                "phone": "0509876543",
                "password": "driver1",
                "vehicle_type": "Car",
                "max_orders": 2,
            },
        )
        assert response.status_code == 201

        listing = client.get("/users", params={"role": "Driver"})
        assert listing.status_code == 200
        assert [u["name"] for u in listing.json()] == ["Khalid Driver"]

    def test_update_profile(self, client):
        user_id = _register(client)
        response = client.put(f"/users/{user_id}", json={"name": "Sara Hassan"})
        assert response.status_code == 200
        assert current_domain.repository_for(User).get(user_id).name == "Sara Hassan"

    def test_unknown_user_returns_404(self, client):
        response = client.put("/users/does-not-exist/deactivate")
        assert response.status_code == 404

    def test_address_round_trip(self, client):
        user_id = _register(client)
        response = client.post(
            f"/users/{user_id}/addresses",
            json={"label": "Home", "district": "Olaya", "street": "King Fahd Rd", "latitude": 24.7},
        )
        assert response.status_code == 201
        address_id = response.json()["address_id"]

        response = client.put(f"/users/{user_id}/addresses/{address_id}", json={"landmark": "Near the mosque"})
        assert response.status_code == 200

        user = current_domain.repository_for(User).get(user_id)
        assert user.addresses[0].landmark == "Near the mosque"

        response = client.delete(f"/users/{user_id}/addresses/{address_id}")
        assert response.status_code == 200

    def test_address_without_street_returns_400(self, client):
        user_id = _register(client)
        response = client.post(f"/users/{user_id}/addresses", json={"label": "Home", "district": "Olaya"})
        assert response.status_code == 400
