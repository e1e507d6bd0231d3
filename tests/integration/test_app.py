"""End-to-end tests against the composed FastAPI application in ``src/app.py``."""

import json

import pytest
from cargo.gateway import set_gateway
from cargo.gateway.fake_adapter import FakeGateway
from cargo.order.order import Order
from cargo.order.repository import OrderRepository
from cargo.product.product import Product
from cargo.product.repository import ProductRepository
from cargo.provider import set_identity_provider
from cargo.provider.fake_adapter import FakeIdentityProvider
from cargo.user.repository import UserRepository
from cargo.user.user import User
from fastapi.testclient import TestClient
from protean import current_domain


@pytest.fixture(scope="module")
def application():
    from app import app

    return app


@pytest.fixture()
def client(application):
    return TestClient(application)


@pytest.fixture()
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture()
def provider():
    fake = FakeIdentityProvider()
    fake.register("kp_buyer", preferred_email="buyer@example.com", first_name="Bea", last_name="Buyer")
    set_identity_provider(fake)
    return fake


@pytest.fixture()
def product():
    product = Product.create(name="Phone holder", brand="Belkin", price=19.99, nb_in_stock=10)
    current_domain.repository_for(Product).add(product)
    return product


class TestComposition:
    def test_custom_repositories_are_registered(self, application):
        assert isinstance(current_domain.repository_for(Order), OrderRepository)
        assert isinstance(current_domain.repository_for(Product), ProductRepository)
        assert isinstance(current_domain.repository_for(User), UserRepository)

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "domain": "cargo"}


class TestCheckoutThroughApp:
    def test_sync_price_pay_and_list(self, client, gateway, provider, product):
        headers = {"X-User-Subject": "kp_buyer", "X-User-Roles": "ROLE_USER"}

        user = client.get("/api/users/authenticated", headers=headers)
        assert user.status_code == 200

        preview = client.get("/api/orders/get-cart-details", params={"product_ids": [str(product.id)]})
        assert preview.status_code == 200
        assert preview.json()[0]["price"] == 19.99

        session = client.post(
            "/api/orders/init-payment",
            json=[{"product_id": str(product.id), "quantity": 2}],
            headers=headers,
        )
        assert session.status_code == 200
        session_id = session.json()["id"]

        body = json.dumps(
            {
                "type": "checkout.session.completed",
                "data": {
                    "object": {
                        "id": session_id,
                        "metadata": {"user_public_id": user.json()["id"]},
                        "customer_details": {
                            "address": {"line1": "1 Rue X", "city": "Paris", "postal_code": "75001", "country": "FR"}
                        },
                    }
                },
            }
        )
        webhook = client.post("/api/orders/webhook", content=body, headers={"Stripe-Signature": gateway.sign(body)})
        assert webhook.status_code == 200

        orders = client.get("/api/orders/user", headers=headers)
        assert orders.status_code == 200
        assert orders.json()["items"][0]["status"] == "PAID"
        assert current_domain.repository_for(Product).get(str(product.id)).nb_in_stock == 8

    def test_validation_errors_are_400(self, client, gateway, provider):
        headers = {"X-User-Subject": "kp_buyer"}
        client.get("/api/users/authenticated", headers=headers)

        response = client.post("/api/orders/init-payment", json=[], headers=headers)

        assert response.status_code == 400
