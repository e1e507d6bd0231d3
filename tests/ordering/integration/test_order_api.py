"""Integration tests for Order API endpoints via TestClient."""

import json

import pytest
from cargo.product.product import Product
from cargo.user.user import User
from cargo.api.orders import order_router
from cargo.order.order import Order, OrderStatus
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(order_router)
    register_exception_handlers(app)
    return TestClient(app)


def _init_payment(client, buyer, lines):
    return client.post(
        "/api/orders/init-payment",
        json=[{"product_id": str(product_id), "quantity": quantity} for product_id, quantity in lines],
        headers={"X-User-Subject": buyer.subject},
    )


def _post_webhook(client, gateway, payload, signature=None):
    body = json.dumps(payload)
    return client.post(
        "/api/orders/webhook",
        content=body,
        headers={"Stripe-Signature": signature if signature is not None else gateway.sign(body)},
    )


def _completed(session_id, buyer_id):
    return {
        "type": "checkout.session.completed",
        "data": {
            "object": {
                "id": session_id,
                "metadata": {"user_public_id": buyer_id},
                "customer_details": {
                    "address": {"line1": "1 Rue X", "city": "Paris", "postal_code": "75001", "country": "FR"}
                },
            }
        },
    }


class TestCartDetails:
    def test_cart_details(self, client, make_product):
        product = make_product(price=19.99)

        response = client.get(
            "/api/orders/get-cart-details",
            params={"product_ids": [str(product.id), "does-not-exist"]},
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 1
        assert body[0]["name"] == "Phone holder"
        assert body[0]["price"] == 19.99
        assert body[0]["quantity"] == 1


class TestInitPayment:
    def test_returns_session_id(self, client, make_product, buyer, gateway):
        product = make_product()

        response = _init_payment(client, buyer, [(product.id, 2)])

        assert response.status_code == 200
        session_id = response.json()["id"]
        order = current_domain.repository_for(Order).find_by_session_id(session_id)
        assert order.status == OrderStatus.PENDING.value

    def test_requires_authentication(self, client, make_product, gateway):
        product = make_product()
        response = client.post("/api/orders/init-payment", json=[{"product_id": str(product.id), "quantity": 1}])
        assert response.status_code == 401

    def test_gateway_failure_is_400(self, client, make_product, buyer, gateway):
        product = make_product()
        gateway.configure(should_succeed=False)

        response = _init_payment(client, buyer, [(product.id, 1)])

        assert response.status_code == 400

    def test_unknown_product_is_400(self, client, buyer, gateway):
        response = _init_payment(client, buyer, [("does-not-exist", 1)])
        assert response.status_code == 400

    def test_empty_cart_is_400(self, client, buyer, gateway):
        response = _init_payment(client, buyer, [])
        assert response.status_code == 400

    def test_zero_quantity_is_422(self, client, make_product, buyer, gateway):
        product = make_product()
        response = _init_payment(client, buyer, [(product.id, 0)])
        assert response.status_code == 422


class TestWebhook:
    def test_completed_session_pays_order(self, client, make_product, buyer, gateway):
        product = make_product(nb_in_stock=10)
        session_id = _init_payment(client, buyer, [(product.id, 2)]).json()["id"]

        response = _post_webhook(client, gateway, _completed(session_id, str(buyer.id)))

        assert response.status_code == 200
        assert response.json()["status"] == "processed"
        assert current_domain.repository_for(Order).find_by_session_id(session_id).is_paid
        assert current_domain.repository_for(Product).get(str(product.id)).nb_in_stock == 8
        assert current_domain.repository_for(User).get(str(buyer.id)).address.city == "Paris"

    def test_bad_signature_is_400(self, client, make_product, buyer, gateway):
        product = make_product()
        session_id = _init_payment(client, buyer, [(product.id, 1)]).json()["id"]

        response = _post_webhook(client, gateway, _completed(session_id, str(buyer.id)), signature="forged")

        assert response.status_code == 400
        assert not current_domain.repository_for(Order).find_by_session_id(session_id).is_paid

    def test_other_event_types_are_ignored(self, client, gateway):
        response = _post_webhook(client, gateway, {"type": "payment_intent.created", "data": {"object": {}}})
        assert response.status_code == 200
        assert response.json()["status"] == "ignored"

    def test_completed_session_without_id_is_400(self, client, gateway):
        payload = {"type": "checkout.session.completed", "data": {"object": {"metadata": {}}}}
        response = _post_webhook(client, gateway, payload)
        assert response.status_code == 400

    def test_unknown_session_is_404(self, client, buyer, gateway):
        response = _post_webhook(client, gateway, _completed("cs_test_unknown", str(buyer.id)))
        assert response.status_code == 404


class TestOrderListings:
    def test_buyer_sees_own_orders(self, client, make_product, buyer, admin, gateway):
        product = make_product()
        _init_payment(client, buyer, [(product.id, 2)])
        _init_payment(client, admin, [(product.id, 1)])

        response = client.get("/api/orders/user", headers={"X-User-Subject": buyer.subject})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["items"][0]["lines"][0]["quantity"] == 2
        assert body["items"][0]["total"] == pytest.approx(39.98)

    def test_admin_listing_requires_admin(self, client, buyer):
        response = client.get("/api/orders/admin", headers={"X-User-Subject": buyer.subject})
        assert response.status_code == 403

    def test_admin_listing_shows_buyer_email_and_address(self, client, make_product, buyer, admin, gateway):
        product = make_product()
        session_id = _init_payment(client, buyer, [(product.id, 1)]).json()["id"]
        _post_webhook(client, gateway, _completed(session_id, str(buyer.id)))

        response = client.get("/api/orders/admin", headers={"X-User-Subject": admin.subject})

        assert response.status_code == 200
        item = response.json()["items"][0]
        assert item["status"] == "PAID"
        assert item["buyer_email"] == "buyer@example.com"
        assert item["address"] == "1 Rue X, Paris, 75001, FR"
