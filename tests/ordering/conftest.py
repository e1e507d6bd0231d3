"""Shared fixtures for the Ordering tests: a buyer, catalog products and a fake gateway."""

import json

import pytest
from cargo.product.product import Product
from cargo.user.user import ROLE_ADMIN, ROLE_USER, User
from cargo.gateway import set_gateway
from cargo.gateway.fake_adapter import FakeGateway
from cargo.order.placement import PlaceOrder
from protean import current_domain


@pytest.fixture()
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture()
def buyer():
    user = User.register(
        subject="kp_buyer",
        email="buyer@example.com",
        first_name="Bea",
        last_name="Buyer",
        authorities=[ROLE_USER],
    )
    current_domain.repository_for(User).add(user)
    return user


@pytest.fixture()
def admin():
    user = User.register(
        subject="kp_admin",
        email="admin@example.com",
        first_name="Ada",
        last_name="Admin",
        authorities=[ROLE_USER, ROLE_ADMIN],
    )
    current_domain.repository_for(User).add(user)
    return user


@pytest.fixture()
def make_product():
    def _make(name="Phone holder", price=19.99, nb_in_stock=10, brand="Belkin", picture_urls=None):
        product = Product.create(
            name=name,
            brand=brand,
            price=price,
            nb_in_stock=nb_in_stock,
            picture_urls=picture_urls,
        )
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def place_order(buyer, gateway):
    """Place an order for ``buyer`` and return the payment session id."""

    def _place(lines, user=None):
        user = user or buyer
        command = PlaceOrder(
            buyer_id=str(user.id),
            buyer_email=user.email,
            lines=json.dumps([{"product_id": str(product_id), "quantity": quantity} for product_id, quantity in lines]),
        )
        return current_domain.process(command, asynchronous=False)

    return _place
