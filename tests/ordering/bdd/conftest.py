"""Shared BDD fixtures and step definitions for checkout scenarios."""

import pytest
from cargo.product.product import Product
from cargo.order.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def catalog():
    """Products by their scenario label."""
    return {}


@pytest.fixture()
def outcome():
    return {"session_id": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{label}" priced {price:f} with {stock:d} in stock'))
def _(catalog, label, price, stock):
    product = Product.create(name=label, brand="CarGo", price=price, nb_in_stock=stock)
    current_domain.repository_for(Product).add(product)
    catalog[label] = product


@given(parsers.cfparse('a registered buyer "{email}"'))
def _(buyer, email):
    assert buyer.email == email


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order is "{status}" with {count:d} line'))
def _(outcome, status, count):
    order = current_domain.repository_for(Order).find_by_session_id(outcome["session_id"])
    assert order.status == status
    assert len(order.lines) == count


@then(parsers.cfparse('"{label}" has {stock:d} in stock'))
def _(catalog, label, stock):
    assert current_domain.repository_for(Product).get(str(catalog[label].id)).nb_in_stock == stock

