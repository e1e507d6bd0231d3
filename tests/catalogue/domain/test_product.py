"""Domain tests for the Product aggregate."""

import pytest
from cargo.product.events import ProductCreated, StockDecremented
from cargo.product.product import Product
from protean.exceptions import ValidationError


def _product(**overrides):
    defaults = {
        "name": "Roof box 420L",
        "brand": "Thule",
        "price": 349.0,
        "nb_in_stock": 5,
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_product(self):
        product = _product()
        assert product.id is not None
        assert product.name == "Roof box 420L"
        assert product.nb_in_stock == 5
        assert product.featured is False

    def test_create_raises_product_created(self):
        product = _product()
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductCreated)
        assert event.product_id == str(product.id)
        assert event.price == 349.0

    def test_price_below_minimum_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _product(price=0.05)
        assert "price" in exc.value.messages

    def test_name_is_required(self):
        with pytest.raises(ValidationError) as exc:
            _product(name=None)
        assert "name" in exc.value.messages


class TestProductPictures:
    def test_first_picture_becomes_primary(self):
        product = _product(picture_urls=["https://cdn.example.com/a.jpg", "https://cdn.example.com/b.jpg"])
        assert len(product.pictures) == 2
        assert product.primary_picture == "https://cdn.example.com/a.jpg"

    def test_new_primary_picture_replaces_old_one(self):
        product = _product(picture_urls=["https://cdn.example.com/a.jpg"])
        product.add_picture("https://cdn.example.com/b.jpg", is_primary=True)

        primaries = [p for p in product.pictures if p.is_primary]
        assert len(primaries) == 1
        assert product.primary_picture == "https://cdn.example.com/b.jpg"

    def test_product_without_pictures_has_no_primary(self):
        assert _product().primary_picture is None


class TestStockDecrement:
    def test_decrement_reduces_stock(self):
        product = _product(nb_in_stock=5)
        product.decrement_stock(2)
        assert product.nb_in_stock == 3

    def test_decrement_raises_event(self):
        product = _product(nb_in_stock=5)
        product._events.clear()
        product.decrement_stock(2)

        event = product._events[-1]
        assert isinstance(event, StockDecremented)
        assert event.quantity == 2
        assert event.nb_in_stock == 3

    def test_stock_can_go_negative(self):
        product = _product(nb_in_stock=1)
        product.decrement_stock(3)
        assert product.nb_in_stock == -2

    def test_zero_quantity_is_rejected(self):
        product = _product()
        with pytest.raises(ValidationError):
            product.decrement_stock(0)
