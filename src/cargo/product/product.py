"""Product aggregate root with Picture entity."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from cargo.domain import cargo
from cargo.product.events import ProductCreated, StockDecremented


@cargo.entity(part_of="Product")
class Picture:
    """A product picture reference. The binary itself lives in external storage."""

    url: String(required=True, max_length=1000)
    mime_type: String(max_length=100)
    is_primary: Boolean(default=False)


@cargo.aggregate
class Product:
    """A catalog item that can be priced in a cart and purchased.

    The product is also the stock keeping unit: ``nb_in_stock`` is decremented
    once an order containing it is paid. Stock is not floored at zero; an
    oversold product simply goes negative and is left for an operator.
    """

    name: String(required=True, max_length=255)
    description: Text()
    brand: String(required=True, max_length=100)
    color: String(max_length=50)
    size: String(max_length=20)
    price: Float(required=True, min_value=0.1)
    category_id: Identifier()
    featured: Boolean(default=False)
    nb_in_stock: Integer(default=0)
    pictures: HasMany(Picture)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def exactly_one_primary_picture_when_pictures_exist(self):
        if not self.pictures:
            return
        primaries = [p for p in self.pictures if p.is_primary]
        if len(primaries) != 1:
            raise ValidationError({"pictures": ["Exactly one picture must be marked as primary"]})

    @classmethod
    def create(
        cls,
        name,
        brand,
        price,
        description=None,
        color=None,
        size=None,
        category_id=None,
        featured=False,
        nb_in_stock=0,
        picture_urls=None,
    ):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            brand=brand,
            price=price,
            description=description,
            color=color,
            size=size,
            category_id=category_id,
            featured=featured,
            nb_in_stock=nb_in_stock,
            created_at=now,
            updated_at=now,
        )
        for url in picture_urls or []:
            product.add_picture(url)

        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=name,
                brand=brand,
                price=price,
                nb_in_stock=nb_in_stock,
                created_at=now,
            )
        )
        return product

    def add_picture(self, url, mime_type=None, is_primary=False):
        # First picture is always primary
        if not self.pictures:
            is_primary = True

        with atomic_change(self):
            if is_primary:
                for picture in self.pictures:
                    if picture.is_primary:
                        picture.is_primary = False

            picture = Picture(url=url, mime_type=mime_type, is_primary=is_primary)
            self.add_pictures(picture)
        return picture

    @property
    def primary_picture(self):
        """URL of the primary picture, or None for a product without pictures."""
        primary = next((p for p in self.pictures if p.is_primary), None)
        return primary.url if primary else None

    def decrement_stock(self, quantity):
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity to decrement must be at least 1"]})

        self.nb_in_stock = (self.nb_in_stock or 0) - quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockDecremented(
                product_id=str(self.id),
                quantity=quantity,
                nb_in_stock=self.nb_in_stock,
                decremented_at=self.updated_at,
            )
        )
