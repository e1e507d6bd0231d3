"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from cargo.domain import cargo


@cargo.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalog."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    brand: String(required=True)
    price: Float(required=True)
    nb_in_stock: Integer(required=True)
    created_at: DateTime(required=True)


@cargo.event(part_of="Product")
class StockDecremented:
    """Units of a product left the stock because a paid order contained them."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    nb_in_stock: Integer(required=True)
    decremented_at: DateTime(required=True)
