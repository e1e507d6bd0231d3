"""Cart preview pricing. Reads the catalog, persists nothing."""

from dataclasses import dataclass

from cargo.product.inventory import find_products_by_ids


@dataclass(frozen=True)
class CartItemPreview:
    product_id: str
    name: str
    price: float
    brand: str
    picture: str | None
    quantity: int


def price_cart(lines) -> list[CartItemPreview]:
    """Price cart lines against the live catalog.

    One preview per resolved product, in catalog order; ids that do not
    resolve are left out. A product id listed on several lines yields a
    single preview carrying the quantity of its first line.
    """
    quantities = {}
    for line in lines:
        quantities.setdefault(str(line.product_id), line.quantity)

    products = find_products_by_ids(list(quantities))
    return [
        CartItemPreview(
            product_id=str(product.id),
            name=product.name,
            price=product.price,
            brand=product.brand,
            picture=product.primary_picture,
            quantity=quantities[str(product.id)],
        )
        for product in products
    ]
