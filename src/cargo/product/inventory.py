"""Inventory operations used by the ordering workflow.

These run inside the caller's unit of work, so a stock decrement commits or
rolls back together with the order change that triggered it.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from cargo.product.product import Product

logger = structlog.get_logger(__name__)


def find_products_by_ids(product_ids) -> list[Product]:
    """Resolve product ids in a single batch lookup."""
    return current_domain.repository_for(Product).find_by_ids(product_ids)


def decrement_stock(product_id, quantity) -> None:
    """Remove ``quantity`` units of a product from stock.

    A product deleted from the catalog since the order was placed has no
    stock left to track; the decrement is skipped.
    """
    repo = current_domain.repository_for(Product)
    try:
        product = repo.get(str(product_id))
    except ObjectNotFoundError:
        logger.warning("Skipping stock decrement for unknown product", product_id=str(product_id), quantity=quantity)
        return

    product.decrement_stock(quantity)
    repo.add(product)
    logger.info(
        "Stock decremented",
        product_id=str(product_id),
        quantity=quantity,
        nb_in_stock=product.nb_in_stock,
    )
