"""Product deletion: command and handler.

Orders keep the name and price captured at checkout, so deleting a product
never touches them; a later payment confirmation skips its stock decrement.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from cargo.domain import cargo
from cargo.product.product import Product

logger = structlog.get_logger(__name__)


@cargo.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


@cargo.command_handler(part_of=Product)
class DeleteProductHandler:
    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo.remove_product(product)
        logger.info("Product deleted", product_id=str(command.product_id))
        return str(command.product_id)
