"""Repository for the Product aggregate."""

from cargo.product.product import Product
from cargo.domain import cargo


@cargo.repository(part_of=Product)
class ProductRepository:
    def find_by_ids(self, product_ids) -> list[Product]:
        """Return the products matching ``product_ids``, in storage order.

        Unknown ids are simply absent from the result.
        """
        ids = list({str(product_id) for product_id in product_ids})
        if not ids:
            return []
        return self._dao.query.filter(id__in=ids).all().items

    def find_featured(self, page: int = 0, size: int = 20):
        return self._dao.query.filter(featured=True).order_by("name").offset(page * size).limit(size).all()

    def find_page(self, page: int = 0, size: int = 20):
        """Every product, by name. Returns the query's ResultSet (``items`` and ``total``)."""
        return self._dao.query.order_by("name").offset(page * size).limit(size).all()

    def remove_product(self, product: Product) -> None:
        self._dao.delete(product)
