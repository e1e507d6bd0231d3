"""Product creation: command and handler."""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from cargo.product.product import Product
from cargo.domain import cargo


@cargo.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    brand: String(required=True, max_length=100)
    price: Float(required=True)
    description: Text()
    color: String(max_length=50)
    size: String(max_length=20)
    category_id: Identifier()
    featured: Boolean(default=False)
    nb_in_stock: Integer(default=0)
    picture_urls: Text()  # JSON: list of URLs, first one is primary


@cargo.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        picture_urls = json.loads(command.picture_urls) if command.picture_urls else []

        product = Product.create(
            name=command.name,
            brand=command.brand,
            price=command.price,
            description=command.description,
            color=command.color,
            size=command.size,
            category_id=command.category_id,
            featured=command.featured or False,
            nb_in_stock=command.nb_in_stock or 0,
            picture_urls=picture_urls,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
