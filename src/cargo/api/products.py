"""FastAPI routes for the product catalog."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from cargo.api.dependencies import current_admin
from cargo.api.schemas import (
    CreateProductRequest,
    ProductIdResponse,
    ProductPageResponse,
    ProductResponse,
)
from cargo.product.creation import CreateProduct
from cargo.product.deletion import DeleteProduct
from cargo.product.product import Product
from cargo.user.user import User

product_router = APIRouter(prefix="/api/products", tags=["products"])


def _to_response(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        brand=product.brand,
        price=product.price,
        description=product.description,
        color=product.color,
        size=product.size,
        category_id=str(product.category_id) if product.category_id else None,
        featured=bool(product.featured),
        nb_in_stock=product.nb_in_stock or 0,
        picture=product.primary_picture,
    )


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(
    body: CreateProductRequest,
    admin: User = Depends(current_admin),  # noqa: ARG001
) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        brand=body.brand,
        price=body.price,
        description=body.description,
        color=body.color,
        size=body.size,
        category_id=body.category_id,
        featured=body.featured,
        nb_in_stock=body.nb_in_stock,
        picture_urls=json.dumps(body.picture_urls),
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(id=product_id)


@product_router.get("", response_model=ProductPageResponse)
async def list_products(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=20, ge=1, le=100),
    admin: User = Depends(current_admin),  # noqa: ARG001
) -> ProductPageResponse:
    """Every product in the catalog, for the back office."""
    result = current_domain.repository_for(Product).find_page(page=page, size=size)
    return ProductPageResponse(
        items=[_to_response(product) for product in result.items],
        total=result.total,
        page=page,
        size=size,
    )


@product_router.delete("", response_model=ProductIdResponse)
async def delete_product(
    public_id: str,
    admin: User = Depends(current_admin),  # noqa: ARG001
) -> ProductIdResponse:
    product_id = current_domain.process(DeleteProduct(product_id=public_id), asynchronous=False)
    return ProductIdResponse(id=product_id)


@product_router.get("/featured", response_model=ProductPageResponse)
async def list_featured_products(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=20, ge=1, le=100),
) -> ProductPageResponse:
    result = current_domain.repository_for(Product).find_featured(page=page, size=size)
    return ProductPageResponse(
        items=[_to_response(product) for product in result.items],
        total=result.total,
        page=page,
        size=size,
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return _to_response(product)
