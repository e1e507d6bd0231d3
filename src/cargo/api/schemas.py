"""Pydantic request/response schemas for the CarGo API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str
    brand: str
    price: float = Field(ge=0.1)
    description: str | None = None
    color: str | None = None
    size: str | None = None
    category_id: str | None = None
    featured: bool = False
    nb_in_stock: int = 0
    picture_urls: list[str] = []


class ProductIdResponse(BaseModel):
    id: str


class ProductResponse(BaseModel):
    id: str
    name: str
    brand: str
    price: float
    description: str | None = None
    color: str | None = None
    size: str | None = None
    category_id: str | None = None
    featured: bool = False
    nb_in_stock: int = 0
    picture: str | None = None


class ProductPageResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    page: int
    size: int


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class UserResponse(BaseModel):
    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str
    image_url: str | None = None
    authorities: list[str] = []


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CartLineRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "5f0c1c1e-7a52-4c55-9f1b-0f7b3f6a2c11",
                    "quantity": 2,
                }
            ]
        }
    }


class CartItemPreviewResponse(BaseModel):
    product_id: str
    name: str
    price: float
    brand: str
    picture: str | None = None
    quantity: int


class PaymentSessionResponse(BaseModel):
    id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class OrderLineResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price: float
    quantity: int


class OrderResponse(BaseModel):
    id: str
    status: str
    payment_session_id: str
    created_at: datetime | None = None
    paid_at: datetime | None = None
    total: float
    lines: list[OrderLineResponse]


class AdminOrderResponse(OrderResponse):
    buyer_email: str | None = None
    address: str | None = None


class OrderPageResponse(BaseModel):
    items: list[OrderResponse]
    total: int
    page: int
    size: int


class AdminOrderPageResponse(BaseModel):
    items: list[AdminOrderResponse]
    total: int
    page: int
    size: int
