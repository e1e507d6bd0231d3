"""FastAPI routes for orders: cart checkout, payment webhook and listings."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from cargo.api.dependencies import current_admin, current_buyer
from cargo.api.schemas import (
    AdminOrderPageResponse,
    AdminOrderResponse,
    CartItemPreviewResponse,
    CartLineRequest,
    OrderLineResponse,
    OrderPageResponse,
    OrderResponse,
    PaymentSessionResponse,
    StatusResponse,
)
from cargo.cart.cart_line import CartLine, cart_lines_to_json
from cargo.cart.pricing import price_cart
from cargo.gateway import get_gateway
from cargo.gateway.port import CartPaymentError, SignatureVerificationError
from cargo.order.confirmation import ConfirmPayment
from cargo.order.listing import list_all_orders, list_buyer_orders
from cargo.order.placement import PlaceOrder
from cargo.user.user import User

order_router = APIRouter(prefix="/api/orders", tags=["orders"])


def _order_fields(order) -> dict:
    return {
        "id": str(order.id),
        "status": order.status,
        "payment_session_id": order.payment_session_id,
        "created_at": order.created_at,
        "paid_at": order.paid_at,
        "total": order.total,
        "lines": [
            OrderLineResponse(
                product_id=str(line.product_id),
                product_name=line.product_name,
                unit_price=line.unit_price,
                quantity=line.quantity,
            )
            for line in order.sorted_lines
        ],
    }


@order_router.get("/get-cart-details", response_model=list[CartItemPreviewResponse])
async def get_cart_details(product_ids: list[str] = Query(default=[])) -> list[CartItemPreviewResponse]:
    """Price the products in a cart. Unknown ids are left out of the response."""
    previews = price_cart([CartLine(product_id=product_id, quantity=1) for product_id in product_ids])
    return [CartItemPreviewResponse(**asdict(preview)) for preview in previews]


@order_router.post("/init-payment", response_model=PaymentSessionResponse)
async def init_payment(
    body: list[CartLineRequest],
    buyer: User = Depends(current_buyer),
) -> PaymentSessionResponse:
    """Open a payment session for the cart and record a PENDING order."""
    command = PlaceOrder(
        buyer_id=str(buyer.id),
        buyer_email=buyer.email,
        lines=cart_lines_to_json(line.model_dump() for line in body),
    )
    try:
        session_id = current_domain.process(command, asynchronous=False)
    except (CartPaymentError, ObjectNotFoundError):
        raise HTTPException(status_code=400) from None
    return PaymentSessionResponse(id=session_id)


@order_router.post("/webhook", response_model=StatusResponse)
async def payment_webhook(request: Request, stripe_signature: str = Header(default="")) -> StatusResponse:
    """Process a payment provider callback.

    Only completed checkout sessions change state; other event types are
    acknowledged and ignored.
    """
    payload = (await request.body()).decode("utf-8")
    try:
        event = get_gateway().construct_event(payload, stripe_signature)
    except (SignatureVerificationError, ValueError):
        raise HTTPException(status_code=400, detail="Invalid webhook payload") from None

    if not event.is_checkout_completed:
        return StatusResponse(status="ignored")

    try:
        session = event.completed_session()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid webhook payload") from None
    command = ConfirmPayment(
        payment_session_id=session.session_id,
        buyer_id=session.buyer_id,
        street=session.street,
        city=session.city,
        zip_code=session.zip_code,
        country=session.country,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="processed")


@order_router.get("/user", response_model=OrderPageResponse)
async def list_orders_for_buyer(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=20, ge=1, le=100),
    buyer: User = Depends(current_buyer),
) -> OrderPageResponse:
    result = list_buyer_orders(buyer.id, page=page, size=size)
    return OrderPageResponse(
        items=[OrderResponse(**_order_fields(order)) for order in result.items],
        total=result.total,
        page=page,
        size=size,
    )


@order_router.get("/admin", response_model=AdminOrderPageResponse)
async def list_orders_for_admin(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=20, ge=1, le=100),
    admin: User = Depends(current_admin),  # noqa: ARG001
) -> AdminOrderPageResponse:
    result = list_all_orders(page=page, size=size)
    items = []
    for order in result.items:
        buyer = result.buyers.get(str(order.buyer_id))
        items.append(
            AdminOrderResponse(
                **_order_fields(order),
                buyer_email=buyer.email if buyer else order.buyer_email,
                address=buyer.address.formatted() if buyer and buyer.address else None,
            )
        )
    return AdminOrderPageResponse(items=items, total=result.total, page=page, size=size)
