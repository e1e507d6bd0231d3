"""Order placement: command and handler.

Placing an order opens a payment session with the provider first, then
persists a PENDING order that points at it. The buyer is redirected to the
session; the order is paid later, when the provider calls back.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from cargo.product.inventory import find_products_by_ids
from cargo.domain import cargo
from cargo.cart.cart_line import cart_lines_from_json
from cargo.gateway import get_gateway
from cargo.gateway.port import BuyerContact, SessionLineItem, to_minor_units
from cargo.order.order import Order, OrderLine

logger = structlog.get_logger(__name__)


@cargo.command(part_of="Order")
class PlaceOrder:
    buyer_id = Identifier(required=True)
    buyer_email = String(required=True, max_length=255)
    lines = Text(required=True)  # JSON: list of {product_id, quantity}


@cargo.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_lines = cart_lines_from_json(command.lines)
        if not cart_lines:
            raise ValidationError({"lines": ["Cart is empty"]})

        products = {str(product.id): product for product in find_products_by_ids([line.product_id for line in cart_lines])}

        session_id = get_gateway().create_session(
            BuyerContact(buyer_id=str(command.buyer_id), email=command.buyer_email),
            [
                SessionLineItem(
                    name=products[str(line.product_id)].name,
                    unit_amount=to_minor_units(products[str(line.product_id)].price),
                    quantity=line.quantity,
                )
                for line in cart_lines
                if str(line.product_id) in products
            ],
        )
        logger.info("Payment session opened", payment_session_id=session_id, buyer_id=str(command.buyer_id))

        order_lines = []
        for position, line in enumerate(cart_lines):
            product = products.get(str(line.product_id))
            if product is None:
                # The provider session stays open; nothing here can cancel it.
                logger.warning(
                    "Cart references unknown product, payment session left orphaned",
                    product_id=str(line.product_id),
                    payment_session_id=session_id,
                )
                raise ObjectNotFoundError(f"Product with id `{line.product_id}` not found")
            order_lines.append(OrderLine.capture(product, line.quantity, position))

        order = Order.place(
            buyer_id=command.buyer_id,
            buyer_email=command.buyer_email,
            payment_session_id=session_id,
            lines=order_lines,
        )
        current_domain.repository_for(Order).add(order)
        logger.info("Order placed", order_id=str(order.id), payment_session_id=session_id, line_count=len(order_lines))
        return session_id
