"""Payment confirmation: command and handler.

Runs when the payment provider reports a completed checkout session. The
order is marked PAID, every line is taken out of stock and the buyer's
shipping address is replaced with the one collected by the provider, all
in the handler's unit of work.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from cargo.product.inventory import decrement_stock
from cargo.domain import cargo
from cargo.user.user import User
from cargo.order.order import Order

logger = structlog.get_logger(__name__)


@cargo.command(part_of="Order")
class ConfirmPayment:
    payment_session_id = String(required=True, max_length=255)
    buyer_id = Identifier()  # as echoed back in the session metadata
    street = String(max_length=255)
    city = String(max_length=255)
    zip_code = String(max_length=20)
    country = String(max_length=100)


@cargo.command_handler(part_of=Order)
class ConfirmPaymentHandler:
    @handle(ConfirmPayment)
    def confirm_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find_by_session_id(command.payment_session_id)

        if order.is_paid:
            logger.info(
                "Payment already confirmed, ignoring redelivery",
                order_id=str(order.id),
                payment_session_id=command.payment_session_id,
            )
            return str(order.id)

        order.mark_paid()
        repo.add(order)
        logger.info("Order paid", order_id=str(order.id), payment_session_id=command.payment_session_id)

        for line in order.line_quantities():
            decrement_stock(line.product_id, line.quantity)

        if command.buyer_id and str(command.buyer_id) != str(order.buyer_id):
            logger.warning(
                "Session metadata names a different buyer than the order",
                order_id=str(order.id),
                order_buyer_id=str(order.buyer_id),
                metadata_buyer_id=str(command.buyer_id),
            )
        self._update_buyer_address(order.buyer_id, command)
        return str(order.id)

    def _update_buyer_address(self, buyer_id, command):
        if not all([command.street, command.city, command.zip_code, command.country]):
            logger.warning("Incomplete shipping address, buyer address left unchanged", buyer_id=str(buyer_id))
            return

        user_repo = current_domain.repository_for(User)
        user = user_repo.get(str(buyer_id))
        user.update_address(
            street=command.street,
            city=command.city,
            zip_code=command.zip_code,
            country=command.country,
        )
        user_repo.add(user)
