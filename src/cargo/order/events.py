"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from cargo.domain import cargo


@cargo.event(part_of="Order")
class OrderPlaced:
    """A buyer was sent to a payment session and a PENDING order now tracks it."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    payment_session_id = String(required=True)
    line_count = Integer(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)


@cargo.event(part_of="Order")
class OrderPaid:
    """The payment provider reported the order's checkout session as completed."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    payment_session_id = String(required=True)
    paid_at = DateTime(required=True)
