"""Order aggregate: the core of the ordering domain.

An Order is opened when the buyer is sent to the payment page and is paid
when the payment provider reports the checkout session as completed. The
session id is the only link between the two moments.

State Machine:
    PENDING → PAID
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from cargo.domain import cargo
from cargo.order.events import OrderPaid, OrderPlaced


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID},
    OrderStatus.PAID: set(),  # Terminal
}


@dataclass(frozen=True)
class LineQuantity:
    """How many units of a product an order consumes from stock."""

    product_id: str
    quantity: int


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@cargo.entity(part_of="Order")
class OrderLine:
    """A purchased product with the name and price it had when the order was placed."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Float(required=True)
    quantity = Integer(required=True, min_value=1)
    position = Integer(required=True, min_value=0)

    @invariant.post
    def unit_price_must_be_positive(self):
        if self.unit_price is None or self.unit_price <= 0:
            raise ValidationError({"unit_price": ["Unit price must be greater than zero"]})

    @classmethod
    def capture(cls, product, quantity, position):
        """Freeze a catalog product into an order line."""
        return cls(
            product_id=str(product.id),
            product_name=product.name,
            unit_price=product.price,
            quantity=quantity,
            position=position,
        )

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@cargo.aggregate
class Order:
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    payment_session_id = String(required=True, max_length=255, unique=True)
    buyer_id = Identifier(required=True)
    buyer_email = String(max_length=255)
    lines = HasMany(OrderLine)
    created_at = DateTime()
    paid_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, buyer_id, buyer_email, payment_session_id, lines):
        """Open a PENDING order for a payment session.

        Args:
            buyer_id: The purchasing user.
            buyer_email: Captured for display in back-office listings.
            payment_session_id: Id of the provider session the buyer pays on.
            lines: OrderLine entities, in the order the buyer submitted them.
        """
        if not lines:
            raise ValidationError({"lines": ["An order must contain at least one line"]})

        now = datetime.now(UTC)
        order = cls(
            buyer_id=str(buyer_id),
            buyer_email=buyer_email,
            payment_session_id=payment_session_id,
            created_at=now,
        )
        order.add_lines(list(lines))
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                buyer_id=str(buyer_id),
                payment_session_id=payment_session_id,
                line_count=len(order.lines),
                total=order.total,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def mark_paid(self):
        self._assert_can_transition(OrderStatus.PAID)
        now = datetime.now(UTC)
        self.status = OrderStatus.PAID.value
        self.paid_at = now
        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                buyer_id=str(self.buyer_id),
                payment_session_id=self.payment_session_id,
                paid_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_paid(self) -> bool:
        return self.status == OrderStatus.PAID.value

    @property
    def sorted_lines(self) -> list:
        return sorted(self.lines, key=lambda line: line.position)

    @property
    def total(self) -> float:
        return round(sum(line.subtotal for line in self.lines), 2)

    def line_quantities(self) -> list[LineQuantity]:
        return [LineQuantity(product_id=str(line.product_id), quantity=line.quantity) for line in self.sorted_lines]
