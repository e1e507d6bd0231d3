"""Payment session gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement.
This enables swapping between FakeGateway (dev/test) and StripeGateway
(production) without changing any domain or application code.

Amounts cross this boundary in minor currency units (cents), the way
payment providers expect them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


class CartPaymentError(Exception):
    """The provider refused to open a payment session."""


class SignatureVerificationError(Exception):
    """A webhook payload did not carry a valid provider signature."""


@dataclass(frozen=True)
class BuyerContact:
    """Who pays: the email shown on the payment page and our public id as metadata."""

    buyer_id: str
    email: str


@dataclass(frozen=True)
class SessionLineItem:
    name: str
    unit_amount: int  # minor units
    quantity: int


@dataclass(frozen=True)
class CheckoutSessionCompleted:
    """Payload of a completed checkout session, reduced to what fulfilment needs."""

    session_id: str
    buyer_id: str | None
    street: str | None
    city: str | None
    zip_code: str | None
    country: str | None


@dataclass(frozen=True)
class GatewayEvent:
    type: str
    data: dict

    @property
    def is_checkout_completed(self) -> bool:
        return self.type == CHECKOUT_SESSION_COMPLETED

    def completed_session(self) -> CheckoutSessionCompleted:
        session = self.data.get("object") or {}
        if not session.get("id"):
            raise ValueError("Completed checkout session carries no id")
        metadata = session.get("metadata") or {}
        address = (session.get("customer_details") or {}).get("address") or {}
        return CheckoutSessionCompleted(
            session_id=session["id"],
            buyer_id=metadata.get("user_public_id"),
            street=address.get("line1"),
            city=address.get("city"),
            zip_code=address.get("postal_code"),
            country=address.get("country"),
        )


def to_minor_units(price: float) -> int:
    """Convert a price to minor units, rounding half away from zero."""
    return int((Decimal(str(price)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def event_from_payload(payload: dict) -> GatewayEvent:
    return GatewayEvent(type=payload.get("type", ""), data=payload.get("data") or {})


class PaymentGateway(ABC):
    """Abstract payment session gateway interface."""

    @abstractmethod
    def create_session(self, buyer: BuyerContact, line_items: list[SessionLineItem]) -> str:
        """Open a hosted payment session and return its id.

        Raises CartPaymentError when the provider rejects the request.
        """
        ...

    @abstractmethod
    def construct_event(self, payload: str, signature: str) -> GatewayEvent:
        """Verify a webhook payload's signature and parse it.

        Raises SignatureVerificationError when the signature does not match.
        """
        ...
