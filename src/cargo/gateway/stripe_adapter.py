"""Stripe payment gateway adapter.

Opens Stripe Checkout sessions and verifies webhook signatures with the
endpoint's signing secret.
"""

import json

import stripe
import structlog

from cargo.gateway.port import (
    BuyerContact,
    CartPaymentError,
    GatewayEvent,
    PaymentGateway,
    SessionLineItem,
    SignatureVerificationError,
    event_from_payload,
)

logger = structlog.get_logger(__name__)


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str, webhook_secret: str, client_base_url: str, currency: str = "eur") -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret
        self.client_base_url = client_base_url.rstrip("/")
        self.currency = currency

    def create_session(self, buyer: BuyerContact, line_items: list[SessionLineItem]) -> str:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                mode="payment",
                customer_email=buyer.email,
                billing_address_collection="required",
                success_url=f"{self.client_base_url}/cart/success?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=f"{self.client_base_url}/cart/failure",
                metadata={"user_public_id": buyer.buyer_id},
                line_items=[
                    {
                        "quantity": item.quantity,
                        "price_data": {
                            "currency": self.currency,
                            "unit_amount": item.unit_amount,
                            "product_data": {"name": item.name},
                        },
                    }
                    for item in line_items
                ],
            )
        except stripe.StripeError as exc:
            logger.error("Stripe refused checkout session", error=str(exc))
            raise CartPaymentError("Error while creating Stripe session") from exc
        return session.id

    def construct_event(self, payload: str, signature: str) -> GatewayEvent:
        try:
            stripe.WebhookSignature.verify_header(payload, signature, self.webhook_secret)
        except stripe.SignatureVerificationError as exc:
            raise SignatureVerificationError(str(exc)) from exc
        return event_from_payload(json.loads(payload))
