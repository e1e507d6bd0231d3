"""Configurable fake payment gateway for development and testing.

No external calls. Sessions get random ids, and webhook payloads are signed
with HMAC-SHA256 over the raw body, so tests can produce payloads the
gateway accepts with sign().
"""

import hashlib
import hmac
import json
from uuid import uuid4

from cargo.gateway.port import (
    BuyerContact,
    CartPaymentError,
    GatewayEvent,
    PaymentGateway,
    SessionLineItem,
    SignatureVerificationError,
    event_from_payload,
)

DEFAULT_WEBHOOK_SECRET = "whsec_test"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, webhook_secret: str = DEFAULT_WEBHOOK_SECRET) -> None:
        self.webhook_secret = webhook_secret
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment provider unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Payment provider unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_session(self, buyer: BuyerContact, line_items: list[SessionLineItem]) -> str:
        self.calls.append(
            {
                "method": "create_session",
                "buyer": buyer,
                "line_items": list(line_items),
            }
        )
        if not self.should_succeed:
            raise CartPaymentError(self.failure_reason)
        return f"cs_test_{uuid4().hex[:24]}"

    def sign(self, payload: str) -> str:
        return hmac.new(self.webhook_secret.encode(), payload.encode(), hashlib.sha256).hexdigest()

    def construct_event(self, payload: str, signature: str) -> GatewayEvent:
        if not signature or not hmac.compare_digest(self.sign(payload), signature):
            raise SignatureVerificationError("Webhook signature does not match payload")
        return event_from_payload(json.loads(payload))
