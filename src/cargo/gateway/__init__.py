"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations through the
PAYMENT_GATEWAY environment variable:
- "fake" (default): FakeGateway for development and testing
- "stripe": StripeGateway, configured from STRIPE_* variables
"""

import os

from cargo.gateway.fake_adapter import FakeGateway
from cargo.gateway.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def _build_gateway() -> PaymentGateway:
    adapter = os.environ.get("PAYMENT_GATEWAY", "fake")
    if adapter == "fake":
        return FakeGateway()
    if adapter == "stripe":
        from cargo.gateway.stripe_adapter import StripeGateway

        return StripeGateway(
            api_key=os.environ["STRIPE_API_KEY"],
            webhook_secret=os.environ["STRIPE_WEBHOOK_SECRET"],
            client_base_url=os.environ.get("CLIENT_BASE_URL", "http://localhost:4200"),
            currency=os.environ.get("PAYMENT_CURRENCY", "eur"),
        )
    raise ValueError(f"Unknown payment gateway: {adapter}")


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway. Defaults to FakeGateway."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _build_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
