"""Identity provider factory.

Provides get_identity_provider() / set_identity_provider() to swap
implementations through the IDENTITY_PROVIDER environment variable:
- "fake" (default): FakeIdentityProvider
- "kinde": KindeIdentityProvider, configured from KINDE_* variables
"""

import os

from cargo.provider.port import IdentityProvider

_current_provider: IdentityProvider | None = None


def _build_provider() -> IdentityProvider:
    adapter = os.environ.get("IDENTITY_PROVIDER", "fake")
    if adapter == "fake":
        from cargo.provider.fake_adapter import FakeIdentityProvider

        return FakeIdentityProvider()
    if adapter == "kinde":
        from cargo.provider.kinde_adapter import KindeIdentityProvider

        return KindeIdentityProvider(
            api_url=os.environ["KINDE_API"],
            client_id=os.environ["KINDE_CLIENT_ID"],
            client_secret=os.environ["KINDE_CLIENT_SECRET"],
            audience=os.environ["KINDE_AUDIENCE"],
        )
    raise ValueError(f"Unknown identity provider: {adapter}")


def get_identity_provider() -> IdentityProvider:
    """Return the configured identity provider (singleton)."""
    global _current_provider
    if _current_provider is None:
        _current_provider = _build_provider()
    return _current_provider


def set_identity_provider(provider: IdentityProvider) -> None:
    """Override the active identity provider (useful for tests)."""
    global _current_provider
    _current_provider = provider


def reset_identity_provider() -> None:
    """Reset to the configured default."""
    global _current_provider
    _current_provider = None
