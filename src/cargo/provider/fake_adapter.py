"""In-memory identity provider for development and tests."""

from cargo.provider.port import IdentityProvider, IdentityProviderError


class FakeIdentityProvider(IdentityProvider):
    def __init__(self) -> None:
        self.accounts: dict[str, dict] = {}
        self.calls: list[str] = []

    def register(self, subject: str, **attributes) -> None:
        """Make ``subject`` known to the provider with the given attributes."""
        self.accounts[subject] = dict(attributes)

    def get_user_info(self, subject: str) -> dict:
        self.calls.append(subject)
        if subject not in self.accounts:
            raise IdentityProviderError(f"Unknown subject: {subject}")
        return dict(self.accounts[subject])
