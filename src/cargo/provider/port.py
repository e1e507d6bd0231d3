"""Identity provider port.

The provider answers one question for CarGo: given the subject of an access
token, what does the account look like right now? Token issuance and
verification happen upstream.
"""

from abc import ABC, abstractmethod


class IdentityProviderError(Exception):
    """The identity provider could not be reached or refused the request."""


class IdentityProvider(ABC):
    @abstractmethod
    def get_user_info(self, subject: str) -> dict:
        """Return the provider's attributes for ``subject``.

        Recognised keys: ``preferred_email``, ``first_name``, ``last_name``,
        ``picture`` and ``last_signed_in`` (ISO-8601 timestamp).
        """
        ...
