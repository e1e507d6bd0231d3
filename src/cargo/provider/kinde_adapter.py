"""Kinde identity provider adapter.

Obtains a machine-to-machine token with the client credentials grant, then
reads the account through the management API.
"""

import requests
import structlog

from cargo.provider.port import IdentityProvider, IdentityProviderError

logger = structlog.get_logger(__name__)

_TIMEOUT_SECONDS = 10


class KindeIdentityProvider(IdentityProvider):
    def __init__(self, api_url: str, client_id: str, client_secret: str, audience: str) -> None:
        self.api_url = api_url.rstrip("/")
        self.client_id = client_id
        self.client_secret = client_secret
        self.audience = audience
        self.session = requests.Session()

    def _get_token(self) -> str:
        try:
            response = self.session.post(
                f"{self.api_url}/oauth/token",
                data={"grant_type": "client_credentials", "audience": self.audience},
                auth=(self.client_id, self.client_secret),
                headers={"Accept": "application/json"},
                timeout=_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            return response.json()["access_token"]
        except (requests.RequestException, KeyError, ValueError) as exc:
            logger.error("Error while getting identity provider token", error=str(exc))
            raise IdentityProviderError("No token found") from exc

    def get_user_info(self, subject: str) -> dict:
        token = self._get_token()
        try:
            response = self.session.get(
                f"{self.api_url}/api/v1/user",
                params={"id": subject},
                headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
                timeout=_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Error while reading user from identity provider", subject=subject, error=str(exc))
            raise IdentityProviderError(f"Could not read user {subject}") from exc
        return response.json()
