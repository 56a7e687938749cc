"""Google OAuth 2.0 authorization-code client.

Only the three calls the login flow needs are implemented: building the
consent URL, exchanging the code, and fetching the userinfo profile.
Every failure of the two network calls is raised as ExternalProviderError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlencode

import httpx
import structlog

from shortener.core.modules.oauth.models import (
    EMAIL_SCOPE,
    GOOGLE_USERINFO_URL,
    ClientCredentials,
    CredentialsFile,
    OAuthToken,
    Profile,
)
from shortener.errors import ExternalProviderError

if TYPE_CHECKING:
    from shortener.config import Config

logger = structlog.get_logger(__name__)


class OAuthProvider:
    def __init__(
        self,
        credentials: ClientCredentials,
        redirect_uri: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        userinfo_url: str = GOOGLE_USERINFO_URL,
    ) -> None:
        self.credentials = credentials
        self.redirect_uri = redirect_uri
        self.userinfo_url = userinfo_url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_config(cls, config: Config) -> OAuthProvider:
        """Build the provider from a credentials file or explicit client id/secret."""
        if config.google_credentials_file:
            credentials = CredentialsFile.load(config.google_credentials_file)
        else:
            credentials = ClientCredentials(client_id=config.google_client_id, client_secret=config.google_client_secret)
        return cls(credentials, config.callback_url, timeout=config.oauth_timeout_seconds)

    def authorization_url(self, state: str) -> str:
        """Consent page URL requesting email scope and offline access."""
        params = {
            "client_id": self.credentials.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": EMAIL_SCOPE,
            "access_type": "offline",
            "state": state,
        }
        return f"{self.credentials.auth_uri}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> OAuthToken:
        payload = {
            "code": code,
            "client_id": self.credentials.client_id,
            "client_secret": self.credentials.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }
        try:
            response = await self._client.post(self.credentials.token_uri, data=payload)
            response.raise_for_status()
            return OAuthToken.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.warning("oauth_token_exchange_failed", status=e.response.status_code)
            raise ExternalProviderError(f"Token exchange failed (status={e.response.status_code})") from e
        except httpx.HTTPError as e:
            logger.warning("oauth_token_exchange_failed", error=type(e).__name__)
            raise ExternalProviderError("Token exchange failed") from e
        except ValueError as e:
            raise ExternalProviderError("Invalid token response") from e

    async def fetch_profile(self, token: OAuthToken) -> Profile:
        headers = {"Authorization": f"Bearer {token.access_token}"}
        try:
            response = await self._client.get(self.userinfo_url, headers=headers)
            response.raise_for_status()
            return Profile.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.warning("oauth_profile_fetch_failed", status=e.response.status_code)
            raise ExternalProviderError(f"Profile fetch failed (status={e.response.status_code})") from e
        except httpx.HTTPError as e:
            logger.warning("oauth_profile_fetch_failed", error=type(e).__name__)
            raise ExternalProviderError("Profile fetch failed") from e
        except ValueError as e:
            raise ExternalProviderError("Invalid profile response") from e

    async def aclose(self) -> None:
        await self._client.aclose()
