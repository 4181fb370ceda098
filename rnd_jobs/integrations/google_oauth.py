"""
Google OAuth2 for the Sheets connection.

One-time connect flow run from the board's settings panel: the browser opens
the consent URL in a popup, Google redirects to /auth/google/callback, and
the code is exchanged here for tokens that the mirror uses afterwards.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from config import settings
from ..database.repositories.settings import (
    SettingsRepository,
    get_settings_repository,
    GOOGLE_TOKENS,
)
from .sheets import SCOPES, TOKEN_URI

logger = logging.getLogger(__name__)

AUTH_URI = "https://accounts.google.com/o/oauth2/v2/auth"


class OAuthExchangeError(Exception):
    """Authorization code could not be exchanged for tokens."""
    pass


class GoogleOAuthClient:
    """Builds the consent URL and stores exchanged tokens."""

    def __init__(
        self,
        settings_repo: Optional[SettingsRepository] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        redirect_uri: Optional[str] = None,
    ):
        self.settings_repo = settings_repo or get_settings_repository()
        self.client_id = client_id or settings.google_client_id
        self.client_secret = client_secret or settings.google_client_secret
        self.redirect_uri = redirect_uri or settings.google_redirect_uri

    def get_auth_url(self) -> str:
        """Consent URL asking for offline Sheets access."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "access_type": "offline",
            "prompt": "consent",
        }
        return f"{AUTH_URI}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> Dict[str, Any]:
        """
        Exchange an authorization code and persist the tokens.

        Raises:
            OAuthExchangeError: Google rejected the code or was unreachable
        """
        if not code:
            raise OAuthExchangeError("Missing authorization code")

        try:
            async with httpx.AsyncClient(timeout=30.0) as client:
                response = await client.post(
                    TOKEN_URI,
                    data={
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "code": code,
                        "grant_type": "authorization_code",
                        "redirect_uri": self.redirect_uri,
                    },
                )
        except httpx.HTTPError as e:
            raise OAuthExchangeError(f"Token endpoint unreachable: {e}")

        if response.status_code != 200:
            raise OAuthExchangeError(f"Token exchange failed: {response.text}")

        tokens = response.json()
        if tokens.get("expires_in"):
            expiry = datetime.now(timezone.utc) + timedelta(seconds=int(tokens["expires_in"]))
            tokens["expiry"] = expiry.isoformat()

        # Google omits refresh_token on re-consent for an already granted app
        if not tokens.get("refresh_token"):
            previous = await self.settings_repo.get_json(GOOGLE_TOKENS) or {}
            if previous.get("refresh_token"):
                tokens["refresh_token"] = previous["refresh_token"]

        await self.settings_repo.set_json(GOOGLE_TOKENS, tokens)
        logger.info("Stored Google Sheets OAuth tokens")
        return tokens


# Singleton
_oauth_client: Optional[GoogleOAuthClient] = None


def get_google_oauth_client() -> GoogleOAuthClient:
    """Get the Google OAuth client singleton."""
    global _oauth_client
    if _oauth_client is None:
        _oauth_client = GoogleOAuthClient()
    return _oauth_client
