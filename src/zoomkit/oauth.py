"""
OAuth 2.0 authorization-code flow for user-level Zoom apps.

The resulting access token is handed to ``ZoomClient.set_token``; zoomkit
never stores it.
"""

from __future__ import annotations

import base64
import logging
import urllib.parse
from typing import Any

import requests

from zoomkit.client import API_BASE_URL, ZoomClient
from zoomkit.config import OAuth2Settings
from zoomkit.exceptions import AuthenticationError, ConfigError
from zoomkit.models import User

logger = logging.getLogger(__name__)


class OAuth2Client:
    """Build authorization URLs and exchange codes for tokens"""

    def __init__(
        self,
        settings: OAuth2Settings,
        *,
        api_base_url: str = API_BASE_URL,
        timeout: float = 30,
    ):
        self.settings = settings
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"OAuth2Client(settings={self.settings!r})"

    def _require(self, *names: str) -> None:
        missing = [name for name in names if not getattr(self.settings, name)]
        if missing:
            raise ConfigError(
                f"OAuth2 settings incomplete: missing {', '.join(missing)}",
                details="Set ZOOM_CLIENT_ID, ZOOM_CLIENT_SECRET and ZOOM_REDIRECT_URI",
            )

    def authorization_url(self, state: str) -> str:
        """URL to send the user to for consent"""
        self._require("client_id", "redirect_uri")
        params = {
            "response_type": "code",
            "client_id": self.settings.client_id,
            "redirect_uri": self.settings.redirect_uri,
            "state": state,
        }
        return f"{self.settings.authorize_uri}?{urllib.parse.urlencode(params)}"

    def exchange_code(self, code: str) -> dict[str, Any]:
        """
        Exchange an authorization code for a token payload.

        Returns:
            Zoom's token response (access_token, refresh_token, expires_in, ...)

        Raises:
            AuthenticationError: If the exchange fails or the response lacks a token
        """
        self._require("client_id", "client_secret", "redirect_uri")
        credentials = f"{self.settings.client_id}:{self.settings.client_secret}"
        headers = {
            "Authorization": "Basic " + base64.b64encode(credentials.encode()).decode(),
            "Content-Type": "application/x-www-form-urlencoded",
        }
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.settings.redirect_uri,
        }

        try:
            response = requests.post(
                self.settings.token_uri, headers=headers, data=data, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise AuthenticationError(
                "OAuth token request failed",
                401,
                details=f"Request error: {e}",
            ) from e

        if not 200 <= response.status_code < 300:
            raise AuthenticationError(
                f"Failed to exchange authorization code: {response.text}",
                response.status_code,
            )

        try:
            token_data = response.json()
        except ValueError as e:
            raise AuthenticationError(
                "Invalid OAuth response", response.status_code, details=str(e)
            ) from e

        if not isinstance(token_data, dict) or "access_token" not in token_data:
            raise AuthenticationError(
                "Invalid OAuth token response",
                response.status_code,
                details="Response did not contain required 'access_token' field",
            )
        logger.info("Authorization code exchanged for access token")
        return token_data

    def fetch_profile(self, access_token: str) -> User:
        """Return the user that owns ``access_token``"""
        client = ZoomClient(base_url=self.api_base_url, timeout=self.timeout)
        client.set_token(access_token)
        return client.users().get("me")
