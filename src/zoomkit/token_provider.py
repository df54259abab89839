"""
Access token provider with Server-to-Server OAuth refresh and caching
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import requests

from zoomkit.credentials import BearerToken, CachedToken, Credentials, MachineCredential
from zoomkit.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

TOKEN_URL = "https://zoom.us/oauth/token"
# Refresh this many seconds before Zoom's stated expiry
EXPIRY_BUFFER_SECONDS = 60
DEFAULT_EXPIRES_IN = 3600


class TokenProvider:
    """Return a usable bearer token for the configured credentials"""

    def __init__(
        self,
        credentials: Credentials,
        *,
        token_url: str = TOKEN_URL,
        timeout: float = 30,
        clock: Callable[[], float] = time.time,
    ):
        self.credentials = credentials
        self.token_url = token_url
        self.timeout = timeout
        self._clock = clock
        self._cached: CachedToken | None = None

    def __repr__(self) -> str:
        return (
            f"TokenProvider("
            f"mode={self.mode!r}, "
            f"token_url={self.token_url!r}, "
            f"token_cached={self._cached is not None}"
            f")"
        )

    @property
    def mode(self) -> str:
        return "bearer" if isinstance(self.credentials, BearerToken) else "server_to_server"

    @property
    def cached_token(self) -> CachedToken | None:
        return self._cached

    def invalidate(self) -> None:
        """Drop the cached token so the next call performs an exchange"""
        self._cached = None

    def get_token(self) -> str:
        if isinstance(self.credentials, BearerToken):
            return self.credentials.token

        if self._cached is not None and self._cached.is_valid(self._clock()):
            return self._cached.value

        self._cached = self._exchange(self.credentials)
        return self._cached.value

    def _exchange(self, credential: MachineCredential) -> CachedToken:
        """Exchange account credentials for a fresh access token"""
        if not credential.is_complete:
            raise AuthenticationError(
                "Server-to-Server OAuth credentials not configured.",
                401,
                details="account_id, client_id and client_secret are all required",
            )

        headers = {
            "Authorization": credential.basic_auth_header(),
            "Content-Type": "application/x-www-form-urlencoded",
        }
        data = {"grant_type": "account_credentials", "account_id": credential.account_id}

        logger.info("Requesting Server-to-Server OAuth token from %s", self.token_url)
        try:
            response = requests.post(
                self.token_url,
                headers=headers,
                data=data,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise AuthenticationError(
                "Authentication timeout",
                401,
                details=f"Zoom OAuth server did not respond within {self.timeout} seconds",
            ) from e
        except requests.exceptions.RequestException as e:
            raise AuthenticationError(
                "Connection error during authentication",
                401,
                details=f"Could not connect to Zoom OAuth server: {e}",
            ) from e

        if not 200 <= response.status_code < 300:
            raise AuthenticationError(
                f"Failed to obtain Server-to-Server OAuth token: {response.text}",
                response.status_code,
            )

        try:
            token_data = response.json()
        except ValueError as e:
            raise AuthenticationError(
                "Invalid OAuth response",
                response.status_code,
                details=f"Could not parse JSON response from Zoom OAuth server: {e}",
            ) from e

        if not isinstance(token_data, dict) or not token_data.get("access_token"):
            raise AuthenticationError(
                "Invalid OAuth token response",
                response.status_code,
                details="Response did not contain required 'access_token' field",
            )

        expires_in = token_data.get("expires_in")
        if expires_in is None:
            expires_in = DEFAULT_EXPIRES_IN
        try:
            expires_in = int(expires_in)
        except (TypeError, ValueError, OverflowError) as e:
            raise AuthenticationError(
                "Invalid OAuth token response",
                response.status_code,
                details=f"Response contained an invalid 'expires_in' value: {expires_in!r}",
            ) from e
        expires_at = self._clock() + expires_in - EXPIRY_BUFFER_SECONDS
        logger.debug("OAuth token obtained, expires in %ss", expires_in)
        return CachedToken(value=str(token_data["access_token"]), expires_at=expires_at)
