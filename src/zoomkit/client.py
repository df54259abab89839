"""
Zoom API client: authenticated request dispatch and error classification
"""

from __future__ import annotations

import logging
import urllib.parse
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import requests

from zoomkit.credentials import BearerToken, Credentials, MachineCredential
from zoomkit.exceptions import AuthenticationError, ConnectionFailureError, classify_error
from zoomkit.pagination import PaginationEnvelope
from zoomkit.token_provider import TOKEN_URL, TokenProvider

if TYPE_CHECKING:
    from zoomkit.config import Config
    from zoomkit.resources import Meetings, Reports, Users, Webinars

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.zoom.us/v2"
DEFAULT_TIMEOUT = 60
BODY_METHODS = ("POST", "PUT", "PATCH")


@dataclass(frozen=True)
class ApiResponse:
    """Parsed body of a successful call plus its pagination envelope"""

    body: Any
    pagination: PaginationEnvelope | None = None


class ZoomClient:
    """Client for the Zoom REST API.

    Authenticates either with a caller-supplied bearer token or with
    Server-to-Server OAuth credentials, which are exchanged for an access
    token on demand and cached in memory until shortly before expiry.
    """

    def __init__(
        self,
        credentials: Credentials | None = None,
        *,
        base_url: str = API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        token_url: str = TOKEN_URL,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token_url = token_url
        self._token_provider: TokenProvider | None = None
        if credentials is not None:
            self._set_credentials(credentials)

    @classmethod
    def from_config(cls, config: Config) -> ZoomClient:
        """Build a client from configuration, preferring S2S credentials"""
        client = cls(
            base_url=config.api_endpoint,
            timeout=config.timeout,
            token_url=config.token_uri,
        )
        s2s = config.server_to_server
        if s2s is not None and s2s.is_complete:
            client._set_credentials(s2s)
        elif config.access_token:
            client.set_token(config.access_token)
        elif s2s is not None:
            # Incomplete S2S settings still select S2S so the first call reports what is missing
            client._set_credentials(s2s)
        return client

    def __repr__(self) -> str:
        """
        String representation that excludes credentials

        Prevents accidental credential exposure in logs, tracebacks, and debugging
        """
        provider = self._token_provider
        return (
            f"ZoomClient("
            f"base_url={self.base_url!r}, "
            f"auth_mode={self.auth_mode!r}, "
            f"token_cached={bool(provider and provider.cached_token)}"
            f")"
        )

    @property
    def auth_mode(self) -> str:
        """One of "bearer", "server_to_server" or "none" """
        return self._token_provider.mode if self._token_provider is not None else "none"

    @property
    def credentials(self) -> Credentials | None:
        return self._token_provider.credentials if self._token_provider is not None else None

    @property
    def token_provider(self) -> TokenProvider | None:
        return self._token_provider

    def _set_credentials(self, credentials: Credentials) -> None:
        # A new provider per credential switch; the old token cache goes with it
        self._token_provider = TokenProvider(credentials, token_url=self.token_url)

    def set_token(self, token: str) -> ZoomClient:
        """Authenticate with a user OAuth access token (replaces S2S credentials)"""
        self._set_credentials(BearerToken(token))
        return self

    def set_server_to_server_auth(
        self, account_id: str, client_id: str, client_secret: str
    ) -> ZoomClient:
        """Authenticate with Server-to-Server OAuth (replaces any bearer token)"""
        self._set_credentials(MachineCredential(account_id, client_id, client_secret))
        return self

    def clear_credentials(self) -> None:
        """
        Forget credentials and any cached token.

        Note: Due to Python's memory management and string immutability,
        this provides best-effort cleanup but cannot guarantee complete
        memory erasure.
        """
        self._token_provider = None

    def meetings(self) -> Meetings:
        from zoomkit.resources import Meetings

        return Meetings(self)

    def users(self) -> Users:
        from zoomkit.resources import Users

        return Users(self)

    def webinars(self) -> Webinars:
        from zoomkit.resources import Webinars

        return Webinars(self)

    def reports(self) -> Reports:
        from zoomkit.resources import Reports

        return Reports(self)

    @staticmethod
    def encode_uuid(uuid: str) -> str:
        """Double URL-encode UUID for past_meetings and report endpoints"""
        return urllib.parse.quote(urllib.parse.quote(uuid, safe=""), safe="")

    @classmethod
    def meeting_path_id(cls, meeting_id: int | str) -> str:
        """Numeric IDs pass through; UUIDs are double-encoded"""
        text = str(meeting_id)
        return text if text.isdigit() else cls.encode_uuid(text)

    def _authorization_header(self) -> str:
        if self._token_provider is None:
            raise AuthenticationError(
                "No authentication method configured. "
                "Use set_token() or set_server_to_server_auth().",
                401,
            )
        return f"Bearer {self._token_provider.get_token()}"

    def _headers(self) -> dict[str, str]:
        from zoomkit import __version__

        return {
            "Authorization": self._authorization_header(),
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": f"zoomkit/{__version__}",
        }

    def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> ApiResponse:
        """
        Make one authenticated API call.

        Args:
            method: HTTP method (case-insensitive)
            path: Endpoint path relative to the API base, e.g. "users/me"
            query: Optional URL query parameters
            body: JSON body for POST/PUT/PATCH (defaults to an empty object)

        Returns:
            ApiResponse with the parsed JSON body and pagination envelope

        Raises:
            AuthenticationError: No credentials, token exchange failed, or 401/403
            NotFoundError: 404
            ValidationError: 400/422
            ZoomAPIError: Any other non-2xx status
            ConnectionFailureError: Network error or timeout
        """
        method = method.upper()
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = self._headers()

        kwargs: dict[str, Any] = {
            "headers": headers,
            "timeout": self.timeout,
        }
        if query:
            kwargs["params"] = dict(query)
        if method in BODY_METHODS:
            kwargs["json"] = body if body is not None else {}

        logger.debug("Zoom API request: %s %s params=%s", method, url, kwargs.get("params"))
        try:
            response = requests.request(method, url, **kwargs)
        except requests.exceptions.Timeout as e:
            raise ConnectionFailureError(
                "Request timed out",
                details=f"Zoom API did not respond within {self.timeout} seconds",
            ) from e
        except requests.exceptions.RequestException as e:
            raise ConnectionFailureError(
                f"Network request failed: {type(e).__name__}",
                details=str(e),
            ) from e

        logger.debug("Zoom API response: HTTP %s", response.status_code)
        data = self._parse_body(response)

        if not 200 <= response.status_code < 300:
            error = classify_error(response.status_code, data)
            logger.debug("Zoom API error %s: %s", response.status_code, error.message)
            raise error.to_exception()

        return ApiResponse(body=data, pagination=PaginationEnvelope.from_body(data))

    @staticmethod
    def _parse_body(response: Any) -> Any:
        """Decode a JSON body; empty or non-JSON bodies yield None"""
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None
