"""
Tests for the authorization-code OAuth helper
"""

import base64
import urllib.parse
from unittest.mock import Mock, patch

import pytest
import requests

from zoomkit.config import OAuth2Settings
from zoomkit.exceptions import AuthenticationError, ConfigError
from zoomkit.oauth import OAuth2Client


@pytest.fixture
def settings():
    return OAuth2Settings(
        client_id="app_id",
        client_secret="app_secret",
        redirect_uri="http://localhost:8080/callback",
        authorize_uri="https://zoom.us/oauth/authorize",
        token_uri="https://zoom.us/oauth/token",
    )


def test_authorization_url(settings):
    url = OAuth2Client(settings).authorization_url("xyz")

    parsed = urllib.parse.urlparse(url)
    params = urllib.parse.parse_qs(parsed.query)
    assert url.startswith("https://zoom.us/oauth/authorize?")
    assert params == {
        "response_type": ["code"],
        "client_id": ["app_id"],
        "redirect_uri": ["http://localhost:8080/callback"],
        "state": ["xyz"],
    }


def test_authorization_url_requires_settings(settings):
    incomplete = OAuth2Settings(None, None, None, settings.authorize_uri, settings.token_uri)

    with pytest.raises(ConfigError, match="client_id, redirect_uri"):
        OAuth2Client(incomplete).authorization_url("xyz")


@patch("requests.post")
def test_exchange_code(mock_post, settings):
    mock_post.return_value = Mock(
        status_code=200,
        json=lambda: {"access_token": "user_token", "refresh_token": "r", "expires_in": 3599},
    )

    token_data = OAuth2Client(settings).exchange_code("the_code")

    assert token_data["access_token"] == "user_token"
    call = mock_post.call_args
    assert call.args[0] == "https://zoom.us/oauth/token"
    assert call.kwargs["data"] == {
        "grant_type": "authorization_code",
        "code": "the_code",
        "redirect_uri": "http://localhost:8080/callback",
    }
    expected = "Basic " + base64.b64encode(b"app_id:app_secret").decode()
    assert call.kwargs["headers"]["Authorization"] == expected


@patch("requests.post")
def test_exchange_code_rejected(mock_post, settings):
    mock_post.return_value = Mock(status_code=400, text='{"reason":"Invalid authorization code"}')

    with pytest.raises(AuthenticationError) as exc_info:
        OAuth2Client(settings).exchange_code("bad")

    assert exc_info.value.status_code == 400


@patch("requests.post")
def test_exchange_code_network_error(mock_post, settings):
    mock_post.side_effect = requests.exceptions.ConnectionError("down")

    with pytest.raises(AuthenticationError, match="OAuth token request failed"):
        OAuth2Client(settings).exchange_code("code")


@patch("requests.post")
def test_exchange_code_without_token(mock_post, settings):
    mock_post.return_value = Mock(status_code=200, json=lambda: {"error": "nope"})

    with pytest.raises(AuthenticationError, match="Invalid OAuth token response"):
        OAuth2Client(settings).exchange_code("code")


@patch("requests.request")
def test_fetch_profile_uses_bearer_token(mock_request, settings):
    mock_request.return_value = Mock(
        status_code=200,
        content=b"{}",
        json=lambda: {"id": "u1", "email": "u@example.com", "first_name": "U"},
    )

    user = OAuth2Client(settings).fetch_profile("user_token")

    assert user.email == "u@example.com"
    assert mock_request.call_args.kwargs["headers"]["Authorization"] == "Bearer user_token"
    assert mock_request.call_args.args[1].endswith("/users/me")


def test_repr_excludes_secret(settings):
    assert "app_secret" not in repr(OAuth2Client(settings))
