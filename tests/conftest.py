import logging

import pytest

from zoomkit.logger import RedactingFilter

ZOOM_ENV_VARS = (
    "ZOOM_API_ENDPOINT",
    "ZOOM_TIMEOUT",
    "ZOOM_CLIENT_ID",
    "ZOOM_CLIENT_SECRET",
    "ZOOM_REDIRECT_URI",
    "ZOOM_AUTHORIZE_URI",
    "ZOOM_TOKEN_URI",
    "ZOOM_ACCOUNT_ID",
    "ZOOM_ACCESS_TOKEN",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the developer's environment and config directory out of tests."""
    for key in ZOOM_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ZOOMKIT_NO_DOTENV", "1")
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setattr("zoomkit.config.user_config_dir", lambda appname: str(config_dir))
    return config_dir


@pytest.fixture
def s2s_env(monkeypatch):
    monkeypatch.setenv("ZOOM_ACCOUNT_ID", "acc")
    monkeypatch.setenv("ZOOM_CLIENT_ID", "cli")
    monkeypatch.setenv("ZOOM_CLIENT_SECRET", "sec")


@pytest.fixture(autouse=True)
def restore_root_logging():
    """setup_logging replaces root handlers; CliRunner streams close after each invoke."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if any(isinstance(f, RedactingFilter) for f in handler.filters):
            root.removeHandler(handler)
    root.setLevel(level)
