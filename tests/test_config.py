"""
Unit tests for config module
"""

import json
import os
from unittest.mock import patch

import pytest

import zoomkit.config
from zoomkit.config import Config, ConfigError
from zoomkit.credentials import MachineCredential


def test_config_loads_from_env(s2s_env):
    """Test that config loads from environment variables"""
    config = Config()

    assert config.server_to_server == MachineCredential("acc", "cli", "sec")
    assert config.oauth2.client_id == "cli"


def test_config_validation_success(s2s_env):
    config = Config()
    config.validate()  # Should not raise


def test_config_validation_accepts_access_token(monkeypatch):
    monkeypatch.setenv("ZOOM_ACCESS_TOKEN", "token")
    Config(env_file=os.devnull).validate()


def test_config_validation_fails_missing_vars(monkeypatch):
    """Test that validation fails with missing required vars"""
    monkeypatch.setenv("ZOOM_ACCOUNT_ID", "acc")

    config = Config(env_file=os.devnull)
    with pytest.raises(ConfigError) as exc_info:
        config.validate()

    assert "Missing required environment variables" in str(exc_info.value)
    assert "ZOOM_CLIENT_ID" in str(exc_info.value)
    assert "ZOOM_ACCOUNT_ID" not in str(exc_info.value)


def test_config_defaults():
    """Test that default values are set correctly"""
    config = Config()

    assert config.api_endpoint == "https://api.zoom.us/v2"
    assert config.timeout == 60.0
    assert config.log_level == "WARNING"
    assert config.token_uri == "https://zoom.us/oauth/token"
    assert config.oauth2.authorize_uri == "https://zoom.us/oauth/authorize"
    assert config.server_to_server is None
    assert config.access_token is None


def test_config_as_dict_layout(s2s_env, monkeypatch):
    monkeypatch.setenv("ZOOM_REDIRECT_URI", "http://localhost/callback")

    data = Config().as_dict()

    assert set(data) == {"api", "oauth2", "server_to_server"}
    assert data["api"] == {"endpoint": "https://api.zoom.us/v2", "timeout": 60.0}
    assert data["oauth2"]["redirect_uri"] == "http://localhost/callback"
    assert data["server_to_server"] == {
        "account_id": "acc",
        "client_id": "cli",
        "client_secret": "sec",
    }


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("ZOOM_TIMEOUT", "soon")
    with pytest.raises(ConfigError, match="Invalid timeout"):
        Config()


def test_non_positive_timeout(monkeypatch):
    monkeypatch.setenv("ZOOM_TIMEOUT", "0")
    with pytest.raises(ConfigError, match="Invalid timeout"):
        Config()


def test_missing_config_file_raises_error(tmp_path):
    """Explicit config path must exist instead of silently loading .env"""
    missing = tmp_path / "missing.json"
    with pytest.raises(ConfigError) as exc_info:
        Config(env_file=str(missing))
    assert "does not exist" in str(exc_info.value)


def test_config_is_valid(monkeypatch):
    config = Config(env_file=os.devnull)
    assert not config.is_valid()

    monkeypatch.setenv("ZOOM_ACCOUNT_ID", "test_account")
    monkeypatch.setenv("ZOOM_CLIENT_ID", "test_client")
    monkeypatch.setenv("ZOOM_CLIENT_SECRET", "test_secret")

    config = Config(env_file=os.devnull)
    assert config.is_valid()


def test_config_repr_excludes_credentials(monkeypatch):
    """Test that __repr__ does not expose credentials"""
    monkeypatch.setenv("ZOOM_ACCOUNT_ID", "secret_account_123")
    monkeypatch.setenv("ZOOM_CLIENT_ID", "secret_client_456")
    monkeypatch.setenv("ZOOM_CLIENT_SECRET", "very_secret_password_789")
    monkeypatch.setenv("ZOOM_ACCESS_TOKEN", "bearer_token_000")

    repr_str = repr(Config())

    assert "secret_account_123" not in repr_str
    assert "secret_client_456" not in repr_str
    assert "very_secret_password_789" not in repr_str
    assert "bearer_token_000" not in repr_str
    assert "api_endpoint" in repr_str
    assert "auth_mode='s2s'" in repr_str


def test_oauth2_settings_repr_excludes_secret(monkeypatch):
    monkeypatch.setenv("ZOOM_CLIENT_SECRET", "very_secret")
    assert "very_secret" not in repr(Config().oauth2)


def test_clear_credentials(s2s_env, monkeypatch):
    monkeypatch.setenv("ZOOM_ACCESS_TOKEN", "token")
    config = Config()

    config.clear_credentials()

    assert config.access_token is None
    assert config.server_to_server is None
    assert config.get_auth_mode() == "none"


def test_explicit_json_file(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(
        json.dumps(
            {
                "api": {"endpoint": "https://example.test/v2", "timeout": 15},
                "server_to_server": {
                    "account_id": "file_account",
                    "client_id": "file_client",
                    "client_secret": "file_secret",
                },
                "log_level": "debug",
            }
        )
    )

    config = Config(env_file=str(config_file))

    assert config.api_endpoint == "https://example.test/v2"
    assert config.timeout == 15.0
    assert config.log_level == "DEBUG"
    assert config.server_to_server.account_id == "file_account"


def test_explicit_file_wins_over_env(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"server_to_server": {"account_id": "file_account"}}))
    monkeypatch.setenv("ZOOM_ACCOUNT_ID", "env_account")
    monkeypatch.setenv("ZOOM_CLIENT_ID", "env_client")

    config = Config(env_file=str(config_file))

    assert config.server_to_server.account_id == "file_account"
    # Keys absent from the file still fall back to the environment
    assert config.server_to_server.client_id == "env_client"


def test_dotenv_file(tmp_path):
    env_file = tmp_path / "zoom.env"
    env_file.write_text("ZOOM_ACCESS_TOKEN=dotenv_token\n")

    # load_dotenv writes to os.environ
    with patch.dict(os.environ):
        config = Config(env_file=str(env_file))

    assert config.access_token == "dotenv_token"
    assert config.get_auth_mode() == "bearer"


def test_unknown_top_level_key(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"zoom_account_id": "legacy"}))

    with pytest.raises(ConfigError, match="Unknown keys"):
        Config(env_file=str(config_file))


def test_unknown_section_key(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"api": {"endpiont": "typo"}}))

    with pytest.raises(ConfigError, match="Unknown keys in 'api' section"):
        Config(env_file=str(config_file))


def test_wrong_value_types(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"api": {"timeout": "60"}}))
    with pytest.raises(ConfigError, match="timeout must be a number"):
        Config(env_file=str(config_file))

    config_file.write_text(json.dumps({"oauth2": {"client_id": 123}}))
    with pytest.raises(ConfigError, match="must be a string"):
        Config(env_file=str(config_file))


def test_invalid_json(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json")

    with pytest.raises(ConfigError, match="Invalid JSON"):
        Config(env_file=str(config_file))


def test_yaml_dependency_check_yaml_not_available(tmp_path, monkeypatch):
    """YAML file loading fails with a helpful message when PyYAML is missing"""
    yaml_file = tmp_path / "config.yaml"
    yaml_file.write_text("server_to_server:\n  account_id: test\n")
    monkeypatch.setattr(zoomkit.config, "YAML_AVAILABLE", False)

    with pytest.raises(ConfigError) as exc_info:
        Config(env_file=str(yaml_file))

    assert "PyYAML not installed" in str(exc_info.value)
    assert "pip install pyyaml" in str(exc_info.value)
    assert yaml_file.name in str(exc_info.value)


def test_json_works_without_yaml(tmp_path, monkeypatch):
    json_file = tmp_path / "config.json"
    json_file.write_text(json.dumps({"api": {"access_token": "file_token"}}))
    monkeypatch.setattr(zoomkit.config, "YAML_AVAILABLE", False)

    assert Config(env_file=str(json_file)).access_token == "file_token"


def test_config_discovers_user_config_json(isolated_env):
    """Config should load credentials from default user config directory."""
    (isolated_env / "config.json").write_text(
        json.dumps(
            {
                "server_to_server": {
                    "account_id": "file_account",
                    "client_id": "file_client",
                    "client_secret": "file_secret",
                }
            }
        )
    )

    cfg = Config()

    assert cfg.server_to_server == MachineCredential("file_account", "file_client", "file_secret")


def test_env_vars_override_user_config(isolated_env, s2s_env):
    """Environment variables should override values from user config file."""
    (isolated_env / "config.json").write_text(
        json.dumps({"server_to_server": {"account_id": "file_account"}})
    )

    cfg = Config()

    assert cfg.server_to_server.account_id == "acc"


def test_config_discovers_user_config_yaml(isolated_env):
    pytest.importorskip("yaml")
    (isolated_env / "config.yaml").write_text(
        "server_to_server:\n"
        "  account_id: yaml_account\n"
        "  client_id: yaml_client\n"
        "  client_secret: yaml_secret\n"
    )

    cfg = Config()

    assert cfg.server_to_server == MachineCredential("yaml_account", "yaml_client", "yaml_secret")


def test_explicit_config_overrides_user_config(isolated_env, tmp_path):
    """Explicit --config path should take precedence over discovered config."""
    (isolated_env / "config.json").write_text(
        json.dumps({"server_to_server": {"account_id": "default_account"}})
    )
    explicit_file = tmp_path / "explicit.json"
    explicit_file.write_text(json.dumps({"server_to_server": {"account_id": "explicit_account"}}))

    cfg = Config(env_file=str(explicit_file))

    assert cfg.server_to_server.account_id == "explicit_account"


def test_get_auth_mode(monkeypatch):
    """get_auth_mode should reflect configured credentials."""
    assert Config(env_file=os.devnull).get_auth_mode() == "none"

    monkeypatch.setenv("ZOOM_ACCESS_TOKEN", "token")
    assert Config(env_file=os.devnull).get_auth_mode() == "bearer"

    # S2S credentials take precedence
    monkeypatch.setenv("ZOOM_ACCOUNT_ID", "acct")
    monkeypatch.setenv("ZOOM_CLIENT_ID", "client")
    monkeypatch.setenv("ZOOM_CLIENT_SECRET", "secret")
    assert Config(env_file=os.devnull).get_auth_mode() == "s2s"
