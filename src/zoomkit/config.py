"""
Configuration management for zoomkit
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from platformdirs import user_config_dir

from zoomkit.credentials import MachineCredential
from zoomkit.exceptions import ConfigError

# Check YAML availability at module level
try:
    from importlib.util import find_spec

    YAML_AVAILABLE = find_spec("yaml") is not None
except ImportError:
    YAML_AVAILABLE = False


@dataclass(frozen=True)
class OAuth2Settings:
    """User OAuth (authorization code) app settings"""

    client_id: str | None
    client_secret: str | None
    redirect_uri: str | None
    authorize_uri: str
    token_uri: str

    def __repr__(self) -> str:
        return (
            f"OAuth2Settings("
            f"client_id_set={bool(self.client_id)}, "
            f"client_secret_set={bool(self.client_secret)}, "
            f"redirect_uri={self.redirect_uri!r}, "
            f"authorize_uri={self.authorize_uri!r}, "
            f"token_uri={self.token_uri!r}"
            f")"
        )


class Config:
    """Configuration loader and validator with multi-source support"""

    # Schema: section -> key -> (environment variable, default)
    SCHEMA: dict[str, dict[str, tuple[str, Any]]] = {
        "api": {
            "endpoint": ("ZOOM_API_ENDPOINT", "https://api.zoom.us/v2"),
            "timeout": ("ZOOM_TIMEOUT", 60),
            "access_token": ("ZOOM_ACCESS_TOKEN", None),
        },
        "oauth2": {
            "client_id": ("ZOOM_CLIENT_ID", None),
            "client_secret": ("ZOOM_CLIENT_SECRET", None),
            "redirect_uri": ("ZOOM_REDIRECT_URI", None),
            "authorize_uri": ("ZOOM_AUTHORIZE_URI", "https://zoom.us/oauth/authorize"),
            "token_uri": ("ZOOM_TOKEN_URI", "https://zoom.us/oauth/token"),
        },
        "server_to_server": {
            "account_id": ("ZOOM_ACCOUNT_ID", None),
            "client_id": ("ZOOM_CLIENT_ID", None),
            "client_secret": ("ZOOM_CLIENT_SECRET", None),
        },
    }
    TOP_LEVEL_FIELDS = {"log_level": ("LOG_LEVEL", "WARNING")}
    VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    def __init__(self, env_file: str | None = None):
        # Configuration priority:
        # 1. Explicit config file (JSON/YAML), then environment variables
        # 2. Without an explicit file: environment variables, then the
        #    default config file in the user config directory
        # 3. Defaults

        self.config_dir = Path(user_config_dir("zoomkit"))
        config_data: dict[str, Any] = {}

        if env_file is not None:
            config_data = self._load_config_file(env_file)
        else:
            default_config = self._find_default_config()
            if default_config:
                config_data = self._load_config_file(str(default_config))

        prefer_env_over_file = env_file is None

        def _resolve(section: str | None, key: str, env_key: str, default: Any) -> Any:
            source = config_data.get(section, {}) if section else config_data
            file_value = source.get(key)
            env_value = os.getenv(env_key)
            if prefer_env_over_file:
                value = env_value if env_value is not None else file_value
            else:
                value = file_value if file_value is not None else env_value
            return default if value is None or value == "" else value

        values: dict[str, dict[str, Any]] = {}
        for section, keys in self.SCHEMA.items():
            values[section] = {
                key: _resolve(section, key, env_key, default)
                for key, (env_key, default) in keys.items()
            }

        api = values["api"]
        self.api_endpoint = str(api["endpoint"]).rstrip("/")
        self.timeout = self._parse_timeout(api["timeout"])
        # Credentials stay private to prevent accidental exposure in logs/tracebacks
        self._access_token: str | None = api["access_token"]

        oauth2 = values["oauth2"]
        self._oauth2 = OAuth2Settings(
            client_id=oauth2["client_id"],
            client_secret=oauth2["client_secret"],
            redirect_uri=oauth2["redirect_uri"],
            authorize_uri=str(oauth2["authorize_uri"]),
            token_uri=str(oauth2["token_uri"]),
        )

        s2s = values["server_to_server"]
        self._account_id: str | None = s2s["account_id"]
        self._client_id: str | None = s2s["client_id"]
        self._client_secret: str | None = s2s["client_secret"]

        env_key, default = self.TOP_LEVEL_FIELDS["log_level"]
        self.log_level = str(_resolve(None, "log_level", env_key, default)).upper()

    @staticmethod
    def _parse_timeout(raw: Any) -> float:
        try:
            timeout = float(raw)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid timeout value: {raw!r}", details="Expected seconds") from e
        if timeout <= 0:
            raise ConfigError(f"Invalid timeout value: {raw!r}", details="Must be positive")
        return timeout

    @property
    def access_token(self) -> str | None:
        """Bearer access token (read-only property)"""
        return self._access_token

    @property
    def oauth2(self) -> OAuth2Settings:
        return self._oauth2

    @property
    def token_uri(self) -> str:
        return self._oauth2.token_uri

    @property
    def server_to_server(self) -> MachineCredential | None:
        """S2S credentials, or None when no account ID is configured"""
        if not self._account_id:
            return None
        return MachineCredential(
            account_id=str(self._account_id),
            client_id=str(self._client_id or ""),
            client_secret=str(self._client_secret or ""),
        )

    def __repr__(self) -> str:
        """
        String representation that excludes credentials

        Prevents accidental credential exposure in logs, tracebacks, and debugging
        """
        return (
            f"Config("
            f"api_endpoint={self.api_endpoint!r}, "
            f"timeout={self.timeout!r}, "
            f"log_level={self.log_level!r}, "
            f"auth_mode={self.get_auth_mode()!r}"
            f")"
        )

    def clear_credentials(self) -> None:
        """
        Clear sensitive credentials from memory.

        Note: Due to Python's memory management and string immutability,
        this provides best-effort cleanup but cannot guarantee complete
        memory erasure. Credentials may remain in memory until garbage
        collection or process termination.
        """
        self._access_token = None
        self._account_id = None
        self._client_id = None
        self._client_secret = None

    def as_dict(self) -> dict[str, Any]:
        """Nested configuration in the api / oauth2 / server_to_server layout"""
        return {
            "api": {"endpoint": self.api_endpoint, "timeout": self.timeout},
            "oauth2": {
                "client_id": self._oauth2.client_id,
                "client_secret": self._oauth2.client_secret,
                "redirect_uri": self._oauth2.redirect_uri,
                "authorize_uri": self._oauth2.authorize_uri,
                "token_uri": self._oauth2.token_uri,
            },
            "server_to_server": {
                "account_id": self._account_id,
                "client_id": self._client_id,
                "client_secret": self._client_secret,
            },
        }

    @staticmethod
    def _is_null_device(path_str: str) -> bool:
        """Return True when the provided path represents the OS null device."""
        normalized = path_str.strip().lower().replace("\\", "/")
        null_candidates = {"/dev/null", "nul", "nul:", os.devnull.lower()}
        return normalized in null_candidates

    def _load_config_file(self, config_path: str) -> dict[str, Any]:
        """
        Load configuration from JSON, YAML or .env file

        Args:
            config_path: Path to config file (.json, .yaml/.yml, anything else is .env)

        Returns:
            Configuration dictionary (empty for .env files, which populate os.environ)

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        if self._is_null_device(config_path):
            # Allow callers/tests to opt-out from config file loading
            return {}

        path = Path(config_path)

        if not path.exists():
            raise ConfigError(
                f"Config file '{config_path}' does not exist. "
                "Provide an existing JSON/YAML/.env file or remove the --config flag."
            )

        if path.suffix.lower() in [".yaml", ".yml"] and not YAML_AVAILABLE:
            raise ConfigError(
                f"Cannot load YAML config file '{path.name}': PyYAML not installed. "
                "Install with: pip install pyyaml"
            )

        try:
            with open(path, encoding="utf-8") as f:
                if path.suffix.lower() == ".json":
                    data = json.load(f)
                elif path.suffix.lower() in [".yaml", ".yml"]:
                    data = self._load_yaml(f)
                else:
                    load_dotenv(config_path, override=False)
                    return {}
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load config file {config_path}: {e}") from e

        self._validate_schema(data, path)
        return dict(data)

    def _load_yaml(self, file_obj: Any) -> dict[str, Any]:
        """Load YAML configuration"""
        import yaml

        try:
            result = yaml.safe_load(file_obj)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e
        return result if result else {}

    def _find_default_config(self) -> Path | None:
        """Locate the default config file in the user config directory."""
        for filename in ("config.json", "config.yaml", "config.yml"):
            candidate = self.config_dir / filename
            if candidate.exists():
                return candidate
        return None

    def _validate_schema(self, data: Any, path: Path) -> None:
        """
        Validate configuration schema

        Raises:
            ConfigError: If schema validation fails
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a JSON/YAML object")

        known_keys = set(self.SCHEMA) | set(self.TOP_LEVEL_FIELDS)
        unknown_keys = set(data.keys()) - known_keys
        if unknown_keys:
            raise ConfigError(
                f"Unknown keys in config file {path}: {', '.join(sorted(unknown_keys))}\n"
                f"Valid keys: {', '.join(sorted(known_keys))}"
            )

        for section, keys in self.SCHEMA.items():
            if section not in data:
                continue
            section_data = data[section]
            if not isinstance(section_data, dict):
                raise ConfigError(f"'{section}' must be an object in {path}")
            unknown = set(section_data) - set(keys)
            if unknown:
                raise ConfigError(
                    f"Unknown keys in '{section}' section of {path}: "
                    f"{', '.join(sorted(unknown))}\n"
                    f"Valid keys: {', '.join(sorted(keys))}"
                )
            for key, value in section_data.items():
                if key == "timeout":
                    if isinstance(value, bool) or not isinstance(value, int | float):
                        raise ConfigError(f"{section}.timeout must be a number in {path}")
                elif value is not None and not isinstance(value, str):
                    raise ConfigError(f"{section}.{key} must be a string in {path}")

        if "log_level" in data:
            if str(data["log_level"]).upper() not in self.VALID_LOG_LEVELS:
                raise ConfigError(f"log_level must be one of {self.VALID_LOG_LEVELS} in {path}")

    def validate(self) -> None:
        """Validate that some authentication method is configured"""
        if self._access_token:
            return

        missing = []
        if not self._account_id:
            missing.append("ZOOM_ACCOUNT_ID")
        if not self._client_id:
            missing.append("ZOOM_CLIENT_ID")
        if not self._client_secret:
            missing.append("ZOOM_CLIENT_SECRET")

        if missing:
            raise ConfigError(
                f"Missing required environment variables: {', '.join(missing)}\n"
                "Set Server-to-Server credentials or ZOOM_ACCESS_TOKEN in .env or environment"
            )

    def is_valid(self) -> bool:
        """Check if configuration is valid"""
        try:
            self.validate()
            return True
        except ConfigError:
            return False

    def get_auth_mode(self) -> Literal["s2s", "bearer", "none"]:
        """Return the active authentication mode based on available credentials."""
        if self._account_id and self._client_id and self._client_secret:
            return "s2s"
        if self._access_token:
            return "bearer"
        return "none"
