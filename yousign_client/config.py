"""
Configuration for the Yousign client.

Two layers live here:
    - SessionConfig: the immutable, validated settings every request uses
    - ConfigManager: the JSON file store behind the CLI (~/.yousign/config.json)
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.yousign.com"
API_BASE_URL_TEST = "https://staging-api.yousign.com"

API_KEY_MIN_LENGTH = 8

DEFAULT_CONFIG_DIR = Path.home() / ".yousign"
CONFIG_FILE_NAME = "config.json"


def _check_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"The base URL '{url}' is an invalid url.")
    return url


@dataclass(frozen=True)
class SessionConfig:
    """
    Validated session settings.

    The API key must be a string of at least 8 characters. The base URL is
    not configurable: is_testing selects the staging host, otherwise the
    production host is used.

    Usage:
        session = SessionConfig.from_dict({"api_key": "...", "is_testing": True})
        session.base_url        # "https://staging-api.yousign.com"
        session.default_headers # {"Authorization": "Bearer ...", ...}
    """

    api_key: str
    is_testing: bool = False
    log_file: Optional[str] = None

    def __post_init__(self):
        if self.api_key is None:
            raise ConfigurationError("The config's 'api_key' element is required.")
        if not isinstance(self.api_key, str):
            raise ConfigurationError(
                "The config's 'api_key' element has an invalid type (string expected)."
            )
        if len(self.api_key) < API_KEY_MIN_LENGTH:
            raise ConfigurationError(
                "The config's 'api_key' element has not enough characters (minimum 8)."
            )
        if not isinstance(self.is_testing, bool):
            raise ConfigurationError(
                "The config's 'is_testing' element has an invalid type (boolean expected)."
            )
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ConfigurationError(
                "The config's 'log_file' element has an invalid type (string expected)."
            )
        _check_url(self.base_url)

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "SessionConfig":
        """
        Build a session from a configuration mapping.

        Args:
            config: Mapping with 'api_key' and optional 'is_testing', 'log_file'

        Raises:
            ConfigurationError: If a key is missing or malformed
        """
        if not isinstance(config, Mapping):
            raise ConfigurationError("The config has an invalid type (mapping expected).")
        if config.get("api_key") is None:
            raise ConfigurationError("The config's 'api_key' element is required.")

        is_testing = config.get("is_testing")
        return cls(
            api_key=config["api_key"],
            is_testing=False if is_testing is None else is_testing,
            log_file=config.get("log_file"),
        )

    @property
    def base_url(self) -> str:
        """Get the API host selected by is_testing."""
        return API_BASE_URL_TEST if self.is_testing else API_BASE_URL

    @property
    def default_headers(self) -> Dict[str, str]:
        """Headers sent with every request. A fresh dict on each access."""
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }


@dataclass
class StoredConfig:
    """Settings persisted by the CLI."""

    api_key: str = ""
    is_testing: bool = False
    log_file: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def is_configured(self) -> bool:
        """Check if an API key is available."""
        return bool(self.api_key)

    def to_session(self) -> SessionConfig:
        """
        Build the validated session for this configuration.

        Raises:
            ConfigurationError: If the stored values are invalid
        """
        return SessionConfig.from_dict({
            "api_key": self.api_key or None,
            "is_testing": self.is_testing,
            "log_file": self.log_file or None,
        })

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra")
        data.update(extra)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredConfig":
        known = {"api_key", "is_testing", "log_file"}
        return cls(
            api_key=data.get("api_key", "") or "",
            is_testing=bool(data.get("is_testing", False)),
            log_file=data.get("log_file", "") or "",
            extra={k: v for k, v in data.items() if k not in known},
        )


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigManager:
    """
    Manages the CLI configuration file.

    Values from the environment (YOUSIGN_API_KEY, YOUSIGN_IS_TESTING) take
    precedence over the file but are never written back to it.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize the config manager.

        Args:
            config_dir: Custom configuration directory
        """
        env_dir = os.environ.get("YOUSIGN_CONFIG_DIR")
        self.config_dir = Path(config_dir or env_dir or DEFAULT_CONFIG_DIR)
        self._config: Optional[StoredConfig] = None

    def get_config_path(self) -> Path:
        """Get the configuration file path."""
        return self.config_dir / CONFIG_FILE_NAME

    def load(self) -> StoredConfig:
        """Load configuration from disk, ignoring a corrupt file."""
        path = self.get_config_path()
        data: Dict[str, Any] = {}

        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                logger.warning(f"Could not read config file {path}: {e}")
                data = {}

        return StoredConfig.from_dict(data)

    def get(self) -> StoredConfig:
        """Get the effective configuration (file plus environment overrides)."""
        if self._config is None:
            self._config = self.load()

        config = StoredConfig.from_dict(self._config.to_dict())

        env_key = os.environ.get("YOUSIGN_API_KEY")
        if env_key:
            config.api_key = env_key
        env_testing = os.environ.get("YOUSIGN_IS_TESTING")
        if env_testing is not None:
            config.is_testing = _parse_bool(env_testing)

        return config

    def save(self, config: StoredConfig) -> None:
        """Write configuration to disk with owner-only permissions."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        path = self.get_config_path()

        with open(path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)

        try:
            os.chmod(path, 0o600)
        except OSError:
            logger.debug(f"Could not restrict permissions on {path}")

        self._config = config

    def update(self, **kwargs: Any) -> StoredConfig:
        """Update stored values and save."""
        if self._config is None:
            self._config = self.load()

        config = StoredConfig.from_dict(self._config.to_dict())
        for key, value in kwargs.items():
            if key in ("api_key", "is_testing", "log_file"):
                setattr(config, key, value)
            else:
                config.extra[key] = value

        self.save(config)
        return config

    def clear(self) -> None:
        """Delete the configuration file."""
        path = self.get_config_path()
        if path.exists():
            path.unlink()
        self._config = StoredConfig()


_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Get the config manager, creating it on first use or for a new directory."""
    global _config_manager
    if _config_manager is None or config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    return _config_manager
