"""
Configuration management

Centralized settings using Pydantic BaseSettings for type-safe configuration
with environment variable support. Every field can be overridden with a
``CLUSTER_`` prefixed environment variable or from a ``.env`` file at the
project root.
"""

import logging
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .paths import get_default_home, get_package_root

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Bootstrap settings with environment variable support

    Settings can be overridden via environment variables:
    - CLUSTER_HOME=/opt/cluster-server
    - CLUSTER_STANDALONE=true
    - CLUSTER_FUNCTION_MODE=config
    - CLUSTER_LOCAL_IP=10.0.0.1
    """

    # Deployment
    home: Path = get_default_home()
    standalone: bool = False
    function_mode: str | None = None

    # Local address resolution
    local_ip: str | None = None
    prefer_hostname: bool = False

    # Startup reporting
    server_name: str = "Server"
    heartbeat_interval: float = 1.0

    # Logging
    log_level: str = "INFO"
    log_file_name: str = "server.log"

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8848

    model_config = SettingsConfigDict(
        env_prefix="CLUSTER_",
        env_file=str(get_package_root() / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("heartbeat_interval")
    @classmethod
    def _check_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("heartbeat_interval must be positive")
        return value

    @field_validator("home")
    @classmethod
    def _expand_home(cls, value: Path) -> Path:
        return Path(value).expanduser()


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get bootstrap settings (singleton)

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValueError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e
        logger.debug(f"Loaded settings (home={_settings.home}, standalone={_settings.standalone})")
    return _settings


def reset_settings() -> None:
    """Drop the cached settings instance (for testing)"""
    global _settings
    _settings = None
