"""
Configuration management for rural.

Defaults come from environment variables; command-line options override
them. There is no configuration file.
"""

import os
from dataclasses import dataclass, field

from rural import __version__
from rural.errors import ArgumentError


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


def _env_float(name: str) -> float | None:
    value = os.getenv(name)
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise ArgumentError(f"{name} must be a number of seconds, got {value!r}") from None


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_log_level(name: str, default: str) -> str:
    value = os.getenv(name) or default
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ArgumentError(f"{name} must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
    return level


@dataclass
class ClientConfig:
    """Transport, output and logging settings."""

    # Transport
    timeout: float | None = None  # seconds, None waits forever
    verify_ssl: bool = True
    user_agent: str = field(default_factory=lambda: f"rural/{__version__}")

    # Output
    color: bool = True

    # Logging
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from environment variables."""
        return cls(
            timeout=_env_float("RURAL_TIMEOUT"),
            verify_ssl=_env_flag("RURAL_VERIFY_SSL", True),
            color=not (os.getenv("NO_COLOR") or _env_flag("RURAL_NO_COLOR", False)),
            log_level=_env_log_level("RURAL_LOG_LEVEL", "WARNING"),
        )


# Global config instance
_config: ClientConfig | None = None


def get_config() -> ClientConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ClientConfig.from_env()
    return _config


def set_config(config: ClientConfig | None) -> None:
    """Set the global configuration instance. None reloads from the environment."""
    global _config
    _config = config
