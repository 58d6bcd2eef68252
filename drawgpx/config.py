"""
Configuration module with strict environment variable validation.
NO FALLBACKS for server settings - required variables must be explicitly set.

Tunables are centralized in config.yaml - modify there, not in code.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Any

import yaml


class ConfigurationError(Exception):
    """Raised when required configuration is missing."""
    pass


# Load YAML config once at module level
_CONFIG_PATH = Path(__file__).parent / "config.yaml"
_YAML_CONFIG: dict = {}


def _load_yaml_config() -> dict:
    """Load configuration from config.yaml file."""
    global _YAML_CONFIG
    if not _YAML_CONFIG:
        if _CONFIG_PATH.exists():
            with open(_CONFIG_PATH, "r") as f:
                _YAML_CONFIG = yaml.safe_load(f) or {}
        else:
            raise ConfigurationError(f"Configuration file not found: {_CONFIG_PATH}")
    return _YAML_CONFIG


def get_yaml_setting(*keys: str, default: Any = None) -> Any:
    """
    Get a setting from config.yaml using dot notation.

    Example: get_yaml_setting("routing", "chunk_size") -> 20
    """
    config = _load_yaml_config()
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value


def get_required_env(key: str) -> str:
    """Get a required environment variable. Raises if not set."""
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        raise ConfigurationError(
            f"Missing required environment variable: {key}\n"
            f"Please set {key} in your .env file or environment."
        )
    return value.strip()


def get_optional_env(key: str) -> Optional[str]:
    """Get an optional environment variable. Returns None if not set."""
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        return None
    return value.strip()


@dataclass(frozen=True)
class Config:
    """Application configuration - immutable after creation."""

    # Server settings - REQUIRED
    backend_port: int
    backend_host: str

    # CORS settings - REQUIRED
    cors_origins: list[str]

    # Routing engine
    osrm_base_url: str
    osrm_timeout_s: float
    chunk_size: int

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""

        # Required settings
        port_str = get_required_env("BACKEND_PORT")
        try:
            backend_port = int(port_str)
        except ValueError:
            raise ConfigurationError(f"BACKEND_PORT must be an integer, got {port_str!r}")
        backend_host = get_required_env("BACKEND_HOST")

        cors_origins_str = get_required_env("CORS_ORIGINS")
        cors_origins = [origin.strip() for origin in cors_origins_str.split(",")]

        # Optional override, YAML otherwise
        osrm_base_url = get_optional_env("OSRM_BASE_URL") or get_yaml_setting(
            "routing", "base_url"
        )
        if not osrm_base_url:
            raise ConfigurationError(
                "No routing engine configured: set OSRM_BASE_URL or routing.base_url"
            )

        return cls(
            backend_port=backend_port,
            backend_host=backend_host,
            cors_origins=cors_origins,
            osrm_base_url=osrm_base_url.rstrip("/"),
            osrm_timeout_s=float(get_yaml_setting("routing", "timeout_s", default=30.0)),
            chunk_size=int(get_yaml_setting("routing", "chunk_size", default=20)),
        )


def load_config() -> Config:
    """Load and validate configuration."""
    from dotenv import load_dotenv

    # Load .env file if present
    load_dotenv()

    return Config.from_env()
