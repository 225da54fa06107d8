"""Client configuration loader with Pydantic validation and env var expansion."""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from .settings import (
    ARXIV_BASE_URL,
    ARXIV_MAX_RETRIES,
    ARXIV_RATE_LIMIT_SECONDS,
    ARXIV_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("arxiv_query.yaml")


class ClientConfig(BaseModel):
    """Configuration for ArxivClient."""

    base_url: str = ARXIV_BASE_URL
    interval: float = Field(ARXIV_RATE_LIMIT_SECONDS, ge=0)  # Seconds between requests
    n_retries: int = Field(ARXIV_MAX_RETRIES, ge=1)  # Total attempts, not extra ones
    timeout: float = Field(ARXIV_TIMEOUT_SECONDS, gt=0)
    user_agent: str | None = None


class ConfigFile(BaseModel):
    """Root configuration file structure."""

    profiles: dict[str, ClientConfig]


def expand_env_vars(value: str) -> str:
    """Expand ${VAR} references in a string with environment variables.

    Unknown variables are left as-is.
    """
    if not isinstance(value, str):
        return value

    pattern = r"\$\{([^}]+)\}"

    def replacer(match):
        var_name = match.group(1)
        return os.environ.get(var_name, match.group(0))

    return re.sub(pattern, replacer, value)


def expand_env_vars_recursive(data):
    """Recursively expand env vars in nested dict/list structures."""
    if isinstance(data, dict):
        return {k: expand_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def load_config_from_yaml(config_path: Path, profile_name: str) -> ClientConfig:
    """Load a client profile from a YAML file.

    Args:
        config_path: Path to config YAML file
        profile_name: Name of profile to load

    Returns:
        ClientConfig for the requested profile

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config is invalid
        KeyError: If profile doesn't exist
    """
    with open(config_path) as f:
        raw_data = yaml.safe_load(f) or {}

    expanded_data = expand_env_vars_recursive(raw_data)
    config_file = ConfigFile(**expanded_data)

    if profile_name not in config_file.profiles:
        available = ", ".join(config_file.profiles.keys())
        raise KeyError(
            f"Profile '{profile_name}' not found. Available profiles: {available}"
        )

    return config_file.profiles[profile_name]


def load_config_from_env() -> ClientConfig:
    """Build the client configuration from environment-driven settings."""
    return ClientConfig()


def load_config(
    profile: str | None = None,
    config_path: Path | None = None,
) -> ClientConfig:
    """Load configuration from a YAML file or environment variables.

    Args:
        profile: Profile name to load. If None, uses ARXIV_PROFILE env var
                or "default".
        config_path: Path to config file. If None, uses ARXIV_CONFIG env var
                or ./arxiv_query.yaml.

    Returns:
        ClientConfig

    Raises:
        ValidationError: If the configuration file is invalid
        KeyError: If the requested profile doesn't exist
    """
    if profile is None:
        profile = os.environ.get("ARXIV_PROFILE", "default")

    if config_path is None:
        config_path = Path(os.environ.get("ARXIV_CONFIG", DEFAULT_CONFIG_PATH))

    if config_path.exists():
        logger.debug(f"Loading client profile '{profile}' from {config_path}")
        return load_config_from_yaml(config_path, profile)

    logger.debug(f"Config file {config_path} not found, using environment variables")
    return load_config_from_env()
