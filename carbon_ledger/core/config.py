"""
Application configuration loaded from TOML files.

Each environment has its own file under ``carbon_ledger/config``.
"""
import logging
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from carbon_ledger.utils.constants import ConfigFile

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

logger = logging.getLogger(__name__)


class Config:
    """Parsed configuration file."""

    def __init__(self, config_file: str, data: dict[str, Any]):
        self.config_file = config_file
        self.data = data

    def section(self, name: str) -> dict[str, Any]:
        """Return a top-level section, or an empty dict if it is absent."""
        return self.data.get(name, {})

    @property
    def jwt_secret(self) -> str:
        return os.environ.get("JWT_SECRET") or self.section("auth").get(
            "jwt_secret", "dev-secret"
        )

    @property
    def jwt_algorithm(self) -> str:
        return self.section("auth").get("jwt_algorithm", "HS256")

    def __repr__(self):
        return f"<Config: {self.config_file}>"


@lru_cache()
def get_config(config_file: str = ConfigFile.DEVELOPMENT) -> Config:
    """
    Load and cache a configuration file.

    Args:
        config_file: Configuration file name (e.g., "production.toml")

    Returns:
        Config instance

    Raises:
        FileNotFoundError: If the file does not exist in the config directory
    """
    path = CONFIG_DIR / config_file
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "rb") as f:
        data = tomllib.load(f)

    logger.debug(f"Loaded configuration from {path}")
    return Config(config_file, data)


def get_config_file_for_environment() -> str:
    """Config file name for the ENVIRONMENT variable (default: development)."""
    env = os.getenv("ENVIRONMENT", "development")
    return f"{env}.toml"


__all__ = ["Config", "ConfigFile", "get_config", "get_config_file_for_environment"]
