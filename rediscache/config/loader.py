"""
rediscache — Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the process.
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import RedisCacheConfig

logger = logging.getLogger(__name__)

_config_instance: RedisCacheConfig | None = None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Environment variable {name} must be an integer",
            details={"env": name, "value": raw},
        ) from e


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> RedisCacheConfig:
    """
    Load configuration from environment variables and .env file.

    Recognized variables: REDIS_HOST, REDIS_PORT, REDIS_URL, REDIS_DISCOVERY_KEY,
    REDIS_USERNAME, REDIS_PASSWORD, REDIS_CREDENTIAL_STORE_KEY, CACHE_RETRIES,
    CACHE_TIMEOUT_MS, CACHE_MAX_SIZE, LOG_LEVEL.

    A connection section is only produced when at least one of REDIS_HOST,
    REDIS_URL or REDIS_DISCOVERY_KEY is set, so an empty environment yields a
    config that fails open() with NO_CONNECTION.

    Args:
        env_file: Path to .env file (default: .env in working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated RedisCacheConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    env_path = Path(env_file) if env_file else Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    host = os.getenv("REDIS_HOST")
    uri = os.getenv("REDIS_URL")
    discovery_key = os.getenv("REDIS_DISCOVERY_KEY")

    config_dict: dict[str, Any] = {
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "options": {
            "retries": _int_env("CACHE_RETRIES", 3),
            "timeout": _int_env("CACHE_TIMEOUT_MS", 30000),
            "max_size": _int_env("CACHE_MAX_SIZE", 1000),
        },
    }

    if host or uri or discovery_key:
        config_dict["connection"] = {
            "host": host or "localhost",
            "port": _int_env("REDIS_PORT", 6379),
            "uri": uri,
            "discovery_key": discovery_key,
        }

    username = os.getenv("REDIS_USERNAME")
    password = os.getenv("REDIS_PASSWORD")
    store_key = os.getenv("REDIS_CREDENTIAL_STORE_KEY")
    if username or password or store_key:
        config_dict["credential"] = {
            "username": username,
            "password": password,
            "store_key": store_key,
        }

    try:
        _config_instance = RedisCacheConfig(**config_dict)
        logger.info(
            "Configuration loaded successfully",
            extra={"has_connection": _config_instance.connection is not None},
        )
        return _config_instance
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
            exc_info=True,
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables and configuration.",
            details={"validation_errors": e.errors()},
        ) from e


def get_config() -> RedisCacheConfig:
    """
    Get the current configuration instance, loading it on first access.

    Returns:
        Current RedisCacheConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> RedisCacheConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded RedisCacheConfig instance
    """
    return load_config(env_file=env_file, reload=True)
