"""
rediscache — Configuration Module

Provides dotted-key parameters plus typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config
from .params import ConfigParams
from .schemas import (
    CacheOptions,
    ConnectionParams,
    CredentialParams,
    LogLevel,
    RedisCacheConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    # Parameters
    "ConfigParams",
    # Main config
    "RedisCacheConfig",
    # Enums
    "LogLevel",
    # Config sections
    "ConnectionParams",
    "CredentialParams",
    "CacheOptions",
]
