"""
rediscache — Redis Distributed Cache Client

Connection lifecycle with a bounded connect/retry policy, typed value
encoding and millisecond TTLs on top of redis-py.
"""

__version__ = "1.0.0"

from .cache import DefaultRedisFactory, RedisCache, ValueKind, decode_value
from .config import ConfigParams, RedisCacheConfig
from .errors import (
    CacheConnectionError,
    ConfigurationError,
    EncodingError,
    ErrorCode,
    InvalidStateError,
    RedisCacheError,
)
from .refer import Descriptor, References

__all__ = [
    "RedisCache",
    "DefaultRedisFactory",
    "ValueKind",
    "decode_value",
    "ConfigParams",
    "RedisCacheConfig",
    "Descriptor",
    "References",
    "RedisCacheError",
    "ConfigurationError",
    "CacheConnectionError",
    "InvalidStateError",
    "EncodingError",
    "ErrorCode",
]
