"""
rediscache — Cache Module

Provides the Redis distributed cache, its value encoding and the factories.

Usage:
    from rediscache.cache import RedisCache

    with RedisCache({"connection.host": "localhost"}) as cache:
        cache.store(None, "key", {"a": 1}, 60000)
        cache.retrieve(None, "key")  # '{"a":1}'
"""

from .backends.redis import RedisCache
from .encoding import EncodedValue, ValueKind, classify, decode_value, encode_value
from .factory import (
    DefaultRedisFactory,
    close_all_caches,
    create_cache,
    get_cache,
    list_cache_instances,
    reset_cache_factory,
)
from .interface import CacheInterface, Openable

__all__ = [
    # Factory functions
    "create_cache",
    "get_cache",
    "close_all_caches",
    "list_cache_instances",
    "reset_cache_factory",
    "DefaultRedisFactory",
    # Interfaces
    "CacheInterface",
    "Openable",
    # Implementation
    "RedisCache",
    # Encoding
    "ValueKind",
    "EncodedValue",
    "classify",
    "encode_value",
    "decode_value",
]
