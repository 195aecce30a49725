"""
rediscache — Cache Backends

Exports available cache backend implementations.
"""

from .redis import RedisCache

__all__ = [
    "RedisCache",
]
