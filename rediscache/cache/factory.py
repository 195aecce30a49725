"""
rediscache — Cache Factory

Two ways to obtain cache components:

- create_cache()/get_cache(): named instances built from a RedisCacheConfig
  (the environment-loaded config by default). Instances are configured but
  not opened; call open() before use and close_all_caches() on shutdown.
- DefaultRedisFactory: creates components by descriptor, for containers
  that wire components from configuration.

Examples:
    from rediscache.cache.factory import create_cache

    cache = create_cache()
    cache.open("startup")

    factory = DefaultRedisFactory()
    cache = factory.create(Descriptor("pip-services", "cache", "redis", "default", "1.0"))
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..config import RedisCacheConfig, get_config
from ..errors import ConfigurationError, ErrorCode
from ..observability.logging import setup_logging
from ..refer import Descriptor
from .backends.redis import RedisCache

logger = logging.getLogger(__name__)

# Global cache instances registry
_cache_instances: dict[str, RedisCache] = {}


def create_cache(
    config: RedisCacheConfig | None = None,
    name: str = "default",
) -> RedisCache:
    """
    Create a configured (not yet opened) cache instance.

    Args:
        config: Cache configuration (uses global config if not provided, which
            also applies its log level to the package logger)
        name: Cache instance name (for multiple cache instances)

    Returns:
        Configured RedisCache instance; the existing one if name is registered
    """
    if name in _cache_instances:
        logger.debug("Returning existing cache instance: %s", name)
        return _cache_instances[name]

    if config is None:
        config = get_config()
        setup_logging(config.log_level)

    cache = RedisCache(config)
    _cache_instances[name] = cache

    logger.info(
        "Cache instance '%s' created",
        name,
        extra={"cache_name": name, "has_connection": config.connection is not None},
    )
    return cache


def get_cache(name: str = "default") -> RedisCache:
    """
    Get an existing cache instance by name, creating it from the global
    configuration when it does not exist.
    """
    if name not in _cache_instances:
        logger.debug("Cache instance '%s' not found, creating new instance", name)
        return create_cache(name=name)

    return _cache_instances[name]


def close_all_caches(trace_id: str | None = None) -> None:
    """
    Close all cache instances and clear the registry.

    Close failures are already tolerated by RedisCache.close(), so every
    instance gets closed.
    """
    if not _cache_instances:
        logger.debug("No cache instances to close")
        return

    logger.info("Closing %d cache instance(s)...", len(_cache_instances))

    for name, cache in list(_cache_instances.items()):
        cache.close(trace_id)
        logger.debug("Closed cache instance: %s", name)

    _cache_instances.clear()


def reset_cache_factory() -> None:
    """
    Clear all instance references without closing them.

    Warning: Only use this in testing contexts.
    """
    count = len(_cache_instances)
    _cache_instances.clear()
    logger.debug("Reset cache factory, cleared %d instance reference(s)", count)


def list_cache_instances() -> list[str]:
    """List all registered cache instance names."""
    return list(_cache_instances.keys())


class DefaultRedisFactory:
    """
    Creates Redis components by their descriptors.

    Registered:
    - pip-services:cache:redis:*:1.0 -> RedisCache
    """

    REDIS_CACHE_DESCRIPTOR = Descriptor("pip-services", "cache", "redis", "*", "1.0")

    def __init__(self) -> None:
        self._registrations: list[tuple[Descriptor, Callable[[], Any]]] = []
        self.register_as_type(self.REDIS_CACHE_DESCRIPTOR, RedisCache)

    def register_as_type(self, descriptor: Descriptor, component_type: Callable[[], Any]) -> None:
        self._registrations.append((descriptor, component_type))

    def can_create(self, locator: Descriptor) -> Descriptor | None:
        """
        Check whether a component can be created for locator.

        Returns:
            The registered descriptor that matched, or None
        """
        for descriptor, _ in self._registrations:
            if descriptor.match(locator):
                return descriptor
        return None

    def create(self, locator: Descriptor) -> Any:
        """
        Create a component by locator.

        Raises:
            ConfigurationError: If nothing is registered for locator
        """
        for descriptor, component_type in self._registrations:
            if descriptor.match(locator):
                return component_type()

        raise ConfigurationError(
            f"Cannot create component for {locator}",
            details={"locator": str(locator)},
            code=ErrorCode.UNKNOWN_COMPONENT,
        )
