"""
rediscache — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
Unit tests replace redis.Redis with a MagicMock-backed fake; integration tests
need a Redis server on localhost:6379 (or TEST_REDIS_URL).
"""

import os
from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock

import pytest

from rediscache.cache.backends import redis as redis_backend
from rediscache.config import ConfigParams

os.environ["LOG_LEVEL"] = "DEBUG"

_ENV_KEYS = (
    "REDIS_HOST",
    "REDIS_PORT",
    "REDIS_URL",
    "REDIS_DISCOVERY_KEY",
    "REDIS_USERNAME",
    "REDIS_PASSWORD",
    "REDIS_CREDENTIAL_STORE_KEY",
    "CACHE_RETRIES",
    "CACHE_TIMEOUT_MS",
    "CACHE_MAX_SIZE",
)


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
def redis_client() -> MagicMock:
    """
    A stand-in for a connected redis.Redis client.

    get/set/getdel operate on a plain dict exposed as ``redis_client.data``.
    """
    data: dict[str, str] = {}
    client = MagicMock(name="redis_client")
    client.data = data
    client.ping.return_value = True
    client.get.side_effect = data.get
    client.set.side_effect = lambda key, value, px=None: data.__setitem__(key, value) or True
    client.getdel.side_effect = lambda key: data.pop(key, None)
    return client


@pytest.fixture
def redis_cls(monkeypatch: pytest.MonkeyPatch, redis_client: MagicMock) -> MagicMock:
    """Replace redis.Redis inside the backend module; every attempt gets redis_client."""
    cls = MagicMock(name="Redis", return_value=redis_client)
    cls.from_url.return_value = redis_client
    monkeypatch.setattr(redis_backend, "Redis", cls)
    return cls


@pytest.fixture
def cache_config() -> ConfigParams:
    """Minimal configuration with a fast retry budget."""
    return ConfigParams.from_tuples(
        "connection.host", "localhost",
        "connection.port", 6379,
        "options.retries", 3,
        "options.timeout", 1000,
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove cache-related environment variables and reset the loaded config."""
    from rediscache.config import loader

    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(loader, "_config_instance", None)
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(os.path.dirname(__file__))


@pytest.fixture
def sample_cache_data() -> dict[str, Any]:
    """Sample data for cache testing."""
    return {
        "simple_string": "hello",
        "simple_int": 42,
        "simple_float": 3.14,
        "simple_bool": True,
        "complex_dict": {
            "nested": {
                "key": "value",
                "number": 123,
                "list": [1, 2, 3],
            }
        },
        "complex_list": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ],
    }


@pytest.fixture(autouse=True)
def reset_cache_factory() -> Generator[None, None, None]:
    """Reset cache factory after each test to prevent state leakage."""
    yield
    from rediscache.cache.factory import reset_cache_factory

    reset_cache_factory()
