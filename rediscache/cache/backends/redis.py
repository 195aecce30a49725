"""
rediscache — Redis Cache

Distributed cache that stores values in a Redis (or Valkey) server.

Configuration parameters:
- connection(s):
  - discovery_key:  (optional) key to resolve the connection via a discovery service
  - host:           host name or IP address (default: localhost)
  - port:           port number (default: 6379)
  - uri:            redis:// URL with all parameters in it
- credential(s):
  - store_key:      (optional) key to look up credentials in a credential store
  - username:       ACL user name
  - password:       user password
- options:
  - retries:        maximum connect attempts (default: 3)
  - timeout:        connect-phase time budget in milliseconds (default: 30000)
  - max_size:       accepted for compatibility, not enforced

References:
- *:discovery:*:*:1.0         (optional) discovery services to resolve the connection
- *:credential-store:*:*:1.0  (optional) credential stores to resolve credentials

Example:
    cache = RedisCache(ConfigParams.from_tuples(
        "connection.host", "localhost",
        "connection.port", 6379,
    ))
    cache.open("123")
    cache.store("123", "key1", "ABC", 5000)
    cache.retrieve("123", "key1")  # "ABC"
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from redis import Redis
from redis.backoff import NoBackoff
from redis.exceptions import (
    AuthenticationError,
    AuthenticationWrongNumberOfArgsError,
    RedisError,
)
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from redis.retry import Retry

from ...config.params import ConfigParams
from ...config.schemas import CacheOptions, ConnectionParams, CredentialParams, RedisCacheConfig
from ...connect.resolvers import ConnectionResolver, CredentialResolver
from ...errors import CacheConnectionError, ConfigurationError, ErrorCode, InvalidStateError
from ...observability.logging import trace_context
from ...refer import Referenceable, References
from ..encoding import encode_value
from ..interface import CacheInterface, Openable

logger = logging.getLogger(__name__)

# Transport-level failures that count against the retry budget
_CONNECT_ERRORS = (RedisConnectionError, RedisTimeoutError, OSError)


class RedisCache(CacheInterface, Openable, Referenceable):
    """
    Redis-backed distributed cache with a bounded connect/retry policy.

    Notes:
    - One session (redis client) per instance, created by open() and dropped
      by close(). No internal locking: share an instance between threads only
      with external synchronization.
    - Connect attempts are immediate (no backoff) and bounded both by
      ``options.retries`` and by ``options.timeout`` measured from the first
      attempt.
    - Values are encoded per rediscache.cache.encoding; retrieve() returns the
      raw stored string.
    - TTLs are milliseconds, applied with SET ... PX and enforced by Redis.
    """

    def __init__(
        self,
        config: ConfigParams | Mapping[str, Any] | RedisCacheConfig | None = None,
        references: References | None = None,
    ) -> None:
        """
        Initialize the cache component. Nothing is connected until open().

        Args:
            config: Optional configuration, same forms as configure()
            references: Optional references, see set_references()
        """
        self._connection_resolver = ConnectionResolver()
        self._credential_resolver = CredentialResolver()
        self._options = CacheOptions()
        self._client: Redis | None = None

        if config is not None:
            self.configure(config)
        if references is not None:
            self.set_references(references)

    # ------------ Configuration ------------

    @property
    def retries(self) -> int:
        return self._options.retries

    @property
    def timeout(self) -> int:
        """Connect-phase time budget in milliseconds."""
        return self._options.timeout

    @property
    def max_size(self) -> int:
        return self._options.max_size

    def configure(self, config: ConfigParams | Mapping[str, Any] | RedisCacheConfig) -> None:
        """
        Configure the component.

        Args:
            config: ConfigParams or mapping of dotted keys (nested mappings are
                flattened), or a RedisCacheConfig

        Raises:
            ConfigurationError: If option values are invalid
        """
        if isinstance(config, RedisCacheConfig):
            params = config.to_config_params()
        elif isinstance(config, ConfigParams):
            params = config
        else:
            params = ConfigParams.from_value(config)

        self._connection_resolver.configure(params)
        self._credential_resolver.configure(params)

        options = params.get_section("options")
        try:
            self._options = CacheOptions(
                retries=options.get_as_int_with_default("retries", self._options.retries),
                timeout=options.get_as_int_with_default("timeout", self._options.timeout),
                max_size=options.get_as_int_with_default("max_size", self._options.max_size),
            )
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid cache options",
                details={"validation_errors": e.errors()},
            ) from e

    def set_references(self, references: References) -> None:
        """
        Set references to discovery services and credential stores.

        Args:
            references: References to locate the component dependencies
        """
        self._connection_resolver.set_references(references)
        self._credential_resolver.set_references(references)

    # ------------ Lifecycle ------------

    def is_open(self) -> bool:
        """Return True if a session is held. Performs no network round-trip."""
        return self._client is not None

    def open(self, trace_id: str | None) -> None:
        """
        Resolve parameters and establish a session.

        Raises:
            ConfigurationError: If no connection can be resolved (no attempt is made)
            CacheConnectionError: If the retry budget is spent or authentication fails
        """
        with trace_context(trace_id):
            if self._client is not None:
                logger.debug("Redis cache is already open")
                return

            connection = self._connection_resolver.resolve(trace_id)
            credential = self._credential_resolver.lookup(trace_id)

            if connection is None:
                raise ConfigurationError(
                    "Connection is not configured",
                    trace_id=trace_id,
                    code=ErrorCode.NO_CONNECTION,
                )

            self._client = self._connect(trace_id, connection, credential)
            logger.info(
                "Redis cache opened",
                extra={"host": connection.host, "port": connection.port, "uri": connection.uri is not None},
            )

    def close(self, trace_id: str | None) -> None:
        """Close the session. Safe to call repeatedly or when never opened."""
        with trace_context(trace_id):
            if self._client is None:
                return

            client, self._client = self._client, None
            try:
                client.close()
                logger.info("Redis cache closed")
            except (RedisError, OSError) as e:
                logger.warning(f"Error closing Redis client: {e}", extra={"error": str(e)})

    def __enter__(self) -> RedisCache:
        self.open(None)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close(None)

    # ------------ Connection helpers ------------

    def _create_client(
        self,
        connection: ConnectionParams,
        credential: CredentialParams | None,
        connect_timeout: float,
    ) -> Redis:
        """
        Build a client for one connect attempt. The client is lazy until its first command.

        Both the TCP connect and the handshake reads are bounded by connect_timeout;
        see _end_handshake() for how the read bound is lifted afterwards.
        """
        kwargs: dict[str, Any] = {
            "socket_connect_timeout": connect_timeout,
            "socket_timeout": connect_timeout,
            "retry": Retry(NoBackoff(), 0),
            "decode_responses": True,
        }
        if credential is not None and credential.password:
            kwargs["password"] = credential.password
            if credential.username:
                kwargs["username"] = credential.username

        if connection.uri:
            return Redis.from_url(connection.uri, **kwargs)
        return Redis(host=connection.host, port=connection.port, **kwargs)

    def _end_handshake(self, client: Redis) -> None:
        """
        Switch a verified client from handshake to operation timeouts: reads are
        unbounded and later reconnects get the full connect budget, not what was
        left of it.
        """
        pool = client.connection_pool
        pool.connection_kwargs["socket_timeout"] = None
        pool.connection_kwargs["socket_connect_timeout"] = self._options.timeout / 1000
        # Pooled connections keep the timeout they were built with
        pool.disconnect()
        pool.reset()

    @staticmethod
    def _release(client: Redis) -> None:
        try:
            client.close()
        except (RedisError, OSError) as e:
            logger.debug(f"Ignoring error while releasing failed client: {e}")

    def _connect(
        self,
        trace_id: str | None,
        connection: ConnectionParams,
        credential: CredentialParams | None,
    ) -> Redis:
        """
        Run the connect/retry loop.

        The elapsed-time check runs at the top of every attempt; each attempt's
        socket connect and handshake read timeouts are the remaining budget.
        """
        retries = self._options.retries
        timeout_ms = self._options.timeout
        start = time.monotonic()
        last_error: Exception | None = None

        for attempt in range(1, retries + 1):
            elapsed_ms = (time.monotonic() - start) * 1000
            if elapsed_ms >= timeout_ms:
                logger.error(
                    "Redis connection timeout",
                    extra={"attempts": attempt - 1, "timeout_ms": timeout_ms, "elapsed_ms": round(elapsed_ms)},
                )
                raise CacheConnectionError(
                    "Redis connection timeout",
                    details={"attempts": attempt - 1, "timeout_ms": timeout_ms, "elapsed_ms": round(elapsed_ms)},
                    trace_id=trace_id,
                ) from last_error

            logger.info(
                f"Attempting Redis connection (attempt {attempt}/{retries})",
                extra={"attempt": attempt, "max_retries": retries},
            )
            client = self._create_client(connection, credential, (timeout_ms - elapsed_ms) / 1000)

            try:
                client.ping()
            except (AuthenticationError, AuthenticationWrongNumberOfArgsError) as e:
                self._release(client)
                logger.error(f"Redis authentication failed: {e}", extra={"error": str(e)})
                raise CacheConnectionError(
                    "Redis authentication failed",
                    details={"error": str(e)},
                    trace_id=trace_id,
                    code=ErrorCode.AUTH_FAILED,
                ) from e
            except _CONNECT_ERRORS as e:
                self._release(client)
                last_error = e
                logger.warning(
                    f"Redis connection attempt {attempt} failed: {e}",
                    extra={"attempt": attempt, "error": str(e), "error_type": type(e).__name__},
                )
                if attempt >= retries:
                    logger.error(f"All {retries} Redis connection attempts failed", extra={"error": str(e)})
                    raise CacheConnectionError(
                        f"Failed to connect to Redis after {retries} attempts",
                        details={"attempts": attempt, "error": str(e)},
                        trace_id=trace_id,
                    ) from e
                continue
            except RedisError as e:
                self._release(client)
                logger.error(
                    f"Redis handshake failed: {e}",
                    extra={"attempt": attempt, "error": str(e), "error_type": type(e).__name__},
                )
                raise

            self._end_handshake(client)
            logger.info("Successfully connected to Redis", extra={"attempt": attempt})
            return client

        # Should never reach here: retries >= 1 and the loop either returns or raises
        raise CacheConnectionError("Redis connection loop ended without a result", trace_id=trace_id)

    # ------------ Cache operations ------------

    def _check_opened(self, trace_id: str | None) -> Redis:
        if self._client is None:
            raise InvalidStateError(trace_id=trace_id)
        return self._client

    @staticmethod
    def _check_key(key: str) -> None:
        if not isinstance(key, str) or not key:
            raise ValueError("key must be a non-empty string")

    def retrieve(self, trace_id: str | None, key: str) -> str | None:
        """
        Retrieve the raw stored value for key.

        Returns:
            The stored string, or None if the key is missing or expired

        Raises:
            InvalidStateError: If the cache is not open
        """
        with trace_context(trace_id):
            client = self._check_opened(trace_id)
            self._check_key(key)

            value = client.get(key)
            logger.debug("Cache %s for key %s", "HIT" if value is not None else "MISS", key)
            return value

    def store(self, trace_id: str | None, key: str, value: Any, timeout: int) -> bool:
        """
        Encode value and store it under key with an expiration.

        Args:
            trace_id: Caller-supplied id threaded through logs and errors
            key: Unique value key
            value: Value to store, encoded per rediscache.cache.encoding
            timeout: Expiration timeout in milliseconds (> 0)

        Returns:
            True when Redis acknowledged the write

        Raises:
            InvalidStateError: If the cache is not open
            EncodingError: If value cannot be encoded; nothing is written
        """
        with trace_context(trace_id):
            client = self._check_opened(trace_id)
            self._check_key(key)
            if timeout <= 0:
                raise ValueError("timeout must be a positive number of milliseconds")

            encoded = encode_value(value, trace_id=trace_id)
            result = client.set(key, encoded.payload, px=timeout)
            logger.debug(
                "Stored key %s",
                key,
                extra={"value_kind": encoded.kind.value, "ttl_ms": timeout},
            )
            return bool(result)

    def remove(self, trace_id: str | None, key: str) -> None:
        """
        Remove key from the cache (GETDEL, requires Redis 6.2+).

        Raises:
            InvalidStateError: If the cache is not open
        """
        with trace_context(trace_id):
            client = self._check_opened(trace_id)
            self._check_key(key)

            client.getdel(key)
            logger.debug("Removed key %s", key)
