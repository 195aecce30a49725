"""
rediscache — In-memory Discovery and Credential Store

Static registries populated from configuration. Each top-level section is a
key and its contents are the parameters registered under it:

    discovery = MemoryDiscovery.from_config(ConfigParams.from_tuples(
        "main-cache.host", "redis.internal",
        "main-cache.port", 6380,
    ))
    discovery.resolve_one(None, "main-cache")  # ConnectionParams(host="redis.internal", port=6380)
"""

import logging

from pydantic import ValidationError

from ..config.params import ConfigParams
from ..config.schemas import ConnectionParams, CredentialParams
from ..errors import ConfigurationError
from .interface import CredentialStoreInterface, DiscoveryInterface

logger = logging.getLogger(__name__)


class MemoryDiscovery(DiscoveryInterface):
    """Discovery service backed by a dict."""

    def __init__(self) -> None:
        self._items: dict[str, ConnectionParams] = {}

    @classmethod
    def from_config(cls, config: ConfigParams) -> "MemoryDiscovery":
        discovery = cls()
        discovery.configure(config)
        return discovery

    def configure(self, config: ConfigParams) -> None:
        """Register one connection per top-level section."""
        for key in config.get_section_names():
            try:
                connection = ConnectionParams.from_config(config.get_section(key))
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid connection registered under discovery key '{key}'",
                    details={"discovery_key": key, "validation_errors": e.errors()},
                ) from e
            self._items[key] = connection

    def register(self, trace_id: str | None, key: str, connection: ConnectionParams) -> None:
        self._items[key] = connection
        logger.debug("Registered connection under discovery key %s", key, extra={"trace_id": trace_id})

    def resolve_one(self, trace_id: str | None, key: str) -> ConnectionParams | None:
        return self._items.get(key)


class MemoryCredentialStore(CredentialStoreInterface):
    """Credential store backed by a dict."""

    def __init__(self) -> None:
        self._items: dict[str, CredentialParams] = {}

    @classmethod
    def from_config(cls, config: ConfigParams) -> "MemoryCredentialStore":
        store = cls()
        store.configure(config)
        return store

    def configure(self, config: ConfigParams) -> None:
        """Store one credential per top-level section."""
        for key in config.get_section_names():
            self._items[key] = CredentialParams.from_config(config.get_section(key))

    def store(self, trace_id: str | None, key: str, credential: CredentialParams | None) -> None:
        if credential is None:
            self._items.pop(key, None)
        else:
            self._items[key] = credential

    def lookup(self, trace_id: str | None, key: str) -> CredentialParams | None:
        return self._items.get(key)
