"""
rediscache — Connection and Credential Resolvers

Turn the ``connection`` / ``credential`` configuration sections into
parameter objects, consulting discovery services and credential stores
found in References when the section only names a key.

Resolution happens on every call so that each open() sees fresh parameters.
"""

import logging

from pydantic import ValidationError

from ..config.params import ConfigParams
from ..config.schemas import ConnectionParams, CredentialParams
from ..errors import ConfigurationError
from ..refer import Descriptor, References
from .interface import CredentialStoreInterface, DiscoveryInterface

logger = logging.getLogger(__name__)

DISCOVERY_DESCRIPTOR = Descriptor("*", "discovery", "*", "*", "*")
CREDENTIAL_STORE_DESCRIPTOR = Descriptor("*", "credential-store", "*", "*", "*")


def _read_section(config: ConfigParams, singular: str, plural: str) -> ConfigParams | None:
    section = config.get_section(singular)
    if not section:
        section = config.get_section(plural)
    return section or None


class ConnectionResolver:
    """Resolves ConnectionParams from configuration or discovery."""

    def __init__(self) -> None:
        self._config: ConfigParams | None = None
        self._references: References | None = None

    def configure(self, config: ConfigParams) -> None:
        self._config = _read_section(config, "connection", "connections")

    def set_references(self, references: References) -> None:
        self._references = references

    def resolve(self, trace_id: str | None) -> ConnectionParams | None:
        """
        Resolve connection parameters.

        Returns:
            ConnectionParams, or None when no connection is configured or the
            discovery key is not known to any discovery service

        Raises:
            ConfigurationError: If the configured values are invalid
        """
        if self._config is None:
            return None

        discovery_key = self._config.get_as_nullable_str("discovery_key")
        explicit = "host" in self._config or "uri" in self._config
        if discovery_key is not None and not explicit:
            return self._resolve_in_discovery(trace_id, discovery_key)

        try:
            return ConnectionParams.from_config(self._config)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid connection configuration",
                details={"validation_errors": e.errors()},
                trace_id=trace_id,
            ) from e

    def _resolve_in_discovery(self, trace_id: str | None, key: str) -> ConnectionParams | None:
        if self._references is None:
            logger.warning(
                "Connection uses discovery key %s but no references were set",
                key,
                extra={"discovery_key": key},
            )
            return None

        for discovery in self._references.get_optional(DISCOVERY_DESCRIPTOR):
            if not isinstance(discovery, DiscoveryInterface):
                continue
            connection = discovery.resolve_one(trace_id, key)
            if connection is not None:
                logger.debug("Resolved connection via discovery key %s", key, extra={"discovery_key": key})
                return connection

        logger.warning("Discovery key %s was not resolved", key, extra={"discovery_key": key})
        return None


class CredentialResolver:
    """Resolves CredentialParams from configuration or a credential store."""

    def __init__(self) -> None:
        self._config: ConfigParams | None = None
        self._references: References | None = None

    def configure(self, config: ConfigParams) -> None:
        self._config = _read_section(config, "credential", "credentials")

    def set_references(self, references: References) -> None:
        self._references = references

    def lookup(self, trace_id: str | None) -> CredentialParams | None:
        """
        Look up credential parameters.

        Returns:
            CredentialParams, or None when no credentials are configured or the
            store key is not known to any credential store
        """
        if self._config is None:
            return None

        store_key = self._config.get_as_nullable_str("store_key")
        explicit = "username" in self._config or "password" in self._config
        if store_key is not None and not explicit:
            return self._lookup_in_stores(trace_id, store_key)

        return CredentialParams.from_config(self._config)

    def _lookup_in_stores(self, trace_id: str | None, key: str) -> CredentialParams | None:
        if self._references is None:
            return None

        for store in self._references.get_optional(CREDENTIAL_STORE_DESCRIPTOR):
            if not isinstance(store, CredentialStoreInterface):
                continue
            credential = store.lookup(trace_id, key)
            if credential is not None:
                return credential

        logger.warning("Credential store key %s was not found", key, extra={"store_key": key})
        return None
