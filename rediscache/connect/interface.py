"""
rediscache — Discovery and Credential Store Interfaces

Collaborators that turn a discovery key or credential store key into
connection and credential parameters.
"""

from abc import ABC, abstractmethod

from ..config.schemas import ConnectionParams, CredentialParams


class DiscoveryInterface(ABC):
    """Resolves connection parameters by discovery key."""

    @abstractmethod
    def register(self, trace_id: str | None, key: str, connection: ConnectionParams) -> None:
        """
        Register connection parameters under a discovery key.

        Args:
            trace_id: Caller-supplied id for log correlation
            key: Discovery key
            connection: Connection parameters to register
        """
        pass

    @abstractmethod
    def resolve_one(self, trace_id: str | None, key: str) -> ConnectionParams | None:
        """
        Resolve a single connection by discovery key.

        Returns:
            Connection parameters, or None if nothing is registered under key
        """
        pass


class CredentialStoreInterface(ABC):
    """Stores and looks up credential parameters by key."""

    @abstractmethod
    def store(self, trace_id: str | None, key: str, credential: CredentialParams | None) -> None:
        """Store credentials under key. Storing None removes the entry."""
        pass

    @abstractmethod
    def lookup(self, trace_id: str | None, key: str) -> CredentialParams | None:
        """
        Look up credentials by key.

        Returns:
            Credential parameters, or None if the key is unknown
        """
        pass
