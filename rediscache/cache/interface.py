"""
rediscache — Cache Interface

Defines the abstract interfaces distributed cache components implement.
"""

from abc import ABC, abstractmethod
from typing import Any


class Openable(ABC):
    """A component with an explicit open/close lifecycle."""

    @abstractmethod
    def is_open(self) -> bool:
        """Return True if the component has been opened."""
        pass

    @abstractmethod
    def open(self, trace_id: str | None) -> None:
        """
        Open the component.

        Args:
            trace_id: Caller-supplied id threaded through logs and errors
        """
        pass

    @abstractmethod
    def close(self, trace_id: str | None) -> None:
        """Close the component and free used resources. Must be idempotent."""
        pass


class CacheInterface(ABC):
    """
    Abstract base class for distributed caches.

    Entries live in the remote store; implementations keep no local copy.
    """

    @abstractmethod
    def retrieve(self, trace_id: str | None, key: str) -> Any | None:
        """
        Retrieve a cached value by key.

        Args:
            trace_id: Caller-supplied id threaded through logs and errors
            key: Unique value key

        Returns:
            The stored value, or None if the key is missing or expired
        """
        pass

    @abstractmethod
    def store(self, trace_id: str | None, key: str, value: Any, timeout: int) -> Any:
        """
        Store a value with an expiration time.

        Args:
            trace_id: Caller-supplied id threaded through logs and errors
            key: Unique value key
            value: Value to store
            timeout: Expiration timeout in milliseconds

        Returns:
            Implementation-defined store acknowledgment
        """
        pass

    @abstractmethod
    def remove(self, trace_id: str | None, key: str) -> None:
        """
        Remove a value by key.

        Args:
            trace_id: Caller-supplied id threaded through logs and errors
            key: Unique value key
        """
        pass
