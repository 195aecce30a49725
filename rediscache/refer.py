"""
rediscache — Component References

Descriptor locators and the References container passed to
set_references(). A descriptor is a five-part locator
``group:type:kind:name:version`` where any part may be ``*``.

Example:
    refs = References.from_tuples(
        Descriptor("pip-services", "discovery", "memory", "default", "1.0"), discovery,
    )
    refs.get_optional(Descriptor("*", "discovery", "*", "*", "*"))  # [discovery]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .errors import ConfigurationError, ErrorCode


@dataclass(frozen=True)
class Descriptor:
    """Five-part component locator with ``*`` wildcards."""

    group: str = "*"
    type: str = "*"
    kind: str = "*"
    name: str = "*"
    version: str = "*"

    @classmethod
    def parse(cls, value: str) -> Descriptor:
        parts = value.split(":")
        if len(parts) != 5:
            raise ConfigurationError(
                f"Descriptor '{value}' must have the form group:type:kind:name:version",
                details={"descriptor": value},
            )
        return cls(*parts)

    @staticmethod
    def _match_field(a: str, b: str) -> bool:
        return a == "*" or b == "*" or a == b

    def match(self, other: Descriptor) -> bool:
        """Wildcard-aware comparison in both directions."""
        return (
            self._match_field(self.group, other.group)
            and self._match_field(self.type, other.type)
            and self._match_field(self.kind, other.kind)
            and self._match_field(self.name, other.name)
            and self._match_field(self.version, other.version)
        )

    def __str__(self) -> str:
        return f"{self.group}:{self.type}:{self.kind}:{self.name}:{self.version}"


class References:
    """Ordered registry of components keyed by locator."""

    def __init__(self) -> None:
        self._entries: list[tuple[Any, Any]] = []

    @classmethod
    def from_tuples(cls, *tuples: Any) -> References:
        """Build from alternating locator/component arguments."""
        if len(tuples) % 2 != 0:
            raise ConfigurationError(
                "Reference tuples must come in locator/component pairs",
                details={"length": len(tuples)},
            )
        references = cls()
        for i in range(0, len(tuples), 2):
            references.put(tuples[i], tuples[i + 1])
        return references

    def put(self, locator: Any, component: Any) -> None:
        if component is None:
            raise ValueError("component cannot be None")
        self._entries.append((locator, component))

    def remove(self, locator: Any) -> Any | None:
        for index, (entry_locator, component) in enumerate(self._entries):
            if self._matches(entry_locator, locator):
                del self._entries[index]
                return component
        return None

    @staticmethod
    def _matches(entry_locator: Any, locator: Any) -> bool:
        if isinstance(entry_locator, Descriptor) and isinstance(locator, Descriptor):
            return entry_locator.match(locator)
        return entry_locator == locator

    def get_optional(self, locator: Any) -> list[Any]:
        """Return every component registered under a matching locator."""
        return [component for entry_locator, component in self._entries if self._matches(entry_locator, locator)]

    def get_one_optional(self, locator: Any) -> Any | None:
        components = self.get_optional(locator)
        return components[0] if components else None

    def get_required(self, locator: Any) -> list[Any]:
        components = self.get_optional(locator)
        if not components:
            raise ConfigurationError(
                f"Cannot locate reference: {locator}",
                details={"locator": str(locator)},
                code=ErrorCode.UNKNOWN_COMPONENT,
            )
        return components

    def get_all(self) -> list[Any]:
        return [component for _, component in self._entries]


class Referenceable(ABC):
    """A component that locates its collaborators through References."""

    @abstractmethod
    def set_references(self, references: References) -> None:
        """Store or resolve the collaborators this component needs."""
