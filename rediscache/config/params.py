"""
rediscache — Dotted-key Configuration Parameters

ConfigParams is a flat mapping of dotted keys ("connection.host",
"options.retries") to values. Components read their sections from it in
configure().

Example:
    params = ConfigParams.from_tuples(
        "connection.host", "localhost",
        "connection.port", 6379,
        "options.retries", 5,
    )
    params.get_section("connection")  # {"host": "localhost", "port": 6379}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..errors import ConfigurationError


class ConfigParams(dict[str, Any]):
    """Flat dictionary of dotted configuration keys."""

    @classmethod
    def from_tuples(cls, *tuples: Any) -> ConfigParams:
        """Build from alternating key/value arguments."""
        if len(tuples) % 2 != 0:
            raise ConfigurationError(
                "Configuration tuples must come in key/value pairs",
                details={"length": len(tuples)},
            )
        params = cls()
        for i in range(0, len(tuples), 2):
            params[str(tuples[i])] = tuples[i + 1]
        return params

    @classmethod
    def from_value(cls, value: Mapping[str, Any] | None) -> ConfigParams:
        """
        Build from a mapping, flattening nested mappings into dotted keys.

        Both {"connection": {"host": "a"}} and {"connection.host": "a"}
        produce the same result.
        """
        params = cls()
        if value is None:
            return params
        params._flatten("", value)
        return params

    def _flatten(self, prefix: str, value: Mapping[str, Any]) -> None:
        for key, item in value.items():
            full_key = f"{prefix}.{key}" if prefix else str(key)
            if isinstance(item, Mapping):
                self._flatten(full_key, item)
            elif item is not None:
                self[full_key] = item

    def get_section_names(self) -> list[str]:
        """Return the distinct first segments of all keys, in insertion order."""
        names: list[str] = []
        for key in self:
            name = key.split(".", 1)[0]
            if name not in names:
                names.append(name)
        return names

    def get_section(self, name: str) -> ConfigParams:
        """Return the keys under ``name.`` with the prefix stripped."""
        prefix = f"{name}."
        return ConfigParams({key[len(prefix) :]: value for key, value in self.items() if key.startswith(prefix)})

    def get_as_nullable_str(self, key: str) -> str | None:
        value = self.get(key)
        if value is None:
            return None
        value = str(value)
        return value if value != "" else None

    def get_as_str_with_default(self, key: str, default: str) -> str:
        value = self.get_as_nullable_str(key)
        return value if value is not None else default

    def get_as_nullable_int(self, key: str) -> int | None:
        value = self.get(key)
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            raise ConfigurationError(
                f"Configuration key '{key}' must be an integer",
                details={"key": key, "value": value},
            )
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Configuration key '{key}' must be an integer",
                details={"key": key, "value": value, "error": str(e)},
            ) from e

    def get_as_int_with_default(self, key: str, default: int) -> int:
        value = self.get_as_nullable_int(key)
        return value if value is not None else default

    def override(self, other: Mapping[str, Any]) -> ConfigParams:
        """Return a copy with keys from ``other`` taking precedence."""
        merged = ConfigParams(self)
        merged.update(ConfigParams.from_value(other))
        return merged
