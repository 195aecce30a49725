"""
rediscache — Value Encoding

Translates caller values into the string representation stored in Redis.
Each value is classified once into a ValueKind, then encoded by kind
(first match wins):

- ABSENT      None                       -> "null"
- TEXT        str                        -> stored as-is
- TIMESTAMP   timezone-aware datetime    -> UTC ISO-8601, e.g. "2024-03-01T10:00:00Z"
- STRUCTURED  anything else              -> compact JSON text

Naive datetimes are not timestamps: they fall through to STRUCTURED and fail
JSON encoding, since their instant is ambiguous.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

from ..errors import EncodingError


class ValueKind(str, Enum):
    """Encoding category of a value."""

    ABSENT = "absent"
    TEXT = "text"
    TIMESTAMP = "timestamp"
    STRUCTURED = "structured"


@dataclass(frozen=True)
class EncodedValue:
    """A value ready to be written, tagged with the kind it was encoded as."""

    kind: ValueKind
    payload: str


def classify(value: Any) -> ValueKind:
    """Determine the encoding category of a value."""
    if value is None:
        return ValueKind.ABSENT
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, datetime) and value.utcoffset() is not None:
        return ValueKind.TIMESTAMP
    return ValueKind.STRUCTURED


def format_timestamp(value: datetime) -> str:
    """Normalize an aware datetime to UTC and format it as ISO-8601."""
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _to_json(value: Any) -> str:
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def encode_value(value: Any, trace_id: str | None = None) -> EncodedValue:
    """
    Encode a value for storage.

    Args:
        value: Value to encode
        trace_id: Caller-supplied id attached to errors

    Returns:
        EncodedValue with the kind and the string payload

    Raises:
        EncodingError: If a structured value is not JSON-serializable
    """
    kind = classify(value)

    if kind is ValueKind.ABSENT:
        return EncodedValue(kind, "null")
    if kind is ValueKind.TEXT:
        return EncodedValue(kind, value)
    if kind is ValueKind.TIMESTAMP:
        return EncodedValue(kind, format_timestamp(value))

    try:
        return EncodedValue(kind, _to_json(value))
    except (TypeError, ValueError) as e:
        raise EncodingError(
            type(value).__name__,
            trace_id=trace_id,
            details={"error": str(e)},
        ) from e


def decode_value(raw: str | bytes | None, kind: ValueKind) -> Any:
    """
    Parse a stored representation back into a Python value.

    A missing entry (raw is None) decodes to None for every kind.

    Args:
        raw: Value returned by RedisCache.retrieve
        kind: Kind the value was stored as

    Returns:
        str for TEXT, aware datetime for TIMESTAMP, parsed JSON for STRUCTURED

    Raises:
        EncodingError: If raw does not parse as the requested kind
    """
    if raw is None:
        return None
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")

    if kind is ValueKind.TEXT:
        return raw

    try:
        if kind is ValueKind.TIMESTAMP:
            return datetime.fromisoformat(raw)
        return json.loads(raw)
    except ValueError as e:
        raise EncodingError(
            kind.value,
            details={"error": str(e), "data_preview": raw[:100]},
            message=f"Stored value is not valid {kind.value} data",
        ) from e
