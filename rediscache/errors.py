"""
rediscache — Core Error Types

Defines the exception hierarchy raised by the cache client.
All exceptions inherit from RedisCacheError for consistent error handling.

Transport errors raised by the redis client during retrieve/store/remove are
not wrapped; they reach the caller as redis.exceptions.* unchanged.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Standard error codes carried by every RedisCacheError.

    Used for structured error handling and client-side error recovery.
    """

    # Configuration errors
    NO_CONNECTION = "NO_CONNECTION"
    INVALID_CONFIG = "INVALID_CONFIG"
    UNKNOWN_COMPONENT = "UNKNOWN_COMPONENT"

    # Connection errors
    AUTH_FAILED = "AUTH_FAILED"

    # State errors
    NOT_OPENED = "NOT_OPENED"

    # Serialization errors
    ENCODING_FAILED = "ENCODING_FAILED"

    # Internal errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class RedisCacheError(Exception):
    """Base exception for all rediscache errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        trace_id: str | None = None,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.trace_id = trace_id
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured output."""
        return {
            "error": self.__class__.__name__,
            "code": self.code.value,
            "message": self.message,
            "trace_id": self.trace_id,
            "details": self.details,
        }


class ConfigurationError(RedisCacheError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        trace_id: str | None = None,
        code: ErrorCode = ErrorCode.INVALID_CONFIG,
    ):
        super().__init__(message, details, trace_id=trace_id, code=code)


class CacheConnectionError(RedisCacheError):
    """Raised when a session to the remote store cannot be established."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        trace_id: str | None = None,
        code: ErrorCode = ErrorCode.NO_CONNECTION,
    ):
        super().__init__(message, details, trace_id=trace_id, code=code)


class InvalidStateError(RedisCacheError):
    """Raised when an operation requires an open session and there is none."""

    def __init__(self, trace_id: str | None = None, details: dict[str, Any] | None = None):
        super().__init__("Connection is not opened", details, trace_id=trace_id, code=ErrorCode.NOT_OPENED)


class EncodingError(RedisCacheError):
    """Raised when a value cannot be serialized for storage (or parsed back)."""

    def __init__(
        self,
        value_type: str,
        trace_id: str | None = None,
        details: dict[str, Any] | None = None,
        message: str | None = None,
    ):
        message = message or f"Cannot encode value of type {value_type} for storage"
        error_details = details or {}
        error_details["value_type"] = value_type
        super().__init__(message, error_details, trace_id=trace_id, code=ErrorCode.ENCODING_FAILED)
        self.value_type = value_type


def extract_error_code(error: Exception) -> ErrorCode:
    """
    Extract the ErrorCode carried by an exception.

    Args:
        error: Exception to categorize

    Returns:
        The error's own code for RedisCacheError, UNKNOWN_ERROR otherwise
    """
    if isinstance(error, RedisCacheError):
        return error.code

    return ErrorCode.UNKNOWN_ERROR
