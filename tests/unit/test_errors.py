"""
rediscache — Error Type Tests
"""

from rediscache.errors import (
    CacheConnectionError,
    ConfigurationError,
    EncodingError,
    ErrorCode,
    InvalidStateError,
    RedisCacheError,
    extract_error_code,
)


class TestErrors:
    def test_hierarchy(self) -> None:
        for error in (
            ConfigurationError("bad"),
            CacheConnectionError("down"),
            InvalidStateError(),
            EncodingError("object"),
        ):
            assert isinstance(error, RedisCacheError)

    def test_default_codes(self) -> None:
        assert ConfigurationError("bad").code == ErrorCode.INVALID_CONFIG
        assert CacheConnectionError("down").code == ErrorCode.NO_CONNECTION
        assert InvalidStateError().code == ErrorCode.NOT_OPENED
        assert EncodingError("object").code == ErrorCode.ENCODING_FAILED

    def test_to_dict(self) -> None:
        error = ConfigurationError(
            "Connection is not configured",
            details={"section": "connection"},
            trace_id="123",
            code=ErrorCode.NO_CONNECTION,
        )
        assert error.to_dict() == {
            "error": "ConfigurationError",
            "code": "NO_CONNECTION",
            "message": "Connection is not configured",
            "trace_id": "123",
            "details": {"section": "connection"},
        }

    def test_invalid_state_message(self) -> None:
        error = InvalidStateError(trace_id="abc")
        assert str(error) == "Connection is not opened"
        assert error.trace_id == "abc"

    def test_encoding_error_details(self) -> None:
        error = EncodingError("set", details={"error": "not serializable"})
        assert error.details == {"error": "not serializable", "value_type": "set"}
        assert "set" in error.message

    def test_extract_error_code(self) -> None:
        assert extract_error_code(InvalidStateError()) == ErrorCode.NOT_OPENED
        assert extract_error_code(RuntimeError("boom")) == ErrorCode.UNKNOWN_ERROR
