"""
rediscache — Configuration Tests

ConfigParams parsing, pydantic schemas and the environment loader.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from rediscache.config import (
    CacheOptions,
    ConfigParams,
    ConnectionParams,
    CredentialParams,
    RedisCacheConfig,
    get_config,
    load_config,
    reload_config,
)
from rediscache.errors import ConfigurationError


class TestConfigParams:
    """Dotted-key parameters."""

    def test_from_tuples(self) -> None:
        params = ConfigParams.from_tuples("connection.host", "localhost", "connection.port", 6379)
        assert params == {"connection.host": "localhost", "connection.port": 6379}

    def test_from_tuples_requires_pairs(self) -> None:
        with pytest.raises(ConfigurationError):
            ConfigParams.from_tuples("connection.host")

    def test_from_value_flattens_nested_mappings(self) -> None:
        params = ConfigParams.from_value(
            {"connection": {"host": "a", "port": 1}, "options.retries": 2, "credential": {"password": None}}
        )
        assert params == {"connection.host": "a", "connection.port": 1, "options.retries": 2}

    def test_sections(self) -> None:
        params = ConfigParams.from_tuples(
            "connection.host", "a",
            "options.retries", 2,
            "options.timeout", 100,
        )
        assert params.get_section_names() == ["connection", "options"]
        assert params.get_section("options") == {"retries": 2, "timeout": 100}
        assert params.get_section("missing") == {}

    def test_typed_getters(self) -> None:
        params = ConfigParams.from_tuples("a", "12", "b", "", "c", 7)
        assert params.get_as_int_with_default("a", 0) == 12
        assert params.get_as_int_with_default("b", 5) == 5
        assert params.get_as_int_with_default("missing", 5) == 5
        assert params.get_as_nullable_str("b") is None
        assert params.get_as_nullable_str("c") == "7"
        assert params.get_as_str_with_default("missing", "x") == "x"

    @pytest.mark.parametrize("value", ["abc", True, 1.5j])
    def test_invalid_int(self, value: object) -> None:
        with pytest.raises(ConfigurationError):
            ConfigParams.from_tuples("a", value).get_as_nullable_int("a")

    def test_override(self) -> None:
        base = ConfigParams.from_tuples("options.retries", 3, "options.timeout", 100)
        merged = base.override({"options": {"retries": 5}})
        assert merged == {"options.retries": 5, "options.timeout": 100}
        assert base["options.retries"] == 3


class TestSchemas:
    """Pydantic models."""

    def test_connection_defaults(self) -> None:
        connection = ConnectionParams()
        assert connection.host == "localhost"
        assert connection.port == 6379
        assert connection.uri is None

    def test_connection_is_frozen(self) -> None:
        connection = ConnectionParams()
        with pytest.raises(ValidationError):
            connection.host = "elsewhere"  # type: ignore[misc]

    @pytest.mark.parametrize("port", [0, 70000])
    def test_connection_port_range(self, port: int) -> None:
        with pytest.raises(ValidationError):
            ConnectionParams(port=port)

    def test_connection_uri_scheme(self) -> None:
        assert ConnectionParams(uri="rediss://cache:6380/0").uri == "rediss://cache:6380/0"
        with pytest.raises(ValidationError):
            ConnectionParams(uri="http://cache:6380")

    def test_credential_repr_hides_password(self) -> None:
        credential = CredentialParams(username="app", password="s3cret")
        assert "s3cret" not in repr(credential)
        assert "s3cret" not in str(credential)

    def test_options_defaults(self) -> None:
        options = CacheOptions()
        assert (options.retries, options.timeout, options.max_size) == (3, 30000, 1000)

    def test_config_params_round_trip(self) -> None:
        config = RedisCacheConfig(
            connection=ConnectionParams(host="cache", port=6380),
            credential=CredentialParams(password="pw"),
            options=CacheOptions(retries=5, timeout=500),
        )
        params = config.to_config_params()

        assert params["connection.host"] == "cache"
        assert params["credential.password"] == "pw"
        assert params["options.retries"] == 5
        assert RedisCacheConfig.from_config_params(params) == config


@pytest.mark.usefixtures("clean_env")
class TestLoader:
    """Environment and .env loading."""

    def test_empty_environment_has_no_connection(self) -> None:
        config = load_config(reload=True)
        assert config.connection is None
        assert config.credential is None
        assert config.options.retries == 3

    def test_environment_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_HOST", "cache.local")
        monkeypatch.setenv("REDIS_PORT", "6380")
        monkeypatch.setenv("REDIS_PASSWORD", "pw")
        monkeypatch.setenv("CACHE_RETRIES", "5")
        monkeypatch.setenv("CACHE_TIMEOUT_MS", "2500")

        config = load_config(reload=True)

        assert config.connection == ConnectionParams(host="cache.local", port=6380)
        assert config.credential is not None and config.credential.password == "pw"
        assert config.options.retries == 5
        assert config.options.timeout == 2500

    def test_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("REDIS_URL=redis://from-file:6379/1\n")
        # load_dotenv writes into os.environ; registering the key lets monkeypatch remove it afterwards
        monkeypatch.setenv("REDIS_URL", "redis://placeholder:6379/0")

        config = load_config(env_file=str(env_file), reload=True)

        assert config.connection is not None
        assert config.connection.uri == "redis://from-file:6379/1"

    def test_invalid_integer(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CACHE_RETRIES", "lots")
        with pytest.raises(ConfigurationError):
            load_config(reload=True)

    def test_validation_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CACHE_RETRIES", "0")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(reload=True)
        assert "validation_errors" in exc_info.value.details

    def test_singleton(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_config()
        monkeypatch.setenv("CACHE_RETRIES", "9")
        assert get_config() is first
        assert reload_config().options.retries == 9
