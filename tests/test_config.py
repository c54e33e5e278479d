"""
Unit tests for startup configuration in fitbit_mcp_server.config.
"""

import pytest

from fitbit_mcp_server.client import FITBIT_API_BASE_URL
from fitbit_mcp_server.config import (
    MISSING_TOKEN_MESSAGE,
    Config,
    ConfigurationError,
    load_config,
)


def test_missing_token_is_a_failed_startup():
    result = load_config([], {})

    assert result.ok is False
    assert result.config is None
    assert result.error == MISSING_TOKEN_MESSAGE


def test_empty_token_is_a_failed_startup():
    result = load_config([], {"FITBIT_ACCESS_TOKEN": ""})
    assert not result.ok


def test_token_from_environment():
    result = load_config([], {"FITBIT_ACCESS_TOKEN": "env-token"})

    assert result.ok
    assert result.error is None
    assert result.config.access_token == "env-token"
    assert result.config.base_url == FITBIT_API_BASE_URL
    assert result.config.transport == "stdio"


def test_command_line_token_takes_precedence():
    result = load_config(["--fitbit-token", "cli-token"], {"FITBIT_ACCESS_TOKEN": "env-token"})
    assert result.config.access_token == "cli-token"


def test_base_url_override():
    result = load_config(
        [], {"FITBIT_ACCESS_TOKEN": "t", "FITBIT_API_BASE_URL": "http://localhost:9999/1"}
    )
    assert result.config.base_url == "http://localhost:9999/1"


def test_http_transport_from_flags():
    result = load_config(["--fitbit-token", "t", "--http", "--port", "9000"], {})

    assert result.config.transport == "streamable-http"
    assert result.config.port == 9000
    assert result.config.host == "0.0.0.0"


def test_http_transport_from_environment():
    result = load_config(
        [],
        {"FITBIT_ACCESS_TOKEN": "t", "MCP_TRANSPORT": "http", "MCP_HOST": "127.0.0.1", "MCP_PORT": "8123"},
    )

    assert result.config.transport == "streamable-http"
    assert result.config.host == "127.0.0.1"
    assert result.config.port == 8123


def test_unknown_transport_is_a_failed_startup():
    result = load_config([], {"FITBIT_ACCESS_TOKEN": "t", "MCP_TRANSPORT": "carrier-pigeon"})

    assert not result.ok
    assert "carrier-pigeon" in result.error


def test_invalid_port_is_a_failed_startup():
    result = load_config([], {"FITBIT_ACCESS_TOKEN": "t", "MCP_PORT": "eighty"})

    assert not result.ok
    assert "MCP_PORT" in result.error


def test_config_rejects_empty_token():
    with pytest.raises(ConfigurationError):
        Config(access_token="")


def test_unknown_flags_are_ignored():
    """
    Test flags added by an MCP host do not stop the server from starting.
    """
    result = load_config(["--fitbit-token", "t", "--verbose", "--client", "claude"], {})

    assert result.ok
    assert result.config.access_token == "t"


def test_malformed_port_flag_is_a_failed_startup():
    result = load_config(["--fitbit-token", "t", "--port", "abc"], {})

    assert not result.ok
    assert "--port" in result.error
