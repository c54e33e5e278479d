"""
Startup configuration for the Fitbit MCP Server.

The access token comes from the --fitbit-token flag or the FITBIT_ACCESS_TOKEN
environment variable (optionally set through a .env file). load_config never
exits the process; it reports a StartupResult and leaves termination to main().
"""

import argparse
import os
from dataclasses import dataclass
from typing import Mapping, Sequence

from fitbit_mcp_server.client import FITBIT_API_BASE_URL

TRANSPORTS = ("stdio", "streamable-http")
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8081

MISSING_TOKEN_MESSAGE = (
    "Fitbit access token is required. Provide it with --fitbit-token or "
    "FITBIT_ACCESS_TOKEN environment variable."
)


class ConfigurationError(Exception):
    """The server cannot start with the supplied configuration."""


@dataclass(frozen=True)
class Config:
    access_token: str
    base_url: str = FITBIT_API_BASE_URL
    transport: str = "stdio"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def __post_init__(self):
        if not self.access_token:
            raise ConfigurationError(MISSING_TOKEN_MESSAGE)
        if self.transport not in TRANSPORTS:
            raise ConfigurationError(
                f"Unsupported transport '{self.transport}'. Use one of: {', '.join(TRANSPORTS)}"
            )


@dataclass(frozen=True)
class StartupResult:
    """Either a usable Config or the reason the server cannot start."""

    config: Config | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.config is not None


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad arguments instead of exiting."""

    def error(self, message):
        raise ConfigurationError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="fitbit-mcp-server",
        description="Fitbit MCP Server - exposes the Fitbit Web API as MCP tools",
    )
    parser.add_argument(
        "--fitbit-token",
        help="Fitbit access token (default: FITBIT_ACCESS_TOKEN environment variable)",
    )
    parser.add_argument(
        "--http",
        action="store_true",
        help="Use streamable HTTP transport instead of stdio",
    )
    parser.add_argument("--host", help=f"Host to bind to (default: {DEFAULT_HOST})")
    parser.add_argument(
        "--port", type=int, help=f"Port for HTTP transport (default: {DEFAULT_PORT})"
    )
    return parser


def load_config(
    argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None
) -> StartupResult:
    """
    Resolve the server configuration from command line arguments and the environment.

    Command line values take precedence over environment variables. Unrecognised
    flags are ignored; malformed values for known flags give a failed result.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:].
        environ: Environment mapping. Defaults to os.environ.
    """
    if environ is None:
        environ = os.environ
    try:
        # Flags added by MCP hosts are not ours to reject.
        args, _unknown = build_parser().parse_known_args(argv)
    except ConfigurationError as e:
        return StartupResult(error=str(e))

    transport = "streamable-http" if args.http else environ.get("MCP_TRANSPORT", "stdio")
    if transport == "http":
        transport = "streamable-http"

    try:
        port = args.port if args.port is not None else int(environ.get("MCP_PORT", DEFAULT_PORT))
        config = Config(
            access_token=args.fitbit_token or environ.get("FITBIT_ACCESS_TOKEN", ""),
            base_url=environ.get("FITBIT_API_BASE_URL", FITBIT_API_BASE_URL),
            transport=transport,
            host=args.host or environ.get("MCP_HOST", DEFAULT_HOST),
            port=port,
        )
    except ValueError as e:
        return StartupResult(error=f"Invalid MCP_PORT: {e}")
    except ConfigurationError as e:
        return StartupResult(error=str(e))
    return StartupResult(config=config)
