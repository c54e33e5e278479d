"""
Fitbit MCP Server

This module implements a Model Context Protocol (MCP) server for connecting
Claude with the Fitbit Web API. Every tool performs one authenticated GET (two
for body measurements) and returns the JSON response, or a reshaped subset of
it, as text content.

Usage:
    The access token is read from --fitbit-token or the FITBIT_ACCESS_TOKEN
    environment variable (a .env file is loaded if present). The server refuses
    to start without one.

    To run the server:
        $ fitbit-mcp-server --fitbit-token <token>
        $ python -m fitbit_mcp_server --http --port 9000

    MCP tools provided:
        - getUserProfile
        - getActivities
        - getSleepLogs
        - getHeartRate
        - getSteps
        - getBodyMeasurements
        - getFoodLogs
        - getWaterLogs
        - getLifetimeStats
        - getUserSettings
        - getFloorsClimbed
        - getDistance
        - getCalories
        - getActiveZoneMinutes
        - getDevices
        - getBadges
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Annotated, Sequence

from dotenv import load_dotenv  # pylint: disable=import-error
from mcp.server.fastmcp import FastMCP  # pylint: disable=import-error
from mcp.types import CallToolResult  # pylint: disable=import-error
from pydantic import Field  # pylint: disable=import-error

from fitbit_mcp_server import __version__
from fitbit_mcp_server.catalog import TOOLS, ToolDefinition, run_tool
from fitbit_mcp_server.client import FitbitClient
from fitbit_mcp_server.config import Config, load_config

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)
logger = logging.getLogger("fitbit_mcp_server")


def _parameter_description(tool: ToolDefinition, name: str) -> str:
    return next(p.description for p in tool.parameters if p.name == name)


def _make_handler(client: FitbitClient, tool: ToolDefinition):
    """Build the coroutine FastMCP registers for a catalog entry.

    FastMCP derives the input schema from the handler signature, so each
    parameter shape gets its own signature.
    """

    async def invoke(**arguments) -> CallToolResult:
        envelope = await run_tool(client, tool.name, arguments)
        return CallToolResult.model_validate(envelope)

    if tool.accepts_period:
        date_arg = Annotated[str | None, Field(description=_parameter_description(tool, "date"))]
        period_arg = Annotated[
            str | None, Field(description=_parameter_description(tool, "period"))
        ]

        async def handler(date: date_arg = None, period: period_arg = None):
            return await invoke(date=date, period=period)

    elif tool.accepts_date:
        date_arg = Annotated[str | None, Field(description=_parameter_description(tool, "date"))]

        async def handler(date: date_arg = None):
            return await invoke(date=date)

    else:

        async def handler():
            return await invoke()

    handler.__name__ = tool.name
    handler.__doc__ = tool.description
    return handler


def create_server(config: Config, client: FitbitClient | None = None) -> FastMCP:
    """
    Create the MCP server with every catalog tool registered.

    Args:
        config (Config): Validated startup configuration.
        client (FitbitClient | None): Client to share between tools. Built from the
            configuration when omitted.
    """
    if client is None:
        client = FitbitClient(config.access_token, base_url=config.base_url)

    @asynccontextmanager
    async def lifespan(_app: FastMCP):
        """Close the shared HTTP client when the server stops."""
        try:
            yield
        finally:
            await client.aclose()

    mcp = FastMCP("Fitbit MCP", lifespan=lifespan, host=config.host, port=config.port)
    for tool in TOOLS:
        mcp.add_tool(_make_handler(client, tool), name=tool.name, description=tool.description)
    return mcp


def main(argv: Sequence[str] | None = None) -> None:
    """Load configuration and run the server, exiting with status 1 without a token."""
    load_dotenv()
    result = load_config(argv)
    if not result.ok:
        logger.error("Error: %s", result.error)
        sys.exit(1)

    config = result.config
    server = create_server(config)
    logger.info("Fitbit MCP %s initialized successfully with provided token", __version__)
    server.run(transport=config.transport)


# Run the server
if __name__ == "__main__":
    main()
