"""
Tool catalog for the Fitbit MCP Server.

Each ToolDefinition maps an MCP tool name to the Fitbit endpoint(s) it reads and
to the function that reshapes the decoded responses into the tool output. The
catalog is built once at import time and looked up by name.

Tool groups:
    - Profile tools (no parameters): getUserProfile, getLifetimeStats,
      getUserSettings, getDevices, getBadges
    - Daily log tools (date): getActivities, getSleepLogs, getFoodLogs, getWaterLogs
    - Time series tools (date, period): getHeartRate, getSteps, getFloorsClimbed,
      getDistance, getCalories, getActiveZoneMinutes
    - getBodyMeasurements (date, period), which reads the weight and fat logs
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from fitbit_mcp_server.client import FitbitClient, FitbitError
from fitbit_mcp_server.utils.dates import normalize_date
from fitbit_mcp_server.utils.formatting import format_error, format_success

logger = logging.getLogger(__name__)

DEFAULT_PERIOD = "1d"
PERIODS = ("1d", "7d", "30d", "1w", "1m")

DATE_DESCRIPTION = "Date in YYYY-MM-DD format. If not specified, will use today."

EndpointResolver = Callable[[str | None, str | None], tuple[str, ...]]
Reshaper = Callable[[str | None, list[Any]], Any]


@dataclass(frozen=True)
class ToolParameter:
    """An optional string argument accepted by a tool."""

    name: str
    description: str
    optional: bool = True


@dataclass(frozen=True)
class ToolDefinition:
    """
    A catalog entry.

    Attributes:
        name: MCP tool name, unique in the catalog.
        description: Human readable summary shown to MCP clients.
        parameters: Accepted arguments; anything else passed by a caller is ignored.
        endpoints: Resolves (date, period) to the paths to fetch, in request order.
        reshape: Builds the tool output from (date, one decoded body per endpoint).
    """

    name: str
    description: str
    parameters: tuple[ToolParameter, ...]
    endpoints: EndpointResolver
    reshape: Reshaper

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return tuple(parameter.name for parameter in self.parameters)

    @property
    def accepts_date(self) -> bool:
        return "date" in self.parameter_names

    @property
    def accepts_period(self) -> bool:
        return "period" in self.parameter_names


def _dict_field(data: Any, key: str) -> dict[str, Any]:
    """Return data[key] if it is an object, else an empty dict."""
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def _list_field(data: Any, key: str) -> list[Any]:
    """Return data[key] if it is an array, else an empty list."""
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, list) else []


def _period_parameter(description: str) -> ToolParameter:
    return ToolParameter("period", description)


def _profile_tool(
    name: str,
    description: str,
    path: str,
    reshape: Callable[[Any], Any] | None = None,
) -> ToolDefinition:
    def _reshape(_date: str | None, responses: list[Any]) -> Any:
        body = responses[0]
        return reshape(body) if reshape is not None else body

    return ToolDefinition(
        name=name,
        description=description,
        parameters=(),
        endpoints=lambda _date, _period: (path,),
        reshape=_reshape,
    )


def _daily_log_tool(
    name: str, description: str, path: str, list_key: str, output_key: str
) -> ToolDefinition:
    """A tool reading one dated log plus its summary. `path` holds a {date} placeholder."""

    def _reshape(date: str | None, responses: list[Any]) -> dict[str, Any]:
        body = responses[0]
        return {
            "date": date,
            output_key: _list_field(body, list_key),
            "summary": _dict_field(body, "summary"),
        }

    return ToolDefinition(
        name=name,
        description=description,
        parameters=(ToolParameter("date", DATE_DESCRIPTION),),
        endpoints=lambda date, _period: (path.format(date=date),),
        reshape=_reshape,
    )


def _time_series_tool(
    name: str,
    description: str,
    resource: str,
    output_key: str,
    period_description: str = "Period for data: 1d, 7d, 30d, 1w, 1m",
) -> ToolDefinition:
    """A tool reading activities-<resource> and its intraday series."""
    series_key = f"activities-{resource}"

    def _endpoints(date: str | None, period: str | None) -> tuple[str, ...]:
        return (f"/user/-/activities/{resource}/date/{date}/{period or DEFAULT_PERIOD}.json",)

    def _reshape(date: str | None, responses: list[Any]) -> dict[str, Any]:
        body = responses[0]
        return {
            "date": date,
            output_key: _list_field(body, series_key),
            "intraday": _dict_field(body, f"{series_key}-intraday"),
        }

    return ToolDefinition(
        name=name,
        description=description,
        parameters=(
            ToolParameter("date", DATE_DESCRIPTION),
            _period_parameter(period_description),
        ),
        endpoints=_endpoints,
        reshape=_reshape,
    )


def _body_measurement_endpoints(date: str | None, period: str | None) -> tuple[str, ...]:
    # Weight and fat logs take no period segment for a single day.
    suffix = f"/{period}" if period else ""
    return (
        f"/user/-/body/log/weight/date/{date}{suffix}.json",
        f"/user/-/body/log/fat/date/{date}{suffix}.json",
    )


def _reshape_body_measurements(date: str | None, responses: list[Any]) -> dict[str, Any]:
    weight_body, fat_body = responses
    return {
        "date": date,
        "weight": _list_field(weight_body, "weight"),
        "fat": _list_field(fat_body, "fat"),
    }


TOOLS: tuple[ToolDefinition, ...] = (
    _profile_tool(
        "getUserProfile",
        "Get the Fitbit user's profile information",
        "/user/-/profile.json",
    ),
    _daily_log_tool(
        "getActivities",
        "Get activities and the activity summary for a day",
        "/user/-/activities/date/{date}.json",
        list_key="activities",
        output_key="activities",
    ),
    _daily_log_tool(
        "getSleepLogs",
        "Get sleep logs and the sleep summary for a day",
        "/user/-/sleep/date/{date}.json",
        list_key="sleep",
        output_key="sleep",
    ),
    _time_series_tool(
        "getHeartRate",
        "Get heart rate data, including intraday data when available",
        "heart",
        output_key="heartRate",
        period_description="Period for heart rate data: 1d, 7d, 30d",
    ),
    _time_series_tool(
        "getSteps",
        "Get step counts, including intraday data when available",
        "steps",
        output_key="steps",
        period_description="Period for step data: 1d, 7d, 30d, 1w, 1m",
    ),
    ToolDefinition(
        name="getBodyMeasurements",
        description="Get weight and body fat logs",
        parameters=(
            ToolParameter("date", DATE_DESCRIPTION),
            _period_parameter("Period for body data: 1d, 7d, 30d, 1w, 1m"),
        ),
        endpoints=_body_measurement_endpoints,
        reshape=_reshape_body_measurements,
    ),
    _daily_log_tool(
        "getFoodLogs",
        "Get logged foods and the nutrition summary for a day",
        "/user/-/foods/log/date/{date}.json",
        list_key="foods",
        output_key="meals",
    ),
    _daily_log_tool(
        "getWaterLogs",
        "Get water logs and the water summary for a day",
        "/user/-/foods/log/water/date/{date}.json",
        list_key="water",
        output_key="water",
    ),
    _profile_tool(
        "getLifetimeStats",
        "Get lifetime totals and best achievements",
        "/user/-/activities.json",
        reshape=lambda body: {
            "lifetime": _dict_field(body, "lifetime"),
            "best": _dict_field(body, "best"),
        },
    ),
    _profile_tool(
        "getUserSettings",
        "Get the user's account settings",
        "/user/-/profile.json",
        reshape=lambda body: {"user": _dict_field(body, "user")},
    ),
    _time_series_tool(
        "getFloorsClimbed",
        "Get floors climbed, including intraday data when available",
        "floors",
        output_key="floors",
    ),
    _time_series_tool(
        "getDistance",
        "Get distance travelled, including intraday data when available",
        "distance",
        output_key="distance",
    ),
    _time_series_tool(
        "getCalories",
        "Get calories burned, including intraday data when available",
        "calories",
        output_key="calories",
    ),
    _time_series_tool(
        "getActiveZoneMinutes",
        "Get active zone minutes, including intraday data when available",
        "active-zone-minutes",
        output_key="activeZones",
    ),
    _profile_tool(
        "getDevices",
        "Get the devices paired with the account",
        "/user/-/devices.json",
    ),
    _profile_tool(
        "getBadges",
        "Get badges and achievements earned by the user",
        "/user/-/badges.json",
    ),
)

_TOOLS_BY_NAME: dict[str, ToolDefinition] = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> ToolDefinition:
    """Look up a tool by name. Raises KeyError for unknown names."""
    return _TOOLS_BY_NAME[name]


async def run_tool(
    client: FitbitClient, name: str, arguments: dict[str, Any] | None = None
) -> dict[str, Any]:
    """
    Invoke a catalog tool and return its result envelope.

    Unknown argument names are dropped. A missing date becomes today's date and a
    missing period is left to the endpoint resolver. Endpoints are fetched one after
    the other; the first failure aborts the call and becomes an error envelope.

    Args:
        client (FitbitClient): Client used for every request.
        name (str): Tool name from the catalog.
        arguments (dict[str, Any] | None): Arguments supplied by the caller.

    Returns:
        dict[str, Any]: {"content": [...]} on success, with "isError": True on failure.
    """
    tool = get_tool(name)
    arguments = {
        key: value
        for key, value in (arguments or {}).items()
        if key in tool.parameter_names and value is not None
    }
    date = normalize_date(arguments.get("date")) if tool.accepts_date else None
    period = arguments.get("period") if tool.accepts_period else None
    logger.debug("Running %s (date=%s, period=%s)", name, date, period)

    try:
        responses = []
        for path in tool.endpoints(date, period):
            responses.append(await client.fetch_json(path))
        return format_success(tool.reshape(date, responses))
    except FitbitError as e:
        return format_error(e)
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Unexpected error in %s", name)
        return format_error(e)
