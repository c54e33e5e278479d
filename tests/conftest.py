"""
Shared pytest fixtures for Fitbit MCP Server tests.
"""

import pathlib
import sys
from datetime import datetime

import httpx
import pytest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from fitbit_mcp_server.client import FitbitClient, UpstreamError  # pylint: disable=wrong-import-position


class FakeClient:
    """Stands in for FitbitClient, recording every requested path.

    `responses` maps a path to a decoded body or to an exception to raise.
    Paths without an entry return an empty object.
    """

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.paths = []

    async def fetch_json(self, path):
        self.paths.append(path)
        response = self.responses.get(path, {})
        if isinstance(response, Exception):
            raise response
        return response


class FixedDatetime(datetime):
    """datetime with the clock frozen at 2024-03-15 10:30 local time."""

    @classmethod
    def now(cls, tz=None):
        return cls(2024, 3, 15, 10, 30, tzinfo=tz)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def frozen_today(monkeypatch):
    monkeypatch.setattr("fitbit_mcp_server.utils.dates.datetime", FixedDatetime)
    return "2024-03-15"


@pytest.fixture
def unauthorized():
    return UpstreamError(401, "Unauthorized")


@pytest.fixture
def make_mock_client():
    """Build a FitbitClient whose requests are answered by `handler`."""

    def _make(handler, token="test-token"):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return FitbitClient(token, base_url="https://api.fitbit.com/1", http_client=http_client)

    return _make
