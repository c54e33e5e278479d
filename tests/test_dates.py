"""
Unit tests for fitbit_mcp_server.utils.dates.
"""

import re
from datetime import datetime

from fitbit_mcp_server.utils.dates import normalize_date


def test_normalize_date_returns_given_date_verbatim():
    assert normalize_date("2023-12-31") == "2023-12-31"


def test_normalize_date_does_not_validate():
    assert normalize_date("not-a-date") == "not-a-date"


def test_normalize_date_defaults_to_today(frozen_today):
    assert normalize_date() == frozen_today
    assert normalize_date(None) == frozen_today


def test_normalize_date_treats_empty_string_as_missing(frozen_today):
    assert normalize_date("") == frozen_today


def test_normalize_date_uses_iso_format():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", normalize_date())


def test_normalize_date_uses_local_calendar(monkeypatch):
    """
    Test today's date comes from the local clock, not a UTC conversion.
    """
    class LateEvening(datetime):
        @classmethod
        def now(cls, tz=None):
            return cls(2024, 3, 15, 23, 59)

    monkeypatch.setattr("fitbit_mcp_server.utils.dates.datetime", LateEvening)

    assert normalize_date() == "2024-03-15"
