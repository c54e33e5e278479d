"""Date helpers for Fitbit endpoint paths."""

from datetime import datetime


def normalize_date(date: str | None = None) -> str:
    """Return the given date verbatim, or today's date as YYYY-MM-DD.

    "Today" is the host's local calendar date, not the UTC date, so shortly after
    local midnight it can differ from what a UTC clock would give.

    The value is not validated; a malformed date is left for the Fitbit API to reject.
    """
    if date:
        return date
    return datetime.now().isoformat().split("T")[0]
