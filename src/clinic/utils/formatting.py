"""Display formatting for dashboard rows."""

from datetime import datetime


def format_date(value: datetime | str) -> str:
    """Format a timestamp the way the dashboard lists show it.

    Example:
        >>> format_date("2026-10-19T15:04:00+00:00")
        'Oct 19, 2026, 03:04 PM'
    """
    if isinstance(value, str):
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        value = datetime.fromisoformat(value)
    return f"{value:%b} {value.day}, {value.year}, {value:%I:%M %p}"
