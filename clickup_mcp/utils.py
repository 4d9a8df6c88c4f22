# =============================================================================
# ClickUp MCP Server - Utilities
# =============================================================================
"""
Utility functions for the ClickUp MCP server.

ClickUp encodes every timestamp as epoch milliseconds, usually as a string.
These helpers parse them leniently and render them in the formats the
markdown output and the CSV export use.
"""

import re
from datetime import datetime, timezone
from typing import Any, Optional

_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


# -----------------------------------------------------------------------------
# Date/Time Utilities
# -----------------------------------------------------------------------------
def parse_epoch_millis(value: Any) -> Optional[int]:
    """
    Parse an epoch-millisecond value.

    Accepts ints, floats and strings. Strings are read up to the first
    non-digit character, so "1609459200000.0" parses as 1609459200000.

    Args:
        value: Raw timestamp value.

    Returns:
        Milliseconds since the epoch, or None if nothing parses.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)

    match = _LEADING_INT_PATTERN.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def millis_to_datetime(value: Any) -> Optional[datetime]:
    """
    Convert an epoch-millisecond value to an aware UTC datetime.

    Args:
        value: Raw timestamp value.

    Returns:
        The UTC datetime, or None if the value does not parse or is out of
        range.
    """
    millis = parse_epoch_millis(value)
    if millis is None:
        return None
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def format_iso_timestamp(value: Any) -> str:
    """
    Render a timestamp as ISO 8601 with milliseconds, e.g.
    "2021-01-01T00:00:00.000Z".

    Args:
        value: Raw timestamp value.

    Returns:
        The ISO 8601 string, or "" if the value is empty or invalid.
    """
    if not value:
        return ""
    dt = millis_to_datetime(value)
    if dt is None:
        return ""
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_iso_date(value: Any) -> str:
    """
    Render a timestamp as a UTC calendar date, e.g. "2021-01-01".

    Args:
        value: Raw timestamp value.

    Returns:
        The date string, or "" if the value is invalid.
    """
    dt = millis_to_datetime(value)
    if dt is None:
        return ""
    return dt.strftime("%Y-%m-%d")


def format_date(value: Any) -> str:
    """
    Render a timestamp for markdown output, e.g. "2021-01-01 00:00:00 UTC".

    Args:
        value: Raw timestamp value.

    Returns:
        The formatted date, or "Not set" if the value is empty or invalid.
    """
    if not value:
        return "Not set"
    dt = millis_to_datetime(value)
    if dt is None:
        return "Not set"
    return dt.strftime("%Y-%m-%d %H:%M:%S") + " UTC"
