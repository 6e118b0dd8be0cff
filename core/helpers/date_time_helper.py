"""
date_time_helper.py

Provides helper functions for parsing and formatting RFC 3339 / ISO 8601
timestamps as they appear in OOXML document properties
(e.g. ``2023-01-01T12:00:00Z``).

All features and modules should use ONLY these helpers for date/time logic.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

# full-date "T" full-time, RFC 3339 section 5.6
_RFC3339_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"[Tt ]"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)


def _parse_offset(raw: str) -> timezone:
    if raw in ("Z", "z"):
        return timezone.utc
    sign = -1 if raw[0] == "-" else 1
    hours, minutes = int(raw[1:3]), int(raw[4:6])
    if hours > 23 or minutes > 59:
        raise ValueError(f"invalid UTC offset {raw!r}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_rfc3339(value: str) -> datetime:
    """
    Parses an RFC 3339 timestamp into an aware datetime.

    A UTC offset (``Z`` or ``+HH:MM``) is required. A leap second (``:60``)
    is accepted and folded onto ``:59``.

    :param value: Timestamp string, e.g. "2023-01-01T12:00:00Z"
    :return: timezone-aware datetime
    :raises ValueError: if the string is not a valid RFC 3339 timestamp
    """
    match = _RFC3339_RE.match(value.strip()) if value else None
    if match is None:
        raise ValueError(f"not an RFC 3339 timestamp: {value!r}")

    second = int(match["second"])
    if second == 60:
        second = 59
    fraction = (match["fraction"] or "")[:6].ljust(6, "0")

    return datetime(
        int(match["year"]),
        int(match["month"]),
        int(match["day"]),
        int(match["hour"]),
        int(match["minute"]),
        second,
        int(fraction),
        tzinfo=_parse_offset(match["offset"]),
    )


def is_rfc3339(value: str) -> bool:
    """Returns True if *value* parses as an RFC 3339 timestamp."""
    try:
        parse_rfc3339(value)
    except ValueError:
        return False
    return True

