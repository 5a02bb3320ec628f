"""
Date and time utility functions for MedScribe application.

Persisted timestamps use millisecond precision and a ``Z`` suffix
(``2024-03-01T14:05:09.123Z``) so documents written by earlier browser
versions of the scribe load and re-save byte-for-byte.
"""

from datetime import datetime, timezone


def get_current_timestamp() -> datetime:
    """Get current UTC timestamp truncated to milliseconds."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def format_iso_timestamp(timestamp: datetime) -> str:
    """Format a timestamp as ISO-8601 UTC with milliseconds and a Z suffix."""
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    millis = timestamp.microsecond // 1000
    return timestamp.strftime("%Y-%m-%dT%H:%M:%S.") + f"{millis:03d}Z"


def parse_iso_timestamp(timestamp_str: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    value = timestamp_str.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_local_timestamp(timestamp: datetime) -> str:
    """Human readable local time, e.g. ``3/1/2024, 2:05:09 PM``."""
    local = timestamp.astimezone() if timestamp.tzinfo is not None else timestamp
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {suffix}"
    )
