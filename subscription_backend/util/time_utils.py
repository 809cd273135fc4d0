"""
Time utilities for the subscription backend.
Server-side clock helpers with consistent ISO 8601 formatting. Clients are never
trusted for time; every evaluation uses the values returned here.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def now() -> datetime:
    """
    Get current UTC datetime with timezone awareness.

    Returns:
        datetime: Current UTC datetime with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime to timezone-aware UTC.

    Naive values are assumed to already be UTC. Firestore returns
    ``DatetimeWithNanoseconds`` which is a datetime subclass and passes through.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso8601_z(dt: datetime) -> str:
    """
    Convert datetime to ISO 8601 string with 'Z' suffix for UTC.

    Args:
        dt: Datetime object to convert

    Returns:
        str: ISO 8601 formatted string with millisecond precision and 'Z' suffix

    Example:
        "2025-09-15T14:30:00.000Z"
    """
    dt = ensure_utc(dt)
    return dt.strftime('%Y-%m-%dT%H:%M:%S.') + f"{dt.microsecond // 1000:03d}Z"


def parse_iso8601_z(iso_string: str) -> datetime:
    """
    Parse ISO 8601 string to timezone-aware datetime.

    Args:
        iso_string: ISO 8601 formatted string

    Returns:
        datetime: Timezone-aware datetime object in UTC

    Raises:
        ValueError: If string format is invalid

    Example:
        parse_iso8601_z("2025-09-15T14:30:00Z") -> datetime(2025, 9, 15, 14, 30, 0, tzinfo=timezone.utc)
    """
    if not isinstance(iso_string, str) or not iso_string.strip():
        raise ValueError(f"Unable to parse ISO 8601 datetime: {iso_string!r}")

    # Handle various ISO 8601 formats
    formats = [
        '%Y-%m-%dT%H:%M:%SZ',           # 2025-09-15T14:30:00Z
        '%Y-%m-%dT%H:%M:%S.%fZ',        # 2025-09-15T14:30:00.123456Z
    ]

    for fmt in formats:
        try:
            dt = datetime.strptime(iso_string, fmt)
            return dt.replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    # Offsets such as +02:00 and fractional seconds of any width
    try:
        dt = datetime.fromisoformat(iso_string.replace('Z', '+00:00'))
        return ensure_utc(dt)
    except ValueError:
        pass

    raise ValueError(f"Unable to parse ISO 8601 datetime: {iso_string}")


def to_epoch_millis(dt: datetime) -> int:
    """
    Get milliseconds since Unix epoch for datetime.

    Args:
        dt: Datetime object

    Returns:
        int: Milliseconds since Unix epoch
    """
    return int(ensure_utc(dt).timestamp() * 1000)


def add_days(dt: datetime, days: int) -> datetime:
    """
    Add days to datetime while preserving timezone.

    Args:
        dt: Base datetime
        days: Days to add (can be negative)

    Returns:
        datetime: New datetime with days added
    """
    return dt + timedelta(days=days)


def latest(dt: Optional[datetime], reference: datetime) -> datetime:
    """Return the later of an optional datetime and a reference time."""
    if dt is None:
        return reference
    dt = ensure_utc(dt)
    reference = ensure_utc(reference)
    return dt if dt > reference else reference
