from datetime import date, datetime, timezone
from typing import Optional, Union


def utc_now() -> datetime:
    """
    Get current UTC datetime as a timezone-aware datetime.

    Returns:
        datetime: Current UTC datetime with timezone info
    """
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime object to UTC timezone-aware datetime.

    Args:
        dt: Datetime object to convert

    Returns:
        datetime: UTC timezone-aware datetime
    """
    if dt.tzinfo is None:
        # Assume naive datetime is in UTC
        return dt.replace(tzinfo=timezone.utc)
    else:
        return dt.astimezone(timezone.utc)


def to_iso_string(value: Union[date, datetime]) -> str:
    """
    Serialize a picked date for the wire.

    Datetimes are normalized to UTC first; plain dates are sent as YYYY-MM-DD.
    """
    if isinstance(value, datetime):
        return to_utc(value).isoformat()
    return value.isoformat()


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a backend date string into a date.

    Accepts plain dates ("2024-01-15") as well as full timestamps with or
    without a trailing "Z". Returns None for empty or unparseable input.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def millisecond_timestamp() -> int:
    """Current UTC time in milliseconds since the epoch."""
    return int(utc_now().timestamp() * 1000)
