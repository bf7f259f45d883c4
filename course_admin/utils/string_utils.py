from typing import Iterable, Optional

from course_admin.config.settings import settings
from course_admin.utils.datetime_utils import millisecond_timestamp


def generate_student_number(
    timestamp_ms: Optional[int] = None,
    prefix: Optional[str] = None,
    digits: Optional[int] = None,
) -> str:
    """
    Build a student number from the prefix and the tail of a millisecond timestamp.

    Example: prefix "S", 6 digits, timestamp 1705312845123 -> "S845123".
    """
    timestamp_ms = millisecond_timestamp() if timestamp_ms is None else timestamp_ms
    prefix = settings.STUDENT_NUMBER_PREFIX if prefix is None else prefix
    digits = settings.STUDENT_NUMBER_DIGITS if digits is None else digits
    return f"{prefix}{str(timestamp_ms)[-digits:]}"


def contains_ignore_case(values: Iterable[Optional[str]], term: str) -> bool:
    """True if any non-empty value contains the term, ignoring case."""
    needle = term.lower()
    return any(value is not None and needle in str(value).lower() for value in values)


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"
