"""DateTime formatting utilities."""

from datetime import UTC, datetime

from ...core.constants import CreditEligibility, DateFormats


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, matching persisted timestamps."""
    return datetime.now(UTC).replace(tzinfo=None)


def format_datetime(dt: datetime, format_str: str = DateFormats.DATETIME) -> str:
    """Format datetime to string.

    Args:
        dt: Datetime object to format
        format_str: Format string (default: "YYYY-MM-DD HH:MM:SS")

    Returns:
        Formatted datetime string

    Examples:
        >>> format_datetime(datetime(2024, 1, 15, 10, 30, 0))
        "2024-01-15 10:30:00"
        >>> format_datetime(datetime(2024, 1, 15), "%Y-%m-%d")
        "2024-01-15"
    """
    if not dt:
        return ""
    return dt.strftime(format_str)


def parse_datetime(date_string: str, format_str: str = DateFormats.DATETIME) -> datetime | None:
    """Parse a datetime string strictly.

    The string must match the format exactly and reformat to the same text,
    so zero-padding drift such as "2024-1-5 1:2:3" is rejected.

    Args:
        date_string: Date string to parse
        format_str: Format string to use for parsing

    Returns:
        Datetime object or None if parsing fails

    Examples:
        >>> parse_datetime("2024-01-15 10:30:00")
        datetime(2024, 1, 15, 10, 30)
        >>> parse_datetime("2024-02-30 10:30:00")
        None
    """
    if not date_string:
        return None
    try:
        parsed = datetime.strptime(date_string, format_str)
    except (ValueError, TypeError):
        return None

    if parsed.strftime(format_str) != date_string:
        return None

    return parsed


def whole_months_between(start: datetime, end: datetime) -> int:
    """Count the whole months elapsed from start to end.

    Equivalent to years * 12 + months of the calendar difference: a month
    only counts once the day-of-month and time of `start` have been reached
    again. Returns 0 when end is before start.

    Args:
        start: Earlier instant
        end: Later instant

    Returns:
        Number of whole months elapsed

    Examples:
        >>> whole_months_between(datetime(2024, 1, 15), datetime(2024, 7, 15))
        6
        >>> whole_months_between(datetime(2024, 1, 15), datetime(2024, 7, 14, 23, 59, 59))
        5
    """
    if end <= start:
        return 0

    months = (
        (end.year - start.year) * CreditEligibility.MONTHS_PER_YEAR
        + (end.month - start.month)
    )

    if (end.day, end.time()) < (start.day, start.time()):
        months -= 1

    return max(months, 0)
