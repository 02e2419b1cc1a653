"""
Calendar arithmetic on ISO date strings.

Every function takes and returns ``YYYY-MM-DD`` strings so it can be fed
straight from form fields and database rows. Bad input never raises: a
malformed date is handed back unchanged (or mapped to a neutral result),
because half-typed form values pass through here on every keystroke.
"""

from datetime import date, timedelta
from typing import Optional

from loguru import logger

from .isodate import MAX_YEAR, MIN_YEAR, IsoDate, days_in_month


WEEKEND = (5, 6)  # Saturday, Sunday


def is_business_day(value: date) -> bool:
    """Monday to Friday; no holiday calendar."""
    return value.weekday() not in WEEKEND


def shift_months(value: IsoDate, count: int) -> Optional[IsoDate]:
    """
    Move ``value`` by ``count`` calendar months, clamping the day.

    Returns:
        The shifted date, or None if it falls outside years 1-9999
    """
    total = value.month_index + count
    year, month_offset = divmod(total, 12)
    if not MIN_YEAR <= year <= MAX_YEAR:
        return None

    month = month_offset + 1
    day = min(value.day, days_in_month(year, month))
    return IsoDate(year, month, day)


def add_calendar_months(date_str: str, count: int) -> str:
    """
    Add whole calendar months to a date.

    The day is kept unless the target month is shorter, in which case it is
    clamped to that month's last day (Jan 31 + 1 month is Feb 28/29).

    Args:
        date_str: ISO date
        count: Months to add, may be negative

    Returns:
        The shifted ISO date, or ``date_str`` unchanged if it is not a date
    """
    parsed = IsoDate.parse(date_str)
    if parsed is None:
        return date_str

    shifted = shift_months(parsed, count)
    if shifted is None:
        logger.warning(f"Month shift out of range: {date_str} + {count} months")
        return date_str

    return str(shifted)


def set_day_of_month(date_str: str, target_day: int) -> str:
    """
    Replace the day of a date, keeping it inside the month.

    Examples:
        >>> set_day_of_month("2023-02-10", 31)
        '2023-02-28'
    """
    parsed = IsoDate.parse(date_str)
    if parsed is None:
        return date_str

    day = max(1, min(target_day, parsed.days_in_month))
    return str(IsoDate(parsed.year, parsed.month, day))


def add_business_days(date_str: str, count: int) -> str:
    """
    Advance a date by ``count`` business days.

    Weekend days are stepped over and do not count. ``count`` must not be
    negative; a negative count leaves the date where it is.

    Args:
        date_str: ISO date
        count: Business days to add

    Returns:
        The resulting ISO date; ``""`` for an empty input and the input
        itself when it is not a date
    """
    if not date_str:
        return ""

    parsed = IsoDate.parse(date_str)
    if parsed is None:
        return date_str

    current = parsed.to_date()
    added = 0
    try:
        while added < count:
            current += timedelta(days=1)
            if is_business_day(current):
                added += 1
    except OverflowError:
        logger.warning(f"Business-day shift out of range: {date_str} + {count} days")
        return date_str

    return str(IsoDate.from_date(current))


def count_business_days(start_str: str, end_str: str) -> int:
    """
    Count business days after ``start_str`` up to and including ``end_str``.

    Returns:
        0 when either date is missing or ``end_str`` is not after ``start_str``
    """
    start = IsoDate.parse(start_str)
    end = IsoDate.parse(end_str)
    if start is None or end is None or end <= start:
        return 0

    current = start.to_date()
    last = end.to_date()
    count = 0
    while current < last:
        current += timedelta(days=1)
        if is_business_day(current):
            count += 1
    return count


def is_expired(issue_date: str, validity_days: int, today: Optional[str] = None) -> bool:
    """
    Check whether a document issued on ``issue_date`` is past its validity.

    A budget valid for 15 days is still valid on day 15 and expired on day 16.

    Args:
        issue_date: ISO issue date
        validity_days: Number of days the document stays valid
        today: Reference date (default: today on the local clock)

    Returns:
        True once more than ``validity_days`` whole days have elapsed; False
        when there is no usable issue date
    """
    issued = IsoDate.parse(issue_date)
    if issued is None:
        return False

    reference = IsoDate.parse(today) if today else IsoDate.today()
    if reference is None:
        return False

    elapsed = (reference.to_date() - issued.to_date()).days
    return elapsed > validity_days
