"""
Reporting periods.

A period is a calendar window around a reference date: the day itself, the
Sunday-to-Saturday week, the month, the calendar quarter (Jan/Apr/Jul/Oct),
the semester (Jan/Jul) or the year. Dashboards and finance reports use these
to decide which transactions count as "current".
"""

from datetime import date
from enum import Enum
from typing import Optional, Tuple, Union

from .isodate import IsoDate, days_in_month


class Period(str, Enum):
    """Bucketing granularity relative to a reference date."""
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    QUARTER = "QUARTER"
    SEMESTER = "SEMESTER"
    YEAR = "YEAR"
    ALL = "ALL"


# Length in months of the calendar-aligned periods
_MONTH_SPANS = {
    Period.MONTH: 1,
    Period.QUARTER: 3,
    Period.SEMESTER: 6,
    Period.YEAR: 12,
}


def _month_window(reference: IsoDate, span: int) -> Tuple[IsoDate, IsoDate]:
    first_month = (reference.month - 1) // span * span + 1
    last_month = first_month + span - 1
    return (
        IsoDate(reference.year, first_month, 1),
        IsoDate(reference.year, last_month, days_in_month(reference.year, last_month)),
    )


def period_bounds(
    period: Union[Period, str],
    reference: IsoDate,
) -> Optional[Tuple[IsoDate, IsoDate]]:
    """
    Inclusive first and last day of the period containing ``reference``.

    Args:
        period: Period or its name (e.g. "QUARTER")
        reference: Date the window is anchored on

    Returns:
        (start, end) pair, or None for Period.ALL

    Raises:
        ValueError: If ``period`` is not a known period name
    """
    period = Period(period)

    if period is Period.ALL:
        return None

    if period is Period.DAY:
        return reference, reference

    if period is Period.WEEK:
        ref = reference.to_date()
        # weekday(): Monday=0 ... Sunday=6; weeks start on Sunday
        offset = (ref.weekday() + 1) % 7
        # Clamp to the representable range at year 1 and 9999
        start = date.fromordinal(max(ref.toordinal() - offset, 1))
        end = date.fromordinal(min(ref.toordinal() - offset + 6, date.max.toordinal()))
        return IsoDate.from_date(start), IsoDate.from_date(end)

    return _month_window(reference, _MONTH_SPANS[period])


def is_in_period(
    target_date: str,
    period: Union[Period, str],
    reference_date: Optional[str] = None,
) -> bool:
    """
    Check whether ``target_date`` falls in the ``period`` around ``reference_date``.

    Records without a usable date are included rather than dropped, so an
    incomplete transaction still shows up in the current totals.

    Args:
        target_date: ISO date being classified (a time suffix is ignored)
        period: Period or its name
        reference_date: ISO anchor date (default: today)

    Returns:
        True if the target is inside the window, always True for Period.ALL

    Examples:
        >>> is_in_period("2024-03-15", "QUARTER", "2024-02-01")
        True
        >>> is_in_period("2024-04-01", "QUARTER", "2024-02-01")
        False
    """
    if not target_date:
        return True

    period = Period(period)
    if period is Period.ALL:
        return True

    target = IsoDate.parse(target_date)
    if target is None:
        return True

    if reference_date is None:
        reference = IsoDate.today()
    else:
        reference = IsoDate.parse(reference_date)
        if reference is None:
            return True

    start, end = period_bounds(period, reference)
    return start <= target <= end
