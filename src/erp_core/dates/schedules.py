"""Payment and delivery schedules built on the calendar arithmetic."""

from typing import List, Optional

from .arithmetic import add_business_days, add_calendar_months, set_day_of_month
from .isodate import IsoDate


def recurring_due_dates(
    first_due: str,
    occurrences: int,
    due_day: Optional[int] = None,
) -> List[str]:
    """
    Monthly due dates for a recurring payment or an installment plan.

    Each date is computed from ``first_due`` rather than from the previous
    one, so a plan starting on the 31st returns to the 31st after February.

    Args:
        first_due: ISO date of the first installment
        occurrences: Number of installments
        due_day: Fixed day of month to bill on (clamped to each month)

    Returns:
        ISO dates, one per installment; empty if ``first_due`` is not a date

    Examples:
        >>> recurring_due_dates("2024-01-31", 3)
        ['2024-01-31', '2024-02-29', '2024-03-31']
    """
    if IsoDate.parse(first_due) is None:
        return []

    dates = []
    for index in range(max(occurrences, 0)):
        due = add_calendar_months(first_due, index)
        if due_day is not None:
            due = set_day_of_month(due, due_day)
        dates.append(due)
    return dates


def delivery_deadline(start_date: str, business_days: Optional[int]) -> str:
    """
    Order deadline from a budget's delivery time in business days.

    A missing delivery time leaves the start date as the deadline.
    """
    if not business_days or business_days < 0:
        return start_date
    return add_business_days(start_date, business_days)
