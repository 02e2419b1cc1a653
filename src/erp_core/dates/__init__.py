"""
Calendar engine.

Pure date arithmetic on ISO ``YYYY-MM-DD`` strings: month and business-day
offsets, reporting-period membership and expiry checks.
"""

from .isodate import IsoDate, days_in_month, is_leap_year, today_str
from .arithmetic import (
    add_business_days,
    add_calendar_months,
    count_business_days,
    is_business_day,
    is_expired,
    set_day_of_month,
    shift_months,
)
from .periods import Period, is_in_period, period_bounds
from .schedules import delivery_deadline, recurring_due_dates

__all__ = [
    # Value type
    "IsoDate",
    "days_in_month",
    "is_leap_year",
    "today_str",
    # Arithmetic
    "add_business_days",
    "add_calendar_months",
    "count_business_days",
    "is_business_day",
    "is_expired",
    "set_day_of_month",
    "shift_months",
    # Periods
    "Period",
    "is_in_period",
    "period_bounds",
    # Schedules
    "delivery_deadline",
    "recurring_due_dates",
]
