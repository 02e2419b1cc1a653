"""
Unit tests for the calendar engine.
"""

from datetime import date, timedelta

import pytest

from erp_core.dates import (
    IsoDate,
    Period,
    add_business_days,
    add_calendar_months,
    count_business_days,
    days_in_month,
    delivery_deadline,
    is_expired,
    is_in_period,
    period_bounds,
    recurring_due_dates,
    set_day_of_month,
    today_str,
)
from erp_core.errors import InvalidDateError


class TestIsoDate:
    """Test the validated date value type."""

    def test_parse_valid_date(self):
        """Test parsing a plain ISO date."""
        assert IsoDate.parse("2024-02-29") == IsoDate(2024, 2, 29)

    def test_parse_ignores_time_component(self):
        """Test that a timestamp suffix is dropped."""
        assert IsoDate.parse("2024-03-15T10:30:00") == IsoDate(2024, 3, 15)
        assert IsoDate.parse("2024-03-15 10:30:00") == IsoDate(2024, 3, 15)

    @pytest.mark.parametrize("text", [
        None, "", "abc", "2024-3-15", "2023-02-29", "2024-13-01", "2024-00-10", "0000-01-01",
        "15/03/2024",
    ])
    def test_parse_rejects_bad_input(self, text):
        """Test that malformed or impossible dates give None."""
        assert IsoDate.parse(text) is None

    def test_from_string_raises(self):
        """Test that strict parsing raises a ValueError subclass."""
        with pytest.raises(InvalidDateError, match="Invalid ISO date"):
            IsoDate.from_string("2024-02-30")
        with pytest.raises(ValueError):
            IsoDate.from_string("")

    def test_str_is_zero_padded(self):
        """Test the ISO string form."""
        assert str(IsoDate(987, 1, 5)) == "0987-01-05"

    def test_ordering(self):
        """Test that dates compare chronologically."""
        assert IsoDate(2023, 12, 31) < IsoDate(2024, 1, 1) < IsoDate(2024, 1, 2)

    def test_days_in_month(self):
        """Test month lengths including leap years."""
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28
        assert days_in_month(1900, 2) == 28
        assert days_in_month(2000, 2) == 29
        assert days_in_month(2023, 4) == 30
        assert days_in_month(2023, 12) == 31

    def test_today_str(self):
        """Test that today's string matches the local date."""
        assert today_str() == date.today().isoformat()


class TestAddCalendarMonths:
    """Test calendar month arithmetic."""

    def test_clamps_to_leap_february(self):
        """Test Jan 31 + 1 month in a leap year."""
        assert add_calendar_months("2024-01-31", 1) == "2024-02-29"

    def test_clamps_to_february(self):
        """Test Jan 31 + 1 month in a common year."""
        assert add_calendar_months("2023-01-31", 1) == "2023-02-28"

    def test_crosses_year_boundary(self):
        """Test forward and backward year rollover."""
        assert add_calendar_months("2023-11-15", 3) == "2024-02-15"
        assert add_calendar_months("2024-01-15", -1) == "2023-12-15"
        assert add_calendar_months("2024-05-31", -13) == "2023-04-30"

    def test_zero_months(self):
        """Test that adding zero months normalizes but keeps the date."""
        assert add_calendar_months("2024-03-15T08:00:00", 0) == "2024-03-15"

    @pytest.mark.parametrize("text", ["", "abc", "2024-13-01", "2024/01/31"])
    def test_malformed_input_returned_unchanged(self, text):
        """Test that bad input is handed back as-is."""
        assert add_calendar_months(text, 1) == text

    def test_out_of_range_returned_unchanged(self):
        """Test that results outside years 1-9999 leave the input alone."""
        assert add_calendar_months("9999-12-15", 1) == "9999-12-15"
        assert add_calendar_months("0001-01-15", -1) == "0001-01-15"

    def test_round_trip_never_increases_day(self):
        """Test that going out and back keeps or clamps the day."""
        samples = ["2024-01-31", "2023-03-30", "2024-02-29", "2022-08-15", "2021-12-31"]
        for text in samples:
            original = IsoDate.from_string(text)
            for n in (-14, -3, -1, 1, 2, 11, 25):
                back = IsoDate.from_string(add_calendar_months(add_calendar_months(text, n), -n))
                assert (back.year, back.month) == (original.year, original.month)
                assert back.day <= original.day

    def test_round_trip_exact_without_clamping(self):
        """Test that days valid in every month survive a round trip."""
        assert add_calendar_months(add_calendar_months("2024-05-28", 9), -9) == "2024-05-28"


class TestSetDayOfMonth:
    """Test day replacement."""

    def test_clamps_to_month_end(self):
        """Test that day 31 in February becomes the last day."""
        assert set_day_of_month("2023-02-10", 31) == "2023-02-28"
        assert set_day_of_month("2024-02-10", 31) == "2024-02-29"
        assert set_day_of_month("2023-04-05", 31) == "2023-04-30"

    def test_sets_valid_day(self):
        """Test a plain replacement."""
        assert set_day_of_month("2023-05-10", 20) == "2023-05-20"

    def test_clamps_below_one(self):
        """Test that non-positive days become the 1st."""
        assert set_day_of_month("2023-04-05", 0) == "2023-04-01"

    def test_malformed_input_returned_unchanged(self):
        """Test that bad input is handed back as-is."""
        assert set_day_of_month("", 10) == ""
        assert set_day_of_month("not-a-date", 10) == "not-a-date"


class TestBusinessDays:
    """Test business-day arithmetic."""

    def test_friday_plus_one_is_monday(self):
        """Test skipping a weekend."""
        assert add_business_days("2024-01-05", 1) == "2024-01-08"

    def test_full_week(self):
        """Test adding five business days from a Friday."""
        assert add_business_days("2024-01-05", 5) == "2024-01-12"

    def test_start_on_weekend(self):
        """Test that a Saturday start lands on Monday."""
        assert add_business_days("2024-01-06", 1) == "2024-01-08"
        assert add_business_days("2024-01-07", 1) == "2024-01-08"

    def test_zero_days(self):
        """Test that adding nothing keeps the date."""
        assert add_business_days("2024-01-06", 0) == "2024-01-06"

    def test_crosses_month_and_dst_boundaries(self):
        """Test stepping across months and clock changes."""
        assert add_business_days("2024-03-29", 2) == "2024-04-02"
        assert add_business_days("2024-10-25", 1) == "2024-10-28"

    def test_empty_and_malformed(self):
        """Test empty and malformed inputs."""
        assert add_business_days("", 3) == ""
        assert add_business_days("tomorrow", 3) == "tomorrow"

    def test_count_over_weekend(self):
        """Test counting from Friday to Monday."""
        assert count_business_days("2024-01-05", "2024-01-08") == 1

    def test_count_month(self):
        """Test counting all of January 2024 after the 1st."""
        assert count_business_days("2024-01-01", "2024-01-31") == 22

    def test_count_end_inclusive(self):
        """Test that the end date counts and the start does not."""
        assert count_business_days("2024-01-08", "2024-01-09") == 1
        assert count_business_days("2024-01-06", "2024-01-07") == 0

    def test_count_empty_ranges(self):
        """Test same-day and reversed ranges."""
        assert count_business_days("2024-01-10", "2024-01-10") == 0
        assert count_business_days("2024-01-10", "2024-01-02") == 0
        assert count_business_days("", "2024-01-02") == 0
        assert count_business_days("2024-01-02", "") == 0
        assert count_business_days("garbage", "2024-01-02") == 0

    def test_count_matches_add(self):
        """Test that counting undoes adding for weekday starts."""
        for n in range(0, 15):
            end = add_business_days("2024-02-07", n)
            assert count_business_days("2024-02-07", end) == n


class TestIsInPeriod:
    """Test reporting-period membership."""

    def test_quarter(self):
        """Test calendar-aligned quarters."""
        assert is_in_period("2024-03-15", "QUARTER", "2024-02-01") is True
        assert is_in_period("2024-04-01", "QUARTER", "2024-02-01") is False
        assert is_in_period("2024-12-31", Period.QUARTER, "2024-10-01") is True

    def test_semester(self):
        """Test calendar-aligned semesters."""
        assert is_in_period("2024-06-30", "SEMESTER", "2024-01-10") is True
        assert is_in_period("2024-07-01", "SEMESTER", "2024-01-10") is False
        assert is_in_period("2024-07-01", "SEMESTER", "2024-12-10") is True

    def test_day_month_year(self):
        """Test the simple granularities."""
        assert is_in_period("2024-03-15", "DAY", "2024-03-15") is True
        assert is_in_period("2024-03-16", "DAY", "2024-03-15") is False
        assert is_in_period("2024-03-01", "MONTH", "2024-03-31") is True
        assert is_in_period("2023-03-01", "MONTH", "2024-03-31") is False
        assert is_in_period("2024-12-31", "YEAR", "2024-01-01") is True
        assert is_in_period("2025-01-01", "YEAR", "2024-01-01") is False

    def test_week_runs_sunday_to_saturday(self):
        """Test the week window around a Wednesday."""
        reference = "2024-03-13"  # Wednesday
        assert is_in_period("2024-03-10", "WEEK", reference) is True   # Sunday
        assert is_in_period("2024-03-16", "WEEK", reference) is True   # Saturday
        assert is_in_period("2024-03-09", "WEEK", reference) is False
        assert is_in_period("2024-03-17", "WEEK", reference) is False

    def test_week_anchored_on_sunday(self):
        """Test that a Sunday reference starts its own week."""
        assert is_in_period("2024-03-10", "WEEK", "2024-03-10") is True
        assert is_in_period("2024-03-09", "WEEK", "2024-03-10") is False

    def test_all_and_missing_dates_are_included(self):
        """Test the inclusive-by-default policy."""
        assert is_in_period("1999-01-01", "ALL", "2024-01-01") is True
        assert is_in_period("", "MONTH", "2024-01-01") is True
        assert is_in_period("garbage", "MONTH", "2024-01-01") is True
        assert is_in_period("2024-01-01", "MONTH", "garbage") is True

    def test_timestamp_target(self):
        """Test that a timestamp is classified by its date part."""
        assert is_in_period("2024-03-15T23:59:59", "MONTH", "2024-03-01") is True

    def test_default_reference_is_today(self):
        """Test that the reference defaults to today."""
        today = date.today()
        assert is_in_period(today.isoformat(), "DAY") is True
        assert is_in_period((today - timedelta(days=1)).isoformat(), "DAY") is False

    def test_unknown_period(self):
        """Test that an unknown period name is a programming error."""
        with pytest.raises(ValueError):
            is_in_period("2024-01-01", "FORTNIGHT", "2024-01-01")

    def test_empty_target_with_unknown_period(self):
        """Test that an empty target is included before the period is checked."""
        assert is_in_period("", "FORTNIGHT") is True
        assert is_in_period(None, "FORTNIGHT", "2024-01-01") is True

    def test_period_bounds(self):
        """Test the inclusive windows directly."""
        ref = IsoDate(2024, 8, 20)
        assert period_bounds("QUARTER", ref) == (IsoDate(2024, 7, 1), IsoDate(2024, 9, 30))
        assert period_bounds("SEMESTER", ref) == (IsoDate(2024, 7, 1), IsoDate(2024, 12, 31))
        assert period_bounds("MONTH", IsoDate(2024, 2, 3)) == (IsoDate(2024, 2, 1), IsoDate(2024, 2, 29))
        assert period_bounds("ALL", ref) is None


class TestIsExpired:
    """Test validity expiry."""

    def test_issued_today_is_valid(self):
        """Test that a document issued today is not expired."""
        assert is_expired(today_str(), 0) is False
        assert is_expired(today_str(), 15) is False

    def test_boundary(self):
        """Test the last valid day and the first expired day."""
        assert is_expired("2024-01-01", 15, today="2024-01-16") is False
        assert is_expired("2024-01-01", 15, today="2024-01-17") is True

    def test_against_real_clock(self):
        """Test expiry relative to the local clock."""
        issued = (date.today() - timedelta(days=31)).isoformat()
        assert is_expired(issued, 30) is True
        assert is_expired(issued, 31) is False

    def test_missing_issue_date_never_expires(self):
        """Test that missing dates are not treated as expired."""
        assert is_expired("", 0) is False
        assert is_expired("soon", 0) is False


class TestSchedules:
    """Test installment and delivery schedules."""

    def test_due_dates_return_to_anchor_day(self):
        """Test that clamping does not drift across installments."""
        assert recurring_due_dates("2024-01-31", 4) == [
            "2024-01-31", "2024-02-29", "2024-03-31", "2024-04-30",
        ]

    def test_due_dates_fixed_day(self):
        """Test billing on a fixed day of month."""
        assert recurring_due_dates("2023-01-10", 3, due_day=31) == [
            "2023-01-31", "2023-02-28", "2023-03-31",
        ]

    def test_due_dates_bad_input(self):
        """Test empty schedules."""
        assert recurring_due_dates("", 3) == []
        assert recurring_due_dates("2024-01-01", 0) == []

    def test_delivery_deadline(self):
        """Test deadlines in business days."""
        assert delivery_deadline("2024-01-05", 10) == "2024-01-19"
        assert delivery_deadline("2024-01-05", None) == "2024-01-05"
        assert delivery_deadline("2024-01-05", 0) == "2024-01-05"
