"""
ISO calendar date value type.

Dates cross every boundary of the application as ``YYYY-MM-DD`` strings.
:class:`IsoDate` is the validated form used internally: once constructed, the
triple is guaranteed to name a real calendar day, so arithmetic never has to
re-check it.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..errors import InvalidDateError


# Date part, optionally followed by a time component ("2024-03-15T10:00:00")
ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:[T ].*)?$")

MIN_YEAR = 1
MAX_YEAR = 9999


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """
    Number of days in a month.

    Args:
        year: Calendar year
        month: Month number, 1-12

    Returns:
        28, 29, 30 or 31
    """
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


@dataclass(frozen=True, order=True)
class IsoDate:
    """
    A calendar date.

    Instances are built through :meth:`parse`, :meth:`from_string` or
    :meth:`from_date`; ``str()`` gives back the ISO form.

    Attributes:
        year: Calendar year (1-9999)
        month: Month number (1-12)
        day: Day of month, always valid for ``month``
    """
    year: int
    month: int
    day: int

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["IsoDate"]:
        """
        Lenient parse.

        Args:
            text: ISO date string, possibly with a trailing time component

        Returns:
            IsoDate, or None if ``text`` is empty or not a real date
        """
        if not text or not isinstance(text, str):
            return None

        match = ISO_DATE_PATTERN.match(text.strip())
        if not match:
            return None

        year, month, day = (int(part) for part in match.groups())
        if year < MIN_YEAR or not 1 <= month <= 12:
            return None
        if not 1 <= day <= days_in_month(year, month):
            return None

        return cls(year, month, day)

    @classmethod
    def from_string(cls, text: str) -> "IsoDate":
        """
        Strict parse.

        Raises:
            InvalidDateError: If ``text`` is not an ISO date
        """
        parsed = cls.parse(text)
        if parsed is None:
            raise InvalidDateError(text)
        return parsed

    @classmethod
    def from_date(cls, value: date) -> "IsoDate":
        return cls(value.year, value.month, value.day)

    @classmethod
    def today(cls) -> "IsoDate":
        """Today on the local wall clock."""
        return cls.from_date(date.today())

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    @property
    def month_index(self) -> int:
        """Zero-based linear month count (``year * 12 + month - 1``)."""
        return self.year * 12 + (self.month - 1)

    @property
    def days_in_month(self) -> int:
        return days_in_month(self.year, self.month)

    def weekday(self) -> int:
        """Monday is 0, Sunday is 6."""
        return self.to_date().weekday()

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def today_str() -> str:
    """Today's date as ``YYYY-MM-DD``."""
    return str(IsoDate.today())
