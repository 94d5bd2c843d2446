"""Proleptic-Gregorian calendar dates for deck titles and the calendar view.

:class:`CalendarDate` is a small immutable value type.  Arithmetic returns
new instances; nothing here reads the clock except :meth:`CalendarDate.today`
and the default reference of :meth:`CalendarDate.fuzzy`.
"""

import datetime
import re
from dataclasses import dataclass

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

_MONTH_LENGTHS = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]

# Sakamoto's month offsets
_SAKAMOTO = [0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4]

_ISO_PREFIX_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")

MIN_YEAR = 1000
MAX_YEAR = 3000


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def month_days(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _MONTH_LENGTHS[month - 1]


@dataclass(frozen=True, order=True)
class CalendarDate:
    year: int
    month: int
    day: int

    def __post_init__(self):
        if not MIN_YEAR <= self.year <= MAX_YEAR:
            raise ValueError(f"year out of range: {self.year}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"month out of range: {self.month}")
        if not 1 <= self.day <= month_days(self.year, self.month):
            raise ValueError(f"day out of range: {self.year}-{self.month}-{self.day}")

    # --- Construction ---

    @classmethod
    def from_date(cls, value: datetime.date) -> "CalendarDate":
        return cls(value.year, value.month, value.day)

    @classmethod
    def today(cls) -> "CalendarDate":
        return cls.from_date(datetime.date.today())

    @classmethod
    def parse(cls, text: str) -> "CalendarDate | None":
        """Return the date at the start of *text* (``YYYY-MM-DD``), or None."""
        m = _ISO_PREFIX_RE.match(text)
        if not m:
            return None
        try:
            return cls(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return None

    def to_date(self) -> datetime.date:
        return datetime.date(self.year, self.month, self.day)

    # --- Properties ---

    @property
    def is_leap_year(self) -> bool:
        return is_leap_year(self.year)

    @property
    def month_days(self) -> int:
        return month_days(self.year, self.month)

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month - 1]

    @property
    def weekday(self) -> int:
        """ISO weekday: 1 is Monday, 7 is Sunday."""
        y = self.year - (1 if self.month < 3 else 0)
        sunday0 = (y + y // 4 - y // 100 + y // 400 + _SAKAMOTO[self.month - 1] + self.day) % 7
        return sunday0 or 7

    @property
    def weekday_name(self) -> str:
        return WEEKDAY_NAMES[self.weekday - 1]

    @property
    def week_number(self) -> int:
        """ISO-8601 week number; the week's Thursday decides the year."""
        thursday = self.plus_days(4 - self.weekday)
        return (thursday.ordinal - 1) // 7 + 1

    @property
    def ordinal(self) -> int:
        """Day of the year, 1-based."""
        return sum(month_days(self.year, m) for m in range(1, self.month)) + self.day

    @property
    def iso(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    @property
    def month_start(self) -> "CalendarDate":
        return CalendarDate(self.year, self.month, 1)

    def __str__(self) -> str:
        return self.iso

    # --- Arithmetic ---

    def plus_days(self, n: int) -> "CalendarDate":
        """Return the date *n* days later (earlier when negative)."""
        year, month, day = self.year, self.month, self.day
        while n > 0:
            left = month_days(year, month) - day
            if n <= left:
                day += n
                n = 0
            else:
                n -= left + 1
                year, month = (year + 1, 1) if month == 12 else (year, month + 1)
                day = 1
        while n < 0:
            if -n < day:
                day += n
                n = 0
            else:
                n += day
                year, month = (year - 1, 12) if month == 1 else (year, month - 1)
                day = month_days(year, month)
        return CalendarDate(year, month, day)

    def plus_months(self, n: int) -> "CalendarDate":
        """Return the date *n* months later, the day clamped to the month's length."""
        index = self.year * 12 + (self.month - 1) + n
        year, month = divmod(index, 12)
        month += 1
        return CalendarDate(year, month, min(self.day, month_days(year, month)))

    def week_start(self, weekday: int = 1) -> "CalendarDate":
        """Return the latest date on or before this one falling on *weekday*."""
        if not 1 <= weekday <= 7:
            weekday = 1
        return self.plus_days(-((self.weekday - weekday) % 7))

    def days_until(self, other: "CalendarDate") -> int:
        return (other.to_date() - self.to_date()).days

    # --- Relative description ---

    def fuzzy(self, reference: "CalendarDate | None" = None) -> str:
        """Describe this date relative to *reference* (default today)."""
        reference = reference or CalendarDate.today()
        diff = reference.days_until(self)
        days = abs(diff)
        weeks = int(days / 7 + 0.5)
        months = days // 30
        years = days // 365

        if diff >= 0:
            if days == 0:
                return "today"
            if days == 1:
                return "tomorrow"
            if days <= 7:
                return f"next {self.weekday_name}"
            if weeks == 1:
                return "next week"
            if years == 1:
                return "next year"
            if years > 0:
                return f"{years} years from now"
            if months > 8:
                return f"{months} months from now"
            return f"{weeks} weeks from now"

        if days == 1:
            return "yesterday"
        if days <= 7:
            return f"last {self.weekday_name}"
        if weeks == 1:
            return "last week"
        if years == 1:
            return "a year ago"
        if years > 0:
            return f"{years} years ago"
        if months > 8:
            return f"{months} months ago"
        return f"{weeks} weeks ago"
