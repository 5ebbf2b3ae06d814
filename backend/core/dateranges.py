"""
Day-granularity date interval helpers.

Stays and query windows are half-open intervals ``[start, end)``: a booking
from 2025-10-02 to 2025-10-05 occupies the nights of the 2nd, 3rd and 4th.
Every helper normalises its inputs to calendar dates first, so datetimes and
ISO strings compare at midnight and never produce partial-day artifacts.
Reversed ranges are empty: they yield zero days and no iteration, never an
exception.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

ONE_DAY = timedelta(days=1)


def to_day(value):
    """Return ``value`` as a ``date`` (accepts date, datetime or ISO date and datetime strings)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # Drop a time-of-day part; anything else must be a plain ISO date
    for separator in ("T", " "):
        text = text.split(separator, 1)[0]
    return date.fromisoformat(text)


def duration_days(start, end):
    start, end = to_day(start), to_day(end)
    return max((end - start).days, 0)


def contains(start, end, day):
    """True if ``day`` falls inside ``[start, end)``."""
    return to_day(start) <= to_day(day) < to_day(end)


def overlaps(a_start, a_end, b_start, b_end):
    return overlap_days(a_start, a_end, b_start, b_end) > 0


def overlap_days(a_start, a_end, b_start, b_end):
    """Number of whole days shared by ``[a_start, a_end)`` and ``[b_start, b_end)``."""
    start = max(to_day(a_start), to_day(b_start))
    end = min(to_day(a_end), to_day(b_end))
    return max((end - start).days, 0)


def iter_days(first, last):
    """Yield every calendar day from ``first`` to ``last``, both included."""
    day, last = to_day(first), to_day(last)
    while day <= last:
        yield day
        day += ONE_DAY


def iter_nights(check_in, check_out):
    """Yield the nights of a stay: every day in ``[check_in, check_out)``."""
    day, check_out = to_day(check_in), to_day(check_out)
    while day < check_out:
        yield day
        day += ONE_DAY


@dataclass(frozen=True)
class DateRange:
    """A half-open window of days ``[start, end)``."""

    start: date
    end: date

    def __post_init__(self):
        object.__setattr__(self, "start", to_day(self.start))
        object.__setattr__(self, "end", to_day(self.end))

    @classmethod
    def inclusive(cls, first, last):
        """Build the window covering ``first`` through ``last`` (both included)."""
        return cls(to_day(first), to_day(last) + ONE_DAY)

    @property
    def is_valid(self):
        return self.end >= self.start

    @property
    def duration_days(self):
        return duration_days(self.start, self.end)

    def contains(self, day):
        return contains(self.start, self.end, day)

    def overlap_days(self, start, end):
        return overlap_days(self.start, self.end, start, end)

    def days(self):
        return iter_nights(self.start, self.end)
