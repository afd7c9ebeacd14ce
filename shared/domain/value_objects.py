"""
Common Value Objects

Value objects used across multiple domains:
- DateInterval: a closed range of civil dates (no time of day, no timezone)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta

from shared.domain.base import ValueObject
from shared.domain.errors import InvalidRangeError

ONE_DAY = timedelta(days=1)

CIVIL_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_civil_date(value: date | str, field_name: str = "date") -> date:
    """Parse a ``YYYY-MM-DD`` string; dates pass through unchanged."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        raise InvalidRangeError(f"{field_name} is required in YYYY-MM-DD format.")
    value = value.strip()
    if not CIVIL_DATE_RE.fullmatch(value):
        raise InvalidRangeError(f"{field_name} must be a YYYY-MM-DD date, got {value!r}.")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidRangeError(f"{field_name} must be a YYYY-MM-DD date, got {value!r}.")


@dataclass(frozen=True)
class DateInterval(ValueObject):
    """
    Date interval value object

    Represents the closed range [start, end]. Both ends are calendar days and
    comparisons never involve time of day.

    A reservation stored as [start, end] occupies the nights [start, end),
    which is exposed as ``nights()``: the end date is the checkout day and
    stays free for the next guest.
    """
    start: date
    end: date

    def __post_init__(self):
        if not isinstance(self.start, date) or not isinstance(self.end, date):
            raise InvalidRangeError("Interval bounds must be calendar dates.")
        if self.end < self.start:
            raise InvalidRangeError(
                f"End date ({self.end}) must not be earlier than start date ({self.start})"
            )

    @classmethod
    def parse(cls, start: date | str, end: date | str) -> "DateInterval":
        """Build an interval from ``YYYY-MM-DD`` strings or dates"""
        return cls(parse_civil_date(start, "start_date"), parse_civil_date(end, "end_date"))

    def overlaps(self, other: "DateInterval") -> bool:
        """
        Check whether two closed intervals share at least one calendar day

        Examples:
            - [01, 05] overlaps [05, 08] -> True (day 05 is shared)
            - [01, 05] overlaps [06, 08] -> False
        """
        if not isinstance(other, DateInterval):
            raise TypeError("Can only check overlap with another DateInterval")
        return self.start <= other.end and other.start <= self.end

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def covers(self, other: "DateInterval") -> bool:
        """True if ``other`` lies entirely inside this interval"""
        return self.start <= other.start and other.end <= self.end

    def nights(self) -> "DateInterval":
        """
        Nights occupied by a stay from ``start`` to checkout on ``end``

        Requires at least one night (start < end).
        """
        if self.end <= self.start:
            raise InvalidRangeError("A stay must span at least one night.")
        return DateInterval(self.start, self.end - ONE_DAY)

    @property
    def days(self) -> int:
        """Number of calendar days in the closed interval"""
        return (self.end - self.start).days + 1

    def to_dict(self) -> dict[str, str]:
        return {"start_date": self.start.isoformat(), "end_date": self.end.isoformat()}

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"

    def __repr__(self):
        return f"DateInterval({self.start}, {self.end})"
