"""
Availability Index

Turns the availability windows an administrator published for a product
into the date intervals a guest may book. Windows are returned as authored:
never merged, never split, and overlapping windows are accepted as they are.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional

from shared.domain.base import ValueObject
from shared.domain.value_objects import DateInterval


class WindowStatus(Enum):
    AVAILABLE = 'available'
    UNAVAILABLE = 'unavailable'
    BLOCKED = 'blocked'


@dataclass(frozen=True)
class AvailabilityWindowSnapshot(ValueObject):
    """Read-only copy of one availability window row"""
    id: Any
    product_id: Any
    period: DateInterval
    status: WindowStatus

    @property
    def is_bookable(self) -> bool:
        return self.status == WindowStatus.AVAILABLE


class AvailabilityIndex:
    """
    Bookable windows of a single product

    Usage:
        index = AvailabilityIndex(windows)
        index.bookable_windows()          # [DateInterval, ...] in insertion order
        index.covering_window(proposed)   # first window covering the stay or None
    """

    def __init__(self, windows: Iterable[AvailabilityWindowSnapshot]):
        self._windows: List[AvailabilityWindowSnapshot] = list(windows)

    def __len__(self):
        return len(self._windows)

    def bookable_windows(self) -> List[DateInterval]:
        return [window.period for window in self._windows if window.is_bookable]

    def covering_window(self, proposed: DateInterval) -> Optional[DateInterval]:
        """
        First bookable window containing every day of ``proposed``

        The checkout day must lie inside the window as well.
        """
        for period in self.bookable_windows():
            if period.covers(proposed):
                return period
        return None

    def covers(self, proposed: DateInterval) -> bool:
        return self.covering_window(proposed) is not None
