"""
Booking Domain Errors

Rule violations raised while requesting or transitioning a reservation.
Every error is reported before anything is written.
"""

from __future__ import annotations

from typing import Any, Iterable, List

from shared.domain.errors import DomainError
from shared.domain.value_objects import DateInterval


class OutsideAvailabilityError(DomainError):
    """The proposed stay is not covered by any bookable window."""

    code = "outside_availability"
    status_code = 422
    default_message = "Requested dates are outside every available window."

    def __init__(self, proposed: DateInterval, windows: Iterable[DateInterval] = (), message: str | None = None):
        self.proposed = proposed
        self.windows: List[DateInterval] = list(windows)
        super().__init__(message or f"Dates {proposed} are outside every available window.")

    def extra(self) -> dict[str, Any]:
        return {
            "requested": self.proposed.to_dict(),
            "available_windows": [window.to_dict() for window in self.windows],
        }


class DateConflictError(DomainError):
    """The proposed stay overlaps a pending or confirmed reservation."""

    code = "date_conflict"
    status_code = 409
    default_message = "Requested dates overlap an existing reservation."

    def __init__(self, proposed: DateInterval, conflicts: Iterable[DateInterval] = (), message: str | None = None):
        self.proposed = proposed
        self.conflicts: List[DateInterval] = list(conflicts)
        super().__init__(message or f"Dates {proposed} overlap {len(self.conflicts)} existing reservation(s).")

    def extra(self) -> dict[str, Any]:
        return {
            "requested": self.proposed.to_dict(),
            "conflicts": [period.to_dict() for period in self.conflicts],
        }


class InvalidStatusTransitionError(DomainError):
    code = "invalid_transition"
    status_code = 409
    default_message = "Reservation cannot move to the requested status."

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move reservation from {current} to {target}.")

    def extra(self) -> dict[str, Any]:
        return {"status": self.current}
