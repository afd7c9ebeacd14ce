"""
Booking Domain Entities

Core business entities for the booking domain:
- Reservation: aggregate representing a stay of one user at one product
- ReservationStatus: FSM states for the reservation lifecycle
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


from shared.domain.base import Aggregate
from shared.domain.value_objects import DateInterval
from apps.bookings.domain.errors import InvalidStatusTransitionError


class ReservationStatus(Enum):
    """
    Reservation Status Finite State Machine

    State transitions:
    - PENDING -> CONFIRMED (admin confirmation)
    - PENDING -> CANCELLED
    - CONFIRMED -> CANCELLED
    Nothing leaves CANCELLED.
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


ALLOWED_TRANSITIONS = {
    ReservationStatus.PENDING: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: {ReservationStatus.CANCELLED},
    ReservationStatus.CANCELLED: set(),
}


@dataclass(kw_only=True, eq=False)
class Reservation(Aggregate):
    """
    Reservation Aggregate Root

    Key invariants:
    - start < end: a reservation spans at least one night
    - only PENDING and CONFIRMED reservations block dates
    - CANCELLED is terminal
    """

    product_id: Any
    user_id: Any
    period: DateInterval
    status: ReservationStatus = ReservationStatus.PENDING
    notes: str = ''

    created_at: datetime | None = None
    confirmed_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str = ''

    def __post_init__(self):
        # Raises InvalidRangeError for a zero-night stay.
        self.period.nights()

    @classmethod
    def request(cls, product_id: Any, user_id: Any, period: DateInterval, notes: str = '') -> "Reservation":
        """
        Create a new PENDING reservation

        Events: ReservationRequested (recorded once the id is assigned,
        see ``mark_persisted``)
        """
        return cls(
            product_id=product_id,
            user_id=user_id,
            period=period,
            notes=notes,
            status=ReservationStatus.PENDING,
            created_at=datetime.now(timezone.utc),
        )

    def mark_persisted(self, reservation_id: Any):
        """Assign the storage id of a freshly requested reservation"""
        from apps.bookings.domain.events import ReservationRequested

        self.id = reservation_id
        self.add_event(ReservationRequested(
            aggregate_id=self.id,
            reservation_id=self.id,
            product_id=self.product_id,
            user_id=self.user_id,
            period=self.period,
        ))

    def _transition(self, target: ReservationStatus):
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStatusTransitionError(self.status.value, target.value)
        self.status = target

    def confirm(self):
        """
        Confirm reservation (PENDING -> CONFIRMED)

        Events: ReservationConfirmed
        """
        from apps.bookings.domain.events import ReservationConfirmed

        self._transition(ReservationStatus.CONFIRMED)
        self.confirmed_at = datetime.now(timezone.utc)

        self.add_event(ReservationConfirmed(
            aggregate_id=self.id,
            reservation_id=self.id,
            product_id=self.product_id,
        ))

    def cancel(self, reason: str = ''):
        """
        Cancel reservation (PENDING | CONFIRMED -> CANCELLED)

        Never re-runs conflict detection: cancelling only frees dates.
        Events: ReservationCancelled
        """
        from apps.bookings.domain.events import ReservationCancelled

        old_status = self.status
        self._transition(ReservationStatus.CANCELLED)
        self.cancelled_at = datetime.now(timezone.utc)
        self.cancellation_reason = reason

        self.add_event(ReservationCancelled(
            aggregate_id=self.id,
            reservation_id=self.id,
            product_id=self.product_id,
            reason=reason,
            old_status=old_status.value,
        ))

    def blocks_dates(self) -> bool:
        """Only PENDING and CONFIRMED reservations block product dates"""
        return self.status in (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)

    def is_owned_by(self, user_id: Any) -> bool:
        return self.user_id is not None and str(self.user_id) == str(user_id)

    @property
    def nights(self) -> int:
        return self.period.nights().days

    def __str__(self):
        return f"Reservation {self.id} ({self.status.value})"

    def __repr__(self):
        return (
            f"Reservation(id={self.id}, product_id={self.product_id}, "
            f"status={self.status.value}, period={self.period})"
        )
