"""
Booking Domain Events

Events that represent things that have happened to a reservation.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from typing import Any

from shared.domain.base import DomainEvent
from shared.domain.value_objects import DateInterval


@dataclass(kw_only=True)
class ReservationRequested(DomainEvent):
    """
    Event: A reservation was requested and is waiting for confirmation

    Triggers:
    - Audit log entry
    """
    reservation_id: Any
    product_id: Any
    user_id: Any
    period: DateInterval

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            reservation_id=self.reservation_id,
            product_id=self.product_id,
            user_id=self.user_id,
            **self.period.to_dict(),
        )
        return data


@dataclass(kw_only=True)
class ReservationConfirmed(DomainEvent):
    """Event: PENDING -> CONFIRMED"""
    reservation_id: Any
    product_id: Any

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(reservation_id=self.reservation_id, product_id=self.product_id)
        return data


@dataclass(kw_only=True)
class ReservationCancelled(DomainEvent):
    """
    Event: Reservation was cancelled

    The dates it occupied are free again.
    """
    reservation_id: Any
    product_id: Any
    reason: str
    old_status: str  # Status before cancellation

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            reservation_id=self.reservation_id,
            product_id=self.product_id,
            reason=self.reason,
            old_status=self.old_status,
        )
        return data
