"""
Conflict Detector

Decides whether a proposed stay may be created for a product.

Boundary convention: the end date is the checkout day and is exclusive.
A reservation [start, end] occupies the nights [start, end - 1], so a new
stay may begin on the day another one ends.
"""

from __future__ import annotations

from typing import Any, Iterable, List
import logging

from shared.domain.value_objects import DateInterval
from apps.bookings.domain.availability import AvailabilityIndex
from apps.bookings.domain.entities import Reservation, ReservationStatus
from apps.bookings.domain.errors import DateConflictError, OutsideAvailabilityError

logger = logging.getLogger(__name__)

BLOCKING_STATUSES = frozenset({ReservationStatus.PENDING, ReservationStatus.CONFIRMED})


def find_conflicts(product_id: Any, proposed: DateInterval, existing: Iterable[Reservation]) -> List[Reservation]:
    """Blocking reservations of ``product_id`` whose nights overlap the proposed nights"""
    nights = proposed.nights()
    return [
        reservation
        for reservation in existing
        if str(reservation.product_id) == str(product_id)
        and reservation.status in BLOCKING_STATUSES
        and reservation.period.nights().overlaps(nights)
    ]


def has_conflict(product_id: Any, proposed: DateInterval, existing: Iterable[Reservation]) -> bool:
    return bool(find_conflicts(product_id, proposed, existing))


class ConflictDetector:
    """
    Runs both creation checks in order

    1. availability: the stay lies inside one bookable window
    2. overlap: no blocking reservation shares a night with the stay
    """

    def ensure_bookable(
        self,
        product_id: Any,
        proposed: DateInterval,
        index: AvailabilityIndex,
        existing: Iterable[Reservation],
    ) -> None:
        if not index.covers(proposed):
            logger.warning("Product %s: %s outside availability", product_id, proposed)
            raise OutsideAvailabilityError(proposed, index.bookable_windows())

        conflicts = find_conflicts(product_id, proposed, existing)
        if conflicts:
            logger.warning(
                "Product %s: %s conflicts with reservations %s",
                product_id, proposed, [reservation.id for reservation in conflicts],
            )
            raise DateConflictError(proposed, [reservation.period for reservation in conflicts])

    def is_bookable(
        self,
        product_id: Any,
        proposed: DateInterval,
        index: AvailabilityIndex,
        existing: Iterable[Reservation],
    ) -> bool:
        try:
            self.ensure_bookable(product_id, proposed, index, existing)
        except (OutsideAvailabilityError, DateConflictError):
            return False
        return True
