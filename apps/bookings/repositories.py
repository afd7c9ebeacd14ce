"""Django-backed storage for the booking domain."""

from __future__ import annotations

from typing import Any, List, Optional
import logging

from django.db import IntegrityError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import DateInterval
from apps.bookings.domain.availability import AvailabilityWindowSnapshot, WindowStatus
from apps.bookings.domain.conflicts import BLOCKING_STATUSES, find_conflicts
from apps.bookings.domain.entities import Reservation, ReservationStatus
from apps.bookings.domain.errors import DateConflictError
from apps.bookings.domain.repositories import (
    AbstractAvailabilityRepository,
    AbstractBookingUnitOfWork,
    AbstractReservationRepository,
)
from apps.bookings.models import Reservation as ReservationModel
from apps.products.models import AvailabilityWindow, Product

logger = logging.getLogger(__name__)


def to_entity(row: ReservationModel) -> Reservation:
    return Reservation(
        id=row.pk,
        product_id=row.product_id,
        user_id=row.user_id,
        period=DateInterval(row.start_date, row.end_date),
        status=ReservationStatus(row.status),
        notes=row.notes,
        created_at=row.created_at,
        confirmed_at=row.confirmed_at,
        cancelled_at=row.cancelled_at,
        cancellation_reason=row.cancellation_reason,
    )


def to_snapshot(row: AvailabilityWindow) -> AvailabilityWindowSnapshot:
    return AvailabilityWindowSnapshot(
        id=row.pk,
        product_id=row.product_id,
        period=DateInterval(row.start_date, row.end_date),
        status=WindowStatus(row.status),
    )


class DjangoReservationRepository(AbstractReservationRepository):

    def get(self, reservation_id: Any) -> Optional[Reservation]:
        row = ReservationModel.objects.filter(pk=reservation_id).first()
        return to_entity(row) if row else None

    def for_product(self, product_id: Any) -> List[Reservation]:
        return [to_entity(row) for row in ReservationModel.objects.filter(product_id=product_id)]

    def for_user(self, user_id: Any) -> List[Reservation]:
        return [to_entity(row) for row in ReservationModel.objects.filter(user_id=user_id)]

    def blocking_for_product(self, product_id: Any) -> List[Reservation]:
        statuses = [status.value for status in BLOCKING_STATUSES]
        return [
            to_entity(row)
            for row in ReservationModel.objects.filter(product_id=product_id, status__in=statuses)
        ]

    def add(self, reservation: Reservation) -> Reservation:
        """
        Insert inside a savepoint

        An overlap rejected by the exclusion constraint rolls back only the
        savepoint, so the conflicting rows can still be read for the error.
        """
        try:
            with transaction.atomic():
                row = ReservationModel.objects.create(
                    product_id=reservation.product_id,
                    user_id=reservation.user_id,
                    start_date=reservation.period.start,
                    end_date=reservation.period.end,
                    status=reservation.status.value,
                    notes=reservation.notes,
                )
        except IntegrityError as exc:
            logger.warning(
                "Storage rejected reservation of product %s for %s: %s",
                reservation.product_id, reservation.period, exc,
            )
            conflicts = find_conflicts(
                reservation.product_id,
                reservation.period,
                self.blocking_for_product(reservation.product_id),
            )
            raise DateConflictError(reservation.period, [r.period for r in conflicts]) from exc

        reservation.created_at = row.created_at
        reservation.mark_persisted(row.pk)
        return reservation

    def save(self, reservation: Reservation) -> None:
        ReservationModel.objects.filter(pk=reservation.id).update(
            status=reservation.status.value,
            confirmed_at=reservation.confirmed_at,
            cancelled_at=reservation.cancelled_at,
            cancellation_reason=reservation.cancellation_reason[:255],
        )


class DjangoAvailabilityRepository(AbstractAvailabilityRepository):

    def for_product(self, product_id: Any) -> List[AvailabilityWindowSnapshot]:
        return [to_snapshot(row) for row in AvailabilityWindow.objects.filter(product_id=product_id)]


class DjangoBookingUnitOfWork(DjangoUnitOfWork, AbstractBookingUnitOfWork):
    """
    Booking unit of work over Django's ORM

    ``lock_product`` takes ``SELECT ... FOR UPDATE`` on the product row, so
    two creations for the same product run one after another.
    SQLite ignores row locks; there the settings open every transaction
    with ``BEGIN IMMEDIATE``, which serializes whole units of work instead.
    """

    def __init__(self):
        super().__init__()
        self.reservations = DjangoReservationRepository()
        self.availability = DjangoAvailabilityRepository()

    def product_exists(self, product_id: Any) -> bool:
        return Product.objects.filter(pk=product_id).exists()

    def lock_product(self, product_id: Any) -> None:
        queryset = Product.objects.filter(pk=product_id)
        try:
            # Evaluating the queryset is what takes the lock.
            list(queryset.select_for_update().values_list("pk", flat=True))
        except NotSupportedError:
            list(queryset.values_list("pk", flat=True))
        logger.debug("Locked product %s", product_id)
