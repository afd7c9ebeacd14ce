"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateReservationCommand: Request a new reservation
- ConfirmReservationCommand: Confirm a pending reservation
- CancelReservationCommand: Cancel a reservation

Queries:
- BookingQueries: availability windows and reservations, read-only
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional
import logging

from shared.domain.errors import DomainError, NotFoundError, PermissionDeniedError, UnauthenticatedError
from shared.domain.value_objects import DateInterval
from apps.bookings.domain.availability import AvailabilityIndex, AvailabilityWindowSnapshot
from apps.bookings.domain.conflicts import ConflictDetector
from apps.bookings.domain.entities import Reservation
from apps.bookings.domain.repositories import AbstractBookingUnitOfWork
from apps.users.identity import Identity

logger = logging.getLogger(__name__)

UnitOfWorkFactory = Callable[[], AbstractBookingUnitOfWork]


def default_uow() -> AbstractBookingUnitOfWork:
    from apps.bookings.repositories import DjangoBookingUnitOfWork

    return DjangoBookingUnitOfWork()


# ===== Commands =====

@dataclass
class CreateReservationCommand:
    """
    Command to request a new reservation

    Dates are ``YYYY-MM-DD`` strings or dates. ``user_id`` is the resolved
    identity of the caller, never a value taken from the request body.
    """
    product_id: Any
    user_id: Optional[Any]
    start_date: Any
    end_date: Any
    notes: str = ''


@dataclass
class ConfirmReservationCommand:
    """Command to confirm a pending reservation (admin)"""
    reservation_id: Any


@dataclass
class CancelReservationCommand:
    """Command to cancel a reservation (owner or admin)"""
    reservation_id: Any
    identity: Optional[Identity]
    reason: str = ''


# ===== Command Handlers =====

class CreateReservationHandler:
    """
    Handler for CreateReservation command

    Check-then-create runs as one unit:
    1. Reject a missing identity and a malformed range (no storage access)
    2. Start the unit of work and lock the product row
    3. Read windows and reservations: a consistent snapshot under the lock
    4. Availability check, then overlap check
    5. Insert; a storage-level overlap rejection surfaces as DateConflictError
    6. Commit; ReservationRequested is published after commit
    """

    def __init__(self, uow_factory: UnitOfWorkFactory = default_uow, detector: ConflictDetector | None = None):
        self.uow_factory = uow_factory
        self.detector = detector or ConflictDetector()

    def handle(self, command: CreateReservationCommand) -> Reservation:
        if command.user_id is None:
            logger.warning("Reservation request for product %s without identity", command.product_id)
            raise UnauthenticatedError()

        try:
            period = DateInterval.parse(command.start_date, command.end_date)
            reservation = Reservation.request(
                product_id=command.product_id,
                user_id=command.user_id,
                period=period,
                notes=command.notes or '',
            )
        except DomainError as exc:
            logger.warning("Rejected reservation request for product %s: %s", command.product_id, exc.code)
            raise

        logger.info(
            "Creating reservation for product %s, user %s, dates %s",
            command.product_id, command.user_id, period,
        )

        with self.uow_factory() as uow:
            if not uow.product_exists(command.product_id):
                raise NotFoundError(f"Product {command.product_id} not found.")

            uow.lock_product(command.product_id)

            index = AvailabilityIndex(uow.availability.for_product(command.product_id))
            existing = uow.reservations.for_product(command.product_id)
            self.detector.ensure_bookable(command.product_id, period, index, existing)

            uow.reservations.add(reservation)
            uow.collect_events(reservation)

        logger.info("Reservation %s created (%s)", reservation.id, reservation.status.value)
        return reservation


class ConfirmReservationHandler:
    """Handler for confirming a pending reservation"""

    def __init__(self, uow_factory: UnitOfWorkFactory = default_uow):
        self.uow_factory = uow_factory

    def handle(self, command: ConfirmReservationCommand) -> Reservation:
        logger.info("Confirming reservation %s", command.reservation_id)

        with self.uow_factory() as uow:
            reservation = uow.reservations.get(command.reservation_id)
            if not reservation:
                raise NotFoundError(f"Reservation {command.reservation_id} not found.")

            reservation.confirm()
            uow.collect_events(reservation)
            uow.reservations.save(reservation)

        logger.info("Reservation %s confirmed", reservation.id)
        return reservation


class CancelReservationHandler:
    """
    Handler for cancelling a reservation

    Cancellation is an unconditional terminal write: it needs no product
    lock and no conflict check.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory = default_uow):
        self.uow_factory = uow_factory

    def handle(self, command: CancelReservationCommand) -> Reservation:
        if command.identity is None:
            raise UnauthenticatedError()

        logger.info("Cancelling reservation %s, reason: %s", command.reservation_id, command.reason)

        with self.uow_factory() as uow:
            reservation = uow.reservations.get(command.reservation_id)
            if not reservation:
                raise NotFoundError(f"Reservation {command.reservation_id} not found.")

            if not (command.identity.is_admin or reservation.is_owned_by(command.identity.user_id)):
                raise PermissionDeniedError("Only the guest or an administrator may cancel this reservation.")

            reservation.cancel(command.reason)
            uow.collect_events(reservation)
            uow.reservations.save(reservation)

        logger.info("Reservation %s cancelled", reservation.id)
        return reservation


# ===== Queries =====

class BookingQueries:
    """Read side of the booking API"""

    def __init__(self, uow_factory: UnitOfWorkFactory = default_uow):
        self.uow_factory = uow_factory

    def _require_product(self, uow: AbstractBookingUnitOfWork, product_id: Any):
        if not uow.product_exists(product_id):
            raise NotFoundError(f"Product {product_id} not found.")

    def availability(self, product_id: Any) -> List[AvailabilityWindowSnapshot]:
        with self.uow_factory() as uow:
            self._require_product(uow, product_id)
            return uow.availability.for_product(product_id)

    def bookable_windows(self, product_id: Any) -> List[DateInterval]:
        with self.uow_factory() as uow:
            self._require_product(uow, product_id)
            return AvailabilityIndex(uow.availability.for_product(product_id)).bookable_windows()

    def reservations_for_product(self, product_id: Any) -> List[Reservation]:
        with self.uow_factory() as uow:
            self._require_product(uow, product_id)
            return uow.reservations.for_product(product_id)

    def reservations_for_user(self, user_id: Any) -> List[Reservation]:
        with self.uow_factory() as uow:
            return uow.reservations.for_user(user_id)

    def get(self, reservation_id: Any, identity: Optional[Identity] = None) -> Reservation:
        """Fetch one reservation; with an identity, only its owner or an admin may read it"""
        with self.uow_factory() as uow:
            reservation = uow.reservations.get(reservation_id)
        if not reservation:
            raise NotFoundError(f"Reservation {reservation_id} not found.")
        if identity is not None and not (identity.is_admin or reservation.is_owned_by(identity.user_id)):
            raise PermissionDeniedError()
        return reservation
