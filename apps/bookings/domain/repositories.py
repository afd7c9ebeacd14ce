"""
Booking Repository Contracts

What the booking use cases need from storage. The Django implementation
lives in ``apps.bookings.repositories``; tests use in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from shared.application.uow import AbstractUnitOfWork
from apps.bookings.domain.availability import AvailabilityWindowSnapshot
from apps.bookings.domain.entities import Reservation


class AbstractReservationRepository(ABC):

    @abstractmethod
    def get(self, reservation_id: Any) -> Optional[Reservation]:
        ...

    @abstractmethod
    def for_product(self, product_id: Any) -> List[Reservation]:
        ...

    @abstractmethod
    def for_user(self, user_id: Any) -> List[Reservation]:
        ...

    @abstractmethod
    def add(self, reservation: Reservation) -> Reservation:
        """
        Insert a new reservation and assign its id

        Raises DateConflictError when storage rejects an overlapping stay.
        """

    @abstractmethod
    def save(self, reservation: Reservation) -> None:
        """Persist a status change of an existing reservation"""


class AbstractAvailabilityRepository(ABC):

    @abstractmethod
    def for_product(self, product_id: Any) -> List[AvailabilityWindowSnapshot]:
        ...


class AbstractBookingUnitOfWork(AbstractUnitOfWork):
    """
    Unit of work for booking use cases

    Everything read between ``lock_product`` and commit is a consistent
    snapshot: no other creation for the same product can interleave.
    """

    reservations: AbstractReservationRepository
    availability: AbstractAvailabilityRepository

    @abstractmethod
    def product_exists(self, product_id: Any) -> bool:
        ...

    @abstractmethod
    def lock_product(self, product_id: Any) -> None:
        """Serialize creations for ``product_id`` until the unit ends"""
