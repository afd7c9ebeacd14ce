"""In-memory storage for booking use case tests.

``InMemoryStore`` plays the storage collaborator: one lock per product gives
the same serialization ``SELECT ... FOR UPDATE`` gives the Django unit of
work, so check-then-create can be exercised from several threads.
"""

from __future__ import annotations

import copy
import itertools
import threading
from collections import defaultdict

from apps.bookings.domain.availability import AvailabilityWindowSnapshot, WindowStatus
from apps.bookings.domain.repositories import (
    AbstractAvailabilityRepository,
    AbstractBookingUnitOfWork,
    AbstractReservationRepository,
)
from shared.domain.errors import StorageUnavailableError
from shared.domain.value_objects import DateInterval


class InMemoryStore:
    def __init__(self):
        self.products: set = set()
        self.windows: list[AvailabilityWindowSnapshot] = []
        self.reservations: dict = {}
        self.published: list = []
        self.unavailable = False
        self._ids = itertools.count(1)
        self._guard = threading.Lock()
        self._product_locks = defaultdict(threading.Lock)

    def add_product(self, product_id):
        self.products.add(product_id)

    def add_window(self, product_id, start, end, status=WindowStatus.AVAILABLE):
        self.windows.append(AvailabilityWindowSnapshot(
            id=next(self._ids),
            product_id=product_id,
            period=DateInterval.parse(start, end),
            status=status,
        ))

    def next_id(self):
        with self._guard:
            return next(self._ids)

    def product_lock(self, product_id) -> threading.Lock:
        with self._guard:
            return self._product_locks[product_id]


class InMemoryReservationRepository(AbstractReservationRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def get(self, reservation_id):
        reservation = self.store.reservations.get(int(reservation_id))
        return copy.deepcopy(reservation) if reservation else None

    def for_product(self, product_id):
        return [copy.deepcopy(r) for r in self.store.reservations.values() if r.product_id == product_id]

    def for_user(self, user_id):
        return [copy.deepcopy(r) for r in self.store.reservations.values() if r.user_id == user_id]

    def add(self, reservation):
        reservation.mark_persisted(self.store.next_id())
        stored = copy.deepcopy(reservation)
        stored.clear_events()
        self.store.reservations[reservation.id] = stored
        return reservation

    def save(self, reservation):
        stored = copy.deepcopy(reservation)
        stored.clear_events()
        self.store.reservations[reservation.id] = stored


class InMemoryAvailabilityRepository(AbstractAvailabilityRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def for_product(self, product_id):
        return [w for w in self.store.windows if w.product_id == product_id]


class InMemoryBookingUnitOfWork(AbstractBookingUnitOfWork):
    """Writes are applied immediately; only events wait for commit."""

    def __init__(self, store: InMemoryStore):
        super().__init__()
        self.store = store
        self.reservations = InMemoryReservationRepository(store)
        self.availability = InMemoryAvailabilityRepository(store)
        self._held = []

    def __enter__(self):
        if self.store.unavailable:
            raise StorageUnavailableError()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            return super().__exit__(exc_type, exc_val, exc_tb)
        finally:
            while self._held:
                self._held.pop().release()

    def product_exists(self, product_id):
        return product_id in self.store.products

    def lock_product(self, product_id):
        lock = self.store.product_lock(product_id)
        lock.acquire()
        self._held.append(lock)

    def commit(self):
        self.store.published.extend(self._take_events())

    def rollback(self):
        self._events.clear()
