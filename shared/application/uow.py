"""
Unit of Work Pattern

Manages database transactions and ensures that domain events
are published only after successful transaction commit.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

from django.db import DatabaseError, IntegrityError, transaction

from shared.domain.base import DomainEvent
from shared.domain.errors import StorageUnavailableError

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __init__(self):
        self._events: List[DomainEvent] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""
        pass

    def collect_events(self, aggregate):
        """
        Collect events from aggregate root

        Extracts all domain events from the aggregate and
        clears them from the aggregate.
        """
        if hasattr(aggregate, 'events'):
            new_events = aggregate.events
            if new_events:
                self._events.extend(new_events)
                aggregate.clear_events()
                logger.debug(
                    "Collected %d events from %s (ID: %s)",
                    len(new_events), aggregate.__class__.__name__, aggregate.id,
                )

    def _take_events(self) -> List[DomainEvent]:
        events = self._events.copy()
        self._events.clear()
        return events

    @staticmethod
    def _publish_events(events: List[DomainEvent]):
        """
        Publish collected events to message bus

        Called after successful transaction commit.
        """
        from shared.application.message_bus import message_bus

        logger.info("Publishing %d domain events after commit", len(events))

        try:
            message_bus.publish_events(events)
        except Exception as e:
            logger.error("Error publishing events: %s", e, exc_info=True)
            # Events are already committed to database
            # Failure to publish events should be handled by monitoring


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Manages Django database transactions and ensures domain events
    are published after successful commit. Database outages raised inside
    the unit (anything but integrity violations, which carry domain meaning)
    leave it as ``StorageUnavailableError``.

    Usage:
        with DjangoUnitOfWork() as uow:
            reservation = repo.get(reservation_id)
            reservation.confirm()
            uow.collect_events(reservation)
            repo.save(reservation)
            # Transaction commits here
        # Events are published after commit
    """

    def __init__(self):
        super().__init__()
        self._transaction = None

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic()
        try:
            self._transaction.__enter__()
        except DatabaseError as exc:
            self._transaction = None
            logger.error("Could not open transaction: %s", exc, exc_info=True)
            raise StorageUnavailableError() from exc
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                try:
                    self._transaction.__exit__(exc_type, exc_val, exc_tb)
                except DatabaseError as exc:
                    if isinstance(exc, IntegrityError):
                        raise
                    logger.error("Transaction failed on exit: %s", exc, exc_info=True)
                    raise StorageUnavailableError() from exc
        if exc_type is not None and issubclass(exc_type, DatabaseError) and not issubclass(exc_type, IntegrityError):
            logger.error("Storage failure inside unit of work: %s", exc_val, exc_info=(exc_type, exc_val, exc_tb))
            raise StorageUnavailableError() from exc_val
        return False

    def commit(self):
        """
        Commit changes and publish events

        Events are published using Django's transaction.on_commit()
        to ensure they're only sent after database commit succeeds.
        """
        events = self._take_events()
        logger.debug("Committing transaction with %d events", len(events))

        # Schedule event publishing after commit
        if events:
            transaction.on_commit(lambda: self._publish_events(events))

    def rollback(self):
        """Rollback changes and discard events"""
        logger.warning("Rolling back transaction, discarding %d events", len(self._events))
        self._events.clear()
