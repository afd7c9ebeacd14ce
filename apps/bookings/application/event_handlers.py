"""
Booking Event Handlers

Subscribers run after the transaction that raised the event has committed.
"""

import structlog

from shared.application.message_bus import message_bus
from apps.bookings.domain.events import (
    ReservationCancelled,
    ReservationConfirmed,
    ReservationRequested,
)

audit_logger = structlog.get_logger("apps.bookings.audit")


def audit_reservation_event(event):
    """Write one structured audit line per reservation event"""
    audit_logger.info("reservation.event", **event.to_dict())


def register_event_handlers():
    for event_type in (ReservationRequested, ReservationConfirmed, ReservationCancelled):
        message_bus.subscribe(event_type, audit_reservation_event)
