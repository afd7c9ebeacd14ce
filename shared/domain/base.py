"""
Domain building blocks

- Entity: identity-bearing object; unsaved entities have ``id=None``
- ValueObject: immutable, compared by value
- Aggregate: entity that records domain events until its unit of work
  collects them
- DomainEvent: fact recorded by an aggregate, published after commit
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List
from uuid import UUID, uuid4


@dataclass(kw_only=True)
class Entity(ABC):
    """
    Base class for entities

    Equality follows the storage id. Before the first save there is no id
    and an entity is only equal to itself.
    """
    id: Any = None

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self):
        return hash(self.id) if self.id is not None else id(self)


@dataclass(frozen=True)
class ValueObject(ABC):
    """Immutable value compared attribute by attribute"""


@dataclass(kw_only=True, eq=False)
class Aggregate(Entity):
    """
    Aggregate root

    State changes append events here; ``AbstractUnitOfWork.collect_events``
    drains them so they are published once the transaction commits.
    """
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False, compare=False)

    def add_event(self, event: 'DomainEvent'):
        self._events.append(event)

    def clear_events(self):
        self._events.clear()

    @property
    def events(self) -> List['DomainEvent']:
        """Recorded events, oldest first (a copy)"""
        return list(self._events)


@dataclass(kw_only=True)
class DomainEvent:
    """Something that happened to an aggregate"""
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    aggregate_id: Any = None

    def to_dict(self) -> dict:
        """Flat, JSON-friendly form used by the audit log"""
        return {
            'event_id': str(self.event_id),
            'event_type': type(self).__name__,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': None if self.aggregate_id is None else str(self.aggregate_id),
        }
