"""
Base Domain Classes

Building blocks for the settlement domain:
- Entity: object with a stable identity
- ValueObject: immutable object compared by value
- Aggregate: consistency boundary that records domain events
- DomainEvent: a fact published once the aggregate is committed
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List
from uuid import UUID, uuid4


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(kw_only=True, eq=False)
class Entity(ABC):
    """
    Base class for all entities

    Entities are mutable and compared by identity only.
    """
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def touch(self, now: datetime):
        self.updated_at = now


@dataclass(frozen=True)
class ValueObject(ABC):
    """Immutable objects without identity, equal when all attributes are equal."""
    pass


@dataclass(kw_only=True, eq=False)
class Aggregate(Entity):
    """
    Base class for aggregate roots

    State transitions append events here; the unit of work collects them
    and hands them to the message bus after the transaction commits.
    """
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False)

    def add_event(self, event: 'DomainEvent'):
        self._events.append(event)

    def clear_events(self):
        self._events.clear()

    @property
    def events(self) -> List['DomainEvent']:
        return self._events.copy()


@dataclass(kw_only=True)
class DomainEvent:
    """
    Base class for domain events

    Events carry plain identifiers only so they stay serializable when they
    cross into background workers.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=utcnow)
    aggregate_id: UUID | None = None

    @property
    def name(self) -> str:
        return self.__class__.__name__
