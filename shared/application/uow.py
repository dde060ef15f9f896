"""
Unit of Work Pattern

Wraps one settlement operation in a database transaction and publishes
the domain events it produced only after that transaction commits.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Make the settlement writes durable"""
        pass

    @abstractmethod
    def rollback(self):
        """Abandon the writes and every collected event"""
        pass

    @abstractmethod
    def collect_events(self, aggregate):
        """Take pending events off a booking (or any aggregate)"""
        pass


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Usage:
        with DjangoUnitOfWork() as uow:
            booking = store.get_by_id(booking_id, lock=True)
            booking.cancel(reason, now=clock.now())
            uow.collect_events(booking)
            store.save(booking)
        # BookingCancelled reaches the message bus after COMMIT

    Events go through ``transaction.on_commit``, so a rollback (or an outer
    atomic block rolling back later) drops them together with the writes.
    """

    def __init__(self, bus=None):
        self._events: List[DomainEvent] = []
        self._transaction = None
        self._bus = bus

    def __enter__(self):
        """Open the atomic block the whole operation runs in"""
        self._transaction = transaction.atomic()
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def commit(self):
        """
        Hand the collected events to ``transaction.on_commit``

        Inside an outer atomic block the callback waits for the outermost
        commit.
        """
        logger.debug(f"Committing transaction with {len(self._events)} events")

        events = self._events.copy()
        self._events.clear()

        if events:
            transaction.on_commit(lambda: self._publish_events(events))

    def rollback(self):
        """Drop the collected events; the atomic block undoes the writes"""
        if self._events:
            logger.warning(f"Rolling back transaction, discarding {len(self._events)} events")
        self._events.clear()

    def collect_events(self, aggregate):
        """
        Move ``aggregate.events`` into this unit of work

        The aggregate's own list is cleared so a second save of the same
        booking cannot publish an event twice.
        """
        new_events = getattr(aggregate, 'events', None)
        if new_events:
            self._events.extend(new_events)
            aggregate.clear_events()
            logger.debug(
                f"Collected {len(new_events)} events from "
                f"{aggregate.__class__.__name__} (ID: {aggregate.id})"
            )

    def _publish_events(self, events: List[DomainEvent]):
        """Publish to the injected bus, or the process-wide one when none was given"""
        bus = self._bus
        if bus is None:
            from shared.application.message_bus import message_bus as bus

        logger.info(f"Publishing {len(events)} domain events after commit")

        try:
            bus.publish(events)
        except Exception as e:
            # The writes are already committed; nothing here may undo them.
            logger.error(f"Error publishing events: {e}", exc_info=True)
