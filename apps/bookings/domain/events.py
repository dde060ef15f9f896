"""
Booking Domain Events

Published on the message bus after the transaction that produced them
commits. Identifiers only, so handlers can reload fresh state.
"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import Money


@dataclass(kw_only=True)
class BookingCreated(DomainEvent):
    """
    A guest booked a service.

    Triggers:
    - guest and provider notifications (email + WhatsApp)
    """
    booking_id: UUID
    booking_number: str
    category: str
    hotel_id: int
    provider_id: int
    guest_id: int
    payment_method: str
    status: str
    total: Money


@dataclass(kw_only=True)
class BookingConfirmed(DomainEvent):
    """Gateway confirmed an online payment (pending -> confirmed)."""
    booking_id: UUID
    payment_reference: str


@dataclass(kw_only=True)
class BookingPaymentFailed(DomainEvent):
    booking_id: UUID
    reason: str


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    """
    Guest cancelled at least 24 hours ahead.

    Triggers:
    - cancellation notice to guest and provider
    """
    booking_id: UUID
    reason: str
    previous_status: str


@dataclass(kw_only=True)
class BookingCompleted(DomainEvent):
    """Service delivered; the booking is now open for a single review."""
    booking_id: UUID
    provider_id: int


@dataclass(kw_only=True)
class BookingReviewed(DomainEvent):
    booking_id: UUID
    provider_id: int
    rating: int
