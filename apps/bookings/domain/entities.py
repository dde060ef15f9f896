"""
Booking Domain Entities

- Booking: aggregate root driving the booking/payment state machine
- BookingStatus / PaymentStatus / PaymentMethod: the state enumerations
- GuestDetails, Schedule, Location, Review: embedded value objects
"""

import secrets
import string
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from shared.domain.base import Aggregate, ValueObject
from shared.domain.exceptions import DuplicateReview, InvalidTransition, ValidationError
from shared.domain.value_objects import Money

from . import cancellation
from .events import (
    BookingCancelled,
    BookingCompleted,
    BookingConfirmed,
    BookingCreated,
    BookingPaymentFailed,
    BookingReviewed,
)
from .pricing import PricingBreakdown
from .variants import BookingDetails, BookingKind


class BookingStatus(Enum):
    """
    Booking lifecycle

    - PENDING -> CONFIRMED (gateway confirmed an online payment)
    - PENDING -> CANCELLED (guest, >= 24h ahead)
    - CONFIRMED -> COMPLETED (service delivered)
    - CONFIRMED -> CANCELLED (guest, >= 24h ahead)
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class PaymentStatus(Enum):
    PENDING = 'pending'
    PAID = 'paid'
    COMPLETED = 'completed'     # settled once the service was delivered
    FAILED = 'failed'


class PaymentMethod(Enum):
    ONLINE = 'online'
    CASH = 'cash'

    @classmethod
    def parse(cls, value) -> 'PaymentMethod':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Invalid payment method {value!r}. Must be either 'online' or 'cash'.",
                field='payment_method',
            ) from None


CANCELLABLE = (BookingStatus.PENDING, BookingStatus.CONFIRMED)

BOOKING_NUMBER_PREFIXES = {
    'laundry': 'LN',
    'transportation': 'TR',
    'dining': 'DN',
    'restaurant': 'DN',
    'housekeeping': 'HK',
}
DEFAULT_BOOKING_PREFIX = 'BK'

_SUFFIX_ALPHABET = string.digits + string.ascii_uppercase


def generate_booking_number(category: str, now: datetime) -> str:
    """
    Human-readable booking number: ``LN20260118093000K7Q2``.

    Timestamp plus four random base36 characters; unique in practice, the
    database column's unique constraint is the actual guarantee.
    """
    prefix = BOOKING_NUMBER_PREFIXES.get(category, DEFAULT_BOOKING_PREFIX)
    suffix = ''.join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(4))
    return f"{prefix}{now.strftime('%Y%m%d%H%M%S')}{suffix}"


@dataclass(frozen=True)
class GuestDetails(ValueObject):
    first_name: str
    last_name: str = ''
    email: str = ''
    phone: str = ''
    room_number: str = ''


@dataclass(frozen=True)
class Schedule(ValueObject):
    preferred_date: date
    preferred_time: str         # normalized HH:MM
    starts_at: datetime         # aware; what the cancellation window is measured against
    duration_minutes: int = 60


@dataclass(frozen=True)
class Location(ValueObject):
    pickup: str = ''
    delivery: str = ''
    instructions: str = ''


@dataclass(frozen=True)
class Review(ValueObject):
    rating: int
    comment: str
    created_at: datetime

    def __post_init__(self):
        if isinstance(self.rating, bool) or not isinstance(self.rating, int) or not 1 <= self.rating <= 5:
            raise ValidationError("Rating must be an integer between 1 and 5", field='rating')


@dataclass(kw_only=True, eq=False)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    Invariants:
    - status only changes through the transition methods below
    - cancelled and completed are terminal for status changes
    - at most one review, only on a completed booking, never edited
    - pricing is computed once at creation and never recomputed
    """

    booking_number: str
    kind: BookingKind
    category: str

    service_id: int
    provider_id: int
    hotel_id: int
    guest_id: int

    guest: GuestDetails
    schedule: Schedule
    location: Location = field(default_factory=Location)
    pricing: PricingBreakdown
    details: BookingDetails

    payment_method: PaymentMethod
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_reference: str = ''
    status: BookingStatus = BookingStatus.PENDING

    paid_at: datetime | None = None
    confirmed_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str = ''
    payment_failure_reason: str = ''

    review: Review | None = None

    @classmethod
    def open(cls, *, payment_method: PaymentMethod, now: datetime, **fields) -> 'Booking':
        """
        Create a booking in the state its payment method dictates.

        Cash is settled at the point of service, so the booking starts
        confirmed and paid. Online bookings wait for the gateway.
        """
        booking = cls(
            payment_method=payment_method,
            created_at=now,
            updated_at=now,
            **fields,
        )
        if payment_method is PaymentMethod.CASH:
            booking.status = BookingStatus.CONFIRMED
            booking.payment_status = PaymentStatus.PAID
            booking.paid_at = now
            booking.confirmed_at = now
        else:
            booking.status = BookingStatus.PENDING
            booking.payment_status = PaymentStatus.PENDING

        booking.add_event(BookingCreated(
            aggregate_id=booking.id,
            occurred_at=now,
            booking_id=booking.id,
            booking_number=booking.booking_number,
            category=booking.category,
            hotel_id=booking.hotel_id,
            provider_id=booking.provider_id,
            guest_id=booking.guest_id,
            payment_method=payment_method.value,
            status=booking.status.value,
            total=Money(booking.pricing.total_amount, booking.pricing.currency),
        ))
        return booking

    @property
    def requires_payment(self) -> bool:
        return self.payment_status in (PaymentStatus.PENDING, PaymentStatus.FAILED)

    def confirm_payment(self, payment_reference: str, now: datetime):
        """Gateway confirmation: (PENDING, pending) -> (CONFIRMED, paid)."""
        if self.payment_method is not PaymentMethod.ONLINE:
            raise InvalidTransition(
                f"Booking {self.booking_number} is paid in cash; nothing to confirm"
            )
        if self.status is not BookingStatus.PENDING or self.payment_status is PaymentStatus.PAID:
            raise InvalidTransition(
                f"Cannot confirm payment from status {self.status.value}/{self.payment_status.value}"
            )

        self.status = BookingStatus.CONFIRMED
        self.payment_status = PaymentStatus.PAID
        self.payment_reference = payment_reference
        self.payment_failure_reason = ''
        self.paid_at = now
        self.confirmed_at = now
        self.touch(now)

        self.add_event(BookingConfirmed(
            aggregate_id=self.id,
            occurred_at=now,
            booking_id=self.id,
            payment_reference=payment_reference,
        ))

    def fail_payment(self, reason: str, now: datetime):
        """Gateway failure: payment -> failed, booking stays pending."""
        if self.status is not BookingStatus.PENDING or self.payment_status is not PaymentStatus.PENDING:
            raise InvalidTransition(
                f"Cannot fail payment from status {self.status.value}/{self.payment_status.value}"
            )

        self.payment_status = PaymentStatus.FAILED
        self.payment_failure_reason = reason
        self.touch(now)

        self.add_event(BookingPaymentFailed(
            aggregate_id=self.id,
            occurred_at=now,
            booking_id=self.id,
            reason=reason,
        ))

    def cancel(self, reason: str, now: datetime):
        if self.status not in CANCELLABLE:
            raise InvalidTransition(
                f"Booking {self.booking_number} cannot be cancelled from status {self.status.value}"
            )
        if not cancellation.allows(self.schedule.starts_at, now):
            raise InvalidTransition(
                "Booking can only be cancelled 24 hours before scheduled time",
                hours_until_service=round(cancellation.hours_until(self.schedule.starts_at, now), 2),
            )

        previous = self.status
        self.status = BookingStatus.CANCELLED
        self.cancellation_reason = reason
        self.cancelled_at = now
        self.touch(now)

        self.add_event(BookingCancelled(
            aggregate_id=self.id,
            occurred_at=now,
            booking_id=self.id,
            reason=reason,
            previous_status=previous.value,
        ))

    def complete(self, now: datetime):
        if self.status is not BookingStatus.CONFIRMED:
            raise InvalidTransition(
                f"Cannot complete booking from status {self.status.value}. "
                f"Booking must be CONFIRMED."
            )

        self.status = BookingStatus.COMPLETED
        self.completed_at = now
        if self.payment_status is PaymentStatus.PAID:
            self.payment_status = PaymentStatus.COMPLETED
        self.touch(now)

        self.add_event(BookingCompleted(
            aggregate_id=self.id,
            occurred_at=now,
            booking_id=self.id,
            provider_id=self.provider_id,
        ))

    def add_review(self, rating: int, comment: str, now: datetime) -> Review:
        if self.status is not BookingStatus.COMPLETED:
            raise InvalidTransition(
                f"Only completed bookings can be reviewed (status: {self.status.value})"
            )
        if self.review is not None:
            raise DuplicateReview("Review already submitted")

        self.review = Review(rating=rating, comment=comment or '', created_at=now)
        self.touch(now)

        self.add_event(BookingReviewed(
            aggregate_id=self.id,
            occurred_at=now,
            booking_id=self.id,
            provider_id=self.provider_id,
            rating=rating,
        ))
        return self.review

    def __str__(self):
        return f"Booking {self.booking_number} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, booking_number={self.booking_number}, "
            f"status={self.status.value}, payment={self.payment_status.value})"
        )


