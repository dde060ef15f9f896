"""
Booking Command Handlers

These are the use cases of the settlement core.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Price and open a new booking
- ConfirmPaymentCommand: Gateway confirmed an online payment
- FailPaymentCommand: Gateway reported a failed payment
- CancelBookingCommand: Guest cancels at least 24 hours ahead
- CompleteBookingCommand: Provider delivered the service
- AddReviewCommand: Guest reviews a completed booking
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from django.utils import timezone

from shared.application.uow import DjangoUnitOfWork
from shared.domain.clock import Clock, system_clock
from shared.domain.exceptions import NotFoundError, ValidationError
from apps.bookings.domain.entities import (
    Booking,
    GuestDetails,
    Location,
    PaymentMethod,
    Review,
    Schedule,
    generate_booking_number,
)
from apps.bookings.domain.markup import resolve_markup
from apps.bookings.domain.pricing import PricingBreakdown, compute_pricing
from apps.bookings.domain.scheduling import normalize_time, scheduled_at
from apps.bookings.domain.variants import LaundryDetails, build_details, kind_for_category
from apps.providers.domain.rating import recompute

logger = logging.getLogger(__name__)

BOOKING_NUMBER_ATTEMPTS = 5


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    ``details`` carries the category-specific request: ``items`` and
    ``is_express`` for laundry, ``items`` for dining, vehicle and route for
    transportation, ``special_requests`` for everything else.
    """
    service_id: int
    guest_id: int
    preferred_date: date
    payment_method: str
    preferred_time: str = ''
    quantity: int = 1
    first_name: str = ''
    last_name: str = ''
    email: str = ''
    phone: str = ''
    room_number: str = ''
    pickup_location: str = ''
    delivery_location: str = ''
    instructions: str = ''
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ConfirmPaymentCommand:
    """Gateway confirmation of an online payment"""
    booking_id: UUID
    payment_reference: str


@dataclass
class FailPaymentCommand:
    """Gateway report that an online payment failed"""
    booking_id: UUID
    reason: str = ''


@dataclass
class CancelBookingCommand:
    booking_id: UUID
    reason: str = ''


@dataclass
class CompleteBookingCommand:
    booking_id: UUID


@dataclass
class AddReviewCommand:
    booking_id: UUID
    rating: int
    comment: str = ''


@dataclass(frozen=True)
class BookingCreationResult:
    booking_id: UUID
    booking_number: str
    status: str
    payment_status: str
    payment_method: str
    pricing: PricingBreakdown
    requires_payment: bool


# ===== Command Handlers =====

class _StoreHandler:
    """Shared wiring: a settlement store, a clock and an optional bus."""

    def __init__(self, store=None, clock: Optional[Clock] = None, bus=None):
        if store is None:
            from apps.bookings.repositories import DjangoSettlementStore

            store = DjangoSettlementStore()
        self.store = store
        self.clock = clock or system_clock
        self.bus = bus

    def _load(self, booking_id: UUID) -> Booking:
        booking = self.store.get_by_id(booking_id, lock=True)
        if not booking:
            raise NotFoundError(f"Booking {booking_id} not found", booking_id=str(booking_id))
        return booking


class CreateBookingHandler(_StoreHandler):
    """
    Handler for CreateBooking command

    Everything that can be rejected is checked before the transaction
    opens, so a rejected request never writes:

    1. Parse the payment method and quantity
    2. Load service, provider and hotel (all must be active) and the guest,
       who needs a room number on the command or their profile
    3. Normalize the preferred time, reject past dates
    4. Build the category details, pricing item lines from the catalog
    5. Resolve markup and compute pricing

    Then, in one transaction: insert the booking, bump the service and
    provider counters, collect BookingCreated. Notifications fan out
    after commit.
    """

    def handle(self, command: CreateBookingCommand) -> BookingCreationResult:
        logger.info(
            f"Creating booking for service {command.service_id}, "
            f"guest {command.guest_id}, date {command.preferred_date}"
        )

        payment_method = PaymentMethod.parse(command.payment_method)
        quantity = command.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError("Quantity must be a positive integer", field='quantity')

        service = self.store.find_service(command.service_id)
        if service is None or not service.is_active:
            raise NotFoundError(f"Service {command.service_id} not found or inactive")
        if not service.provider.is_active:
            raise NotFoundError(f"Provider {service.provider_id} not found or inactive")
        if not service.hotel.is_active:
            raise NotFoundError(f"Hotel {service.hotel_id} not found or inactive")

        guest_user = self.store.find_guest(command.guest_id)
        if guest_user is None:
            raise NotFoundError(f"Guest {command.guest_id} not found")
        room_number = (command.room_number or guest_user.room_number or '').strip()
        if not room_number:
            raise ValidationError("Room number is required for booking", field='room_number')

        now = self.clock.now()
        local_tz = timezone.get_current_timezone()
        if command.preferred_date < timezone.localtime(now, local_tz).date():
            raise ValidationError("Preferred date cannot be in the past", field='preferred_date')
        preferred_time = normalize_time(command.preferred_time)

        kind = kind_for_category(service.category)
        details = build_details(kind, command.details or {}, service.item_catalog or {})

        surcharge = Decimal('0')
        if isinstance(details, LaundryDetails) and details.is_express:
            if service.express_surcharge is None:
                raise ValidationError("Express service is not offered", field='is_express')
            surcharge = service.express_surcharge

        markup = resolve_markup(
            self.store.find_hotel_markup_policy(service.hotel_id),
            service.category,
            self.store.find_provider_override(service.provider_id),
        )
        base_price, priced_quantity = details.pricing_basis(service.base_price, quantity)
        pricing = compute_pricing(
            base_price,
            priced_quantity,
            surcharge,
            markup.percentage,
            service.currency,
            markup_source=markup.source,
        )

        guest = GuestDetails(
            first_name=command.first_name or guest_user.first_name or guest_user.email,
            last_name=command.last_name or guest_user.last_name,
            email=command.email or guest_user.email,
            phone=command.phone or (guest_user.phone or ''),
            room_number=room_number,
        )
        schedule = Schedule(
            preferred_date=command.preferred_date,
            preferred_time=preferred_time,
            starts_at=scheduled_at(command.preferred_date, preferred_time, local_tz),
            duration_minutes=service.duration_minutes,
        )

        with DjangoUnitOfWork(self.bus) as uow:
            booking = Booking.open(
                payment_method=payment_method,
                now=now,
                booking_number=self._booking_number(service.category, now),
                kind=kind,
                category=service.category,
                service_id=service.id,
                provider_id=service.provider_id,
                hotel_id=service.hotel_id,
                guest_id=guest_user.pk,
                guest=guest,
                schedule=schedule,
                location=Location(
                    pickup=command.pickup_location,
                    delivery=command.delivery_location,
                    instructions=command.instructions,
                ),
                pricing=pricing,
                details=details,
            )

            self.store.add(booking)
            self.store.increment_booking_counters(service.id, service.provider_id)

            uow.collect_events(booking)
            # Event: BookingCreated

        logger.info(
            f"Booking created: {booking.booking_number} (ID: {booking.id}), "
            f"status {booking.status.value}, total {pricing.total_amount} {pricing.currency}, "
            f"markup {markup.percentage}% from {markup.source.value}"
        )

        return BookingCreationResult(
            booking_id=booking.id,
            booking_number=booking.booking_number,
            status=booking.status.value,
            payment_status=booking.payment_status.value,
            payment_method=booking.payment_method.value,
            pricing=pricing,
            requires_payment=booking.requires_payment,
        )

    def _booking_number(self, category: str, now) -> str:
        for _ in range(BOOKING_NUMBER_ATTEMPTS):
            number = generate_booking_number(category, now)
            if not self.store.booking_number_exists(number):
                return number
            logger.warning(f"Booking number collision on {number}, regenerating")
        # The unique column rejects a duplicate if all attempts collided.
        return generate_booking_number(category, now)


class ConfirmPaymentHandler(_StoreHandler):
    """Handler for the gateway's payment confirmation"""

    def handle(self, command: ConfirmPaymentCommand) -> Booking:
        logger.info(f"Confirming payment {command.payment_reference} for booking {command.booking_id}")

        with DjangoUnitOfWork(self.bus) as uow:
            booking = self._load(command.booking_id)

            # FSM transition PENDING -> CONFIRMED
            booking.confirm_payment(command.payment_reference, now=self.clock.now())

            uow.collect_events(booking)
            self.store.save(booking)
            # Event: BookingConfirmed

        logger.info(f"Booking {booking.booking_number} confirmed")
        return booking


class FailPaymentHandler(_StoreHandler):
    """Handler for the gateway's payment failure"""

    def handle(self, command: FailPaymentCommand) -> Booking:
        logger.info(f"Recording failed payment for booking {command.booking_id}")

        with DjangoUnitOfWork(self.bus) as uow:
            booking = self._load(command.booking_id)
            booking.fail_payment(command.reason, now=self.clock.now())
            uow.collect_events(booking)
            self.store.save(booking)
            # Event: BookingPaymentFailed

        logger.warning(f"Payment failed for booking {booking.booking_number}: {command.reason}")
        return booking


class CancelBookingHandler(_StoreHandler):
    """Handler for cancelling a booking"""

    def handle(self, command: CancelBookingCommand) -> Booking:
        logger.info(f"Cancelling booking {command.booking_id}, reason: {command.reason}")

        with DjangoUnitOfWork(self.bus) as uow:
            booking = self._load(command.booking_id)

            # FSM transition PENDING/CONFIRMED -> CANCELLED, 24h notice enforced
            booking.cancel(command.reason, now=self.clock.now())

            uow.collect_events(booking)
            self.store.save(booking)
            # Event: BookingCancelled

        logger.info(f"Booking {booking.booking_number} cancelled")
        return booking


class CompleteBookingHandler(_StoreHandler):
    """Handler for completing a booking"""

    def handle(self, command: CompleteBookingCommand) -> Booking:
        logger.info(f"Completing booking {command.booking_id}")

        with DjangoUnitOfWork(self.bus) as uow:
            booking = self._load(command.booking_id)

            # FSM transition CONFIRMED -> COMPLETED
            booking.complete(now=self.clock.now())

            uow.collect_events(booking)
            self.store.save(booking)
            # Event: BookingCompleted

        logger.info(f"Booking {booking.booking_number} completed")
        return booking


class AddReviewHandler(_StoreHandler):
    """
    Handler for reviewing a completed booking

    The provider row is locked for the whole transaction, so concurrent
    reviews of the same provider recompute the rating one after another
    and the last writer always sees every review.
    """

    def handle(self, command: AddReviewCommand) -> Review:
        logger.info(f"Adding review to booking {command.booking_id}")

        with DjangoUnitOfWork(self.bus) as uow:
            booking = self._load(command.booking_id)
            self.store.lock_provider(booking.provider_id)

            review = booking.add_review(command.rating, command.comment, now=self.clock.now())
            self.store.save(booking)

            rating = recompute(booking.provider_id, self.store.provider_ratings(booking.provider_id))
            if rating is not None:
                self.store.update_provider_rating(booking.provider_id, rating)

            uow.collect_events(booking)
            # Event: BookingReviewed

        logger.info(f"Review saved for {booking.booking_number}; provider {booking.provider_id} rating {rating}")
        return review
