"""
Settlement Store

Django-backed persistence for the booking settlement handlers. Maps the
``Booking`` aggregate to and from its ORM row and owns every query the
handlers need: catalogue lookups, counters, row locks and rating
aggregation inputs.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from django.contrib.auth import get_user_model  # type: ignore
from django.db.models import F  # type: ignore

from apps.bookings.domain.entities import (
    Booking,
    BookingStatus,
    GuestDetails,
    Location,
    PaymentMethod,
    PaymentStatus,
    Review,
    Schedule,
)
from apps.bookings.domain.markup import MarkupPolicy, MarkupSource, ProviderMarkupOverride
from apps.bookings.domain.pricing import PricingBreakdown
from apps.bookings.domain.variants import BookingKind, details_from_dict
from apps.bookings.models import Booking as BookingModel
from apps.hotels.models import MarkupPolicy as MarkupPolicyModel
from apps.providers.models import ServiceProvider
from apps.services.models import Service

logger = logging.getLogger(__name__)


class DjangoSettlementStore:
    """ORM-backed store; every method runs inside the caller's transaction."""

    # ----- catalogue lookups -----

    def find_service(self, service_id: int) -> Optional[Service]:
        return (
            Service.objects.select_related("provider", "hotel")
            .filter(pk=service_id)
            .first()
        )

    def find_guest(self, guest_id: int):
        return get_user_model().objects.filter(pk=guest_id).first()

    def find_hotel_markup_policy(self, hotel_id: int) -> Optional[MarkupPolicy]:
        policy = MarkupPolicyModel.objects.filter(hotel_id=hotel_id).first()
        return policy.to_domain() if policy else None

    def find_provider_override(self, provider_id: int) -> Optional[ProviderMarkupOverride]:
        provider = ServiceProvider.objects.filter(pk=provider_id).first()
        return provider.markup_override_value() if provider else None

    # ----- bookings -----

    def booking_number_exists(self, booking_number: str) -> bool:
        return BookingModel.objects.filter(booking_number=booking_number).exists()

    def get_by_id(self, booking_id: UUID, lock: bool = False) -> Optional[Booking]:
        qs = BookingModel.objects.all()
        if lock:
            qs = qs.select_for_update()
        row = qs.filter(pk=booking_id).first()
        return self._to_domain(row) if row else None

    def add(self, booking: Booking) -> None:
        BookingModel.objects.create(id=booking.id, **self._to_columns(booking))
        logger.debug(f"Inserted booking row {booking.booking_number}")

    def save(self, booking: Booking) -> None:
        updated = BookingModel.objects.filter(pk=booking.id).update(**self._to_columns(booking))
        if not updated:
            raise LookupError(f"Booking {booking.id} has no row to update")

    # ----- counters and ratings -----

    def increment_booking_counters(self, service_id: int, provider_id: int) -> None:
        """Atomic +1 on the service and provider counters."""
        Service.objects.filter(pk=service_id).update(total_bookings=F("total_bookings") + 1)
        ServiceProvider.objects.filter(pk=provider_id).update(total_bookings=F("total_bookings") + 1)

    def lock_provider(self, provider_id: int) -> Optional[ServiceProvider]:
        return ServiceProvider.objects.select_for_update().filter(pk=provider_id).first()

    def provider_ratings(self, provider_id: int) -> List[int]:
        return list(
            BookingModel.objects.filter(
                provider_id=provider_id,
                status=BookingModel.Status.COMPLETED,
                review_rating__isnull=False,
            ).values_list("review_rating", flat=True)
        )

    def update_provider_rating(self, provider_id: int, rating: Decimal) -> None:
        ServiceProvider.objects.filter(pk=provider_id).update(rating=rating)

    # ----- mapping -----

    @staticmethod
    def _to_columns(booking: Booking) -> dict:
        pricing = booking.pricing
        review = booking.review
        return {
            "booking_number": booking.booking_number,
            "kind": booking.kind.value,
            "category": booking.category,
            "service_id": booking.service_id,
            "provider_id": booking.provider_id,
            "hotel_id": booking.hotel_id,
            "guest_id": booking.guest_id,
            "guest_first_name": booking.guest.first_name,
            "guest_last_name": booking.guest.last_name,
            "guest_email": booking.guest.email,
            "guest_phone": booking.guest.phone,
            "room_number": booking.guest.room_number,
            "preferred_date": booking.schedule.preferred_date,
            "preferred_time": booking.schedule.preferred_time,
            "scheduled_at": booking.schedule.starts_at,
            "duration_minutes": booking.schedule.duration_minutes,
            "pickup_location": booking.location.pickup,
            "delivery_location": booking.location.delivery,
            "instructions": booking.location.instructions,
            "details": booking.details.to_dict(),
            "base_price": pricing.base_price,
            "quantity": pricing.quantity,
            "express_surcharge": pricing.express_surcharge,
            "subtotal": pricing.subtotal,
            "markup_percentage": pricing.markup_percentage,
            "markup_amount": pricing.markup_amount,
            "markup_source": pricing.markup_source.value if pricing.markup_source else "",
            "total_amount": pricing.total_amount,
            "provider_earnings": pricing.provider_earnings,
            "hotel_earnings": pricing.hotel_earnings,
            "platform_fee": pricing.platform_fee,
            "currency": pricing.currency,
            "payment_method": booking.payment_method.value,
            "payment_status": booking.payment_status.value,
            "payment_reference": booking.payment_reference,
            "payment_failure_reason": booking.payment_failure_reason,
            "paid_at": booking.paid_at,
            "status": booking.status.value,
            "confirmed_at": booking.confirmed_at,
            "completed_at": booking.completed_at,
            "cancelled_at": booking.cancelled_at,
            "cancellation_reason": booking.cancellation_reason,
            "review_rating": review.rating if review else None,
            "review_comment": review.comment if review else "",
            "reviewed_at": review.created_at if review else None,
            "created_at": booking.created_at,
            "updated_at": booking.updated_at,
        }

    @staticmethod
    def _to_domain(row: BookingModel) -> Booking:
        kind = BookingKind(row.kind)
        pricing = PricingBreakdown(
            base_price=row.base_price,
            quantity=row.quantity,
            express_surcharge=row.express_surcharge,
            subtotal=row.subtotal,
            markup_percentage=row.markup_percentage,
            markup_amount=row.markup_amount,
            total_amount=row.total_amount,
            provider_earnings=row.provider_earnings,
            hotel_earnings=row.hotel_earnings,
            platform_fee=row.platform_fee,
            currency=row.currency,
            markup_source=MarkupSource(row.markup_source) if row.markup_source else None,
        )
        review = None
        if row.review_rating is not None:
            review = Review(
                rating=row.review_rating,
                comment=row.review_comment,
                created_at=row.reviewed_at,
            )
        return Booking(
            id=row.id,
            created_at=row.created_at,
            updated_at=row.updated_at,
            booking_number=row.booking_number,
            kind=kind,
            category=row.category,
            service_id=row.service_id,
            provider_id=row.provider_id,
            hotel_id=row.hotel_id,
            guest_id=row.guest_id,
            guest=GuestDetails(
                first_name=row.guest_first_name,
                last_name=row.guest_last_name,
                email=row.guest_email,
                phone=row.guest_phone,
                room_number=row.room_number,
            ),
            schedule=Schedule(
                preferred_date=row.preferred_date,
                preferred_time=row.preferred_time,
                starts_at=row.scheduled_at,
                duration_minutes=row.duration_minutes,
            ),
            location=Location(
                pickup=row.pickup_location,
                delivery=row.delivery_location,
                instructions=row.instructions,
            ),
            pricing=pricing,
            details=details_from_dict(kind, row.details),
            payment_method=PaymentMethod(row.payment_method),
            payment_status=PaymentStatus(row.payment_status),
            payment_reference=row.payment_reference,
            payment_failure_reason=row.payment_failure_reason,
            paid_at=row.paid_at,
            status=BookingStatus(row.status),
            confirmed_at=row.confirmed_at,
            completed_at=row.completed_at,
            cancelled_at=row.cancelled_at,
            cancellation_reason=row.cancellation_reason,
            review=review,
        )
