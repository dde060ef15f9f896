"""Settlement handlers against the real ORM store."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from apps.bookings.application.command_handlers import (
    AddReviewCommand,
    AddReviewHandler,
    CancelBookingCommand,
    CancelBookingHandler,
    CompleteBookingCommand,
    CompleteBookingHandler,
    ConfirmPaymentCommand,
    ConfirmPaymentHandler,
    CreateBookingCommand,
    CreateBookingHandler,
    FailPaymentCommand,
    FailPaymentHandler,
)
from apps.bookings.domain.events import BookingCancelled, BookingCreated
from apps.bookings.models import Booking
from apps.services.models import Service
from shared.application.message_bus import MessageBus
from shared.domain.clock import FixedClock
from shared.domain.exceptions import DuplicateReview, InvalidTransition, NotFoundError, ValidationError

from .factories import LAUNDRY_CATALOG, make_hotel, make_provider, make_service, make_user

NOW = datetime(2026, 6, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def bus():
    return MessageBus()


@pytest.fixture
def guest(db):
    return make_user(room_number="512")


@pytest.fixture
def service(db):
    hotel = make_hotel(markup="15")
    return make_service(make_provider(hotel))


def create(service, guest, clock, bus, **overrides):
    command = CreateBookingCommand(
        service_id=service.id,
        guest_id=guest.id,
        preferred_date=overrides.pop("preferred_date", date(2026, 6, 5)),
        payment_method=overrides.pop("payment_method", "online"),
        **overrides,
    )
    return CreateBookingHandler(clock=clock, bus=bus).handle(command)


@pytest.mark.django_db
def test_create_prices_and_persists_booking(service, guest, clock, bus):
    result = create(service, guest, clock, bus, quantity=3, preferred_time="afternoon")

    booking = Booking.objects.get(pk=result.booking_id)
    assert result.status == "pending"
    assert result.requires_payment
    assert booking.booking_number.startswith("BK20260601090000")
    assert booking.subtotal == Decimal("60.00")
    assert booking.markup_amount == Decimal("9.00")
    assert booking.total_amount == Decimal("69.00")
    assert booking.provider_earnings + booking.hotel_earnings == booking.total_amount
    assert booking.platform_fee == Decimal("3.45")
    assert booking.markup_source == "hotel_default"
    assert booking.preferred_time == "14:00"
    assert booking.scheduled_at == datetime(2026, 6, 5, 14, 0, tzinfo=timezone.utc)
    assert booking.guest_first_name == "Ada"
    assert booking.room_number == "512"


@pytest.mark.django_db
def test_cash_booking_is_confirmed_and_paid(service, guest, clock, bus):
    result = create(service, guest, clock, bus, payment_method="cash")

    booking = Booking.objects.get(pk=result.booking_id)
    assert booking.status == Booking.Status.CONFIRMED
    assert booking.payment_status == Booking.PaymentStatus.PAID
    assert booking.paid_at == NOW
    assert not result.requires_payment


@pytest.mark.django_db
def test_create_bumps_service_and_provider_counters(service, guest, clock, bus):
    create(service, guest, clock, bus)
    create(service, guest, clock, bus)

    service.refresh_from_db()
    service.provider.refresh_from_db()
    assert service.total_bookings == 2
    assert service.provider.total_bookings == 2


@pytest.mark.django_db
def test_invalid_payment_method_writes_nothing(service, guest, clock, bus):
    with pytest.raises(ValidationError, match="online"):
        create(service, guest, clock, bus, payment_method="card")

    service.refresh_from_db()
    assert Booking.objects.count() == 0
    assert service.total_bookings == 0


@pytest.mark.django_db
def test_inactive_service_is_not_bookable(service, guest, clock, bus):
    Service.objects.filter(pk=service.pk).update(is_active=False)

    with pytest.raises(NotFoundError):
        create(service, guest, clock, bus)
    assert Booking.objects.count() == 0


@pytest.mark.django_db
def test_inactive_provider_is_not_bookable(service, guest, clock, bus):
    service.provider.is_active = False
    service.provider.save()

    with pytest.raises(NotFoundError):
        create(service, guest, clock, bus)


@pytest.mark.django_db
def test_unknown_guest(service, clock, bus):
    with pytest.raises(NotFoundError):
        CreateBookingHandler(clock=clock, bus=bus).handle(
            CreateBookingCommand(
                service_id=service.id,
                guest_id=999_999,
                preferred_date=date(2026, 6, 5),
                payment_method="cash",
            )
        )


@pytest.mark.django_db
def test_room_number_is_required(service, clock, bus):
    roomless = make_user("roomless@example.com")

    with pytest.raises(ValidationError) as excinfo:
        create(service, roomless, clock, bus, room_number="  ")

    assert excinfo.value.context["field"] == "room_number"
    assert Booking.objects.count() == 0

    result = create(service, roomless, clock, bus, room_number="1204")
    assert Booking.objects.get(pk=result.booking_id).room_number == "1204"


@pytest.mark.django_db
def test_past_date_is_rejected(service, guest, clock, bus):
    with pytest.raises(ValidationError):
        create(service, guest, clock, bus, preferred_date=date(2026, 5, 31))
    assert Booking.objects.count() == 0


@pytest.mark.django_db
def test_provider_override_beats_hotel_policy(guest, clock, bus):
    hotel = make_hotel(markup="15", category_percentages={"spa": "25"})
    provider = make_provider(hotel, markup_override=Decimal("5"))
    service = make_service(provider)

    booking = Booking.objects.get(pk=create(service, guest, clock, bus).booking_id)

    assert booking.markup_percentage == Decimal("5.00")
    assert booking.markup_source == "provider_override"
    assert booking.total_amount == Decimal("21.00")


@pytest.mark.django_db
def test_hotel_without_policy_uses_platform_default(guest, clock, bus):
    service = make_service(make_provider(make_hotel()))

    booking = Booking.objects.get(pk=create(service, guest, clock, bus).booking_id)

    assert booking.markup_percentage == Decimal("15.00")
    assert booking.markup_source == "platform_default"


@pytest.mark.django_db
def test_laundry_is_priced_from_the_catalog(guest, clock, bus):
    hotel = make_hotel(markup="10")
    service = make_service(
        make_provider(hotel),
        category=Service.Category.LAUNDRY,
        name="Wash & fold",
        item_catalog=LAUNDRY_CATALOG,
        express_surcharge=Decimal("5.00"),
    )

    result = create(
        service,
        guest,
        clock,
        bus,
        details={"items": [{"item_id": "shirt", "quantity": 2, "price": "0.01"}], "is_express": True},
    )

    booking = Booking.objects.get(pk=result.booking_id)
    assert booking.kind == Booking.Kind.LAUNDRY
    assert booking.booking_number.startswith("LN")
    assert booking.subtotal == Decimal("14.00")
    assert booking.express_surcharge == Decimal("5.00")
    assert booking.total_amount == Decimal("15.40")
    assert booking.details["items"][0]["unit_price"] == "4.50"
    assert booking.details["is_express"] is True


@pytest.mark.django_db
def test_express_requires_a_configured_surcharge(guest, clock, bus):
    service = make_service(
        make_provider(make_hotel()),
        category=Service.Category.LAUNDRY,
        item_catalog=LAUNDRY_CATALOG,
    )

    with pytest.raises(ValidationError, match="Express"):
        create(service, guest, clock, bus, details={"items": [{"item_id": "suit"}], "is_express": True})


@pytest.mark.django_db
def test_created_event_reaches_the_bus_after_commit(
    service, guest, clock, bus, django_capture_on_commit_callbacks
):
    received = []
    bus.subscribe(BookingCreated, received.append)

    with django_capture_on_commit_callbacks(execute=True):
        result = create(service, guest, clock, bus)

    [event] = received
    assert event.booking_id == result.booking_id
    assert event.total.amount == Decimal("23.00")


@pytest.mark.django_db
def test_payment_confirmation(service, guest, clock, bus):
    result = create(service, guest, clock, bus)

    ConfirmPaymentHandler(clock=clock, bus=bus).handle(
        ConfirmPaymentCommand(booking_id=result.booking_id, payment_reference="pi_42")
    )

    booking = Booking.objects.get(pk=result.booking_id)
    assert booking.status == Booking.Status.CONFIRMED
    assert booking.payment_status == Booking.PaymentStatus.PAID
    assert booking.payment_reference == "pi_42"


@pytest.mark.django_db
def test_failed_payment_keeps_booking_pending(service, guest, clock, bus):
    result = create(service, guest, clock, bus)

    FailPaymentHandler(clock=clock, bus=bus).handle(
        FailPaymentCommand(booking_id=result.booking_id, reason="card_declined")
    )

    booking = Booking.objects.get(pk=result.booking_id)
    assert booking.status == Booking.Status.PENDING
    assert booking.payment_status == Booking.PaymentStatus.FAILED
    assert booking.payment_failure_reason == "card_declined"


@pytest.mark.django_db
def test_unknown_booking(clock, bus):
    with pytest.raises(NotFoundError):
        ConfirmPaymentHandler(clock=clock, bus=bus).handle(
            ConfirmPaymentCommand(booking_id=uuid4(), payment_reference="pi_1")
        )


@pytest.mark.django_db
def test_cancel_ahead_of_time(service, guest, clock, bus, django_capture_on_commit_callbacks):
    result = create(service, guest, clock, bus)
    received = []
    bus.subscribe(BookingCancelled, received.append)

    with django_capture_on_commit_callbacks(execute=True):
        CancelBookingHandler(clock=clock, bus=bus).handle(
            CancelBookingCommand(booking_id=result.booking_id, reason="Change of plans")
        )

    booking = Booking.objects.get(pk=result.booking_id)
    assert booking.status == Booking.Status.CANCELLED
    assert booking.cancelled_at == NOW
    assert [event.reason for event in received] == ["Change of plans"]


@pytest.mark.django_db
def test_late_cancellation_leaves_booking_untouched(service, guest, clock, bus):
    result = create(service, guest, clock, bus, preferred_date=date(2026, 6, 2), preferred_time="08:00")

    with pytest.raises(InvalidTransition):
        CancelBookingHandler(clock=clock, bus=bus).handle(CancelBookingCommand(booking_id=result.booking_id))

    booking = Booking.objects.get(pk=result.booking_id)
    assert booking.status == Booking.Status.PENDING
    assert booking.cancelled_at is None


@pytest.mark.django_db
def test_reviews_recompute_provider_rating(service, guest, clock, bus):
    for rating in (5, 4, 4):
        result = create(service, guest, clock, bus, payment_method="cash")
        CompleteBookingHandler(clock=clock, bus=bus).handle(CompleteBookingCommand(booking_id=result.booking_id))
        AddReviewHandler(clock=clock, bus=bus).handle(
            AddReviewCommand(booking_id=result.booking_id, rating=rating, comment="")
        )

    service.provider.refresh_from_db()
    assert service.provider.rating == Decimal("4.33")

    booking = Booking.objects.get(pk=result.booking_id)
    assert booking.status == Booking.Status.COMPLETED
    assert booking.payment_status == Booking.PaymentStatus.COMPLETED
    assert booking.review_rating == 4


@pytest.mark.django_db
def test_second_review_is_refused(service, guest, clock, bus):
    result = create(service, guest, clock, bus, payment_method="cash")
    CompleteBookingHandler(clock=clock, bus=bus).handle(CompleteBookingCommand(booking_id=result.booking_id))
    AddReviewHandler(clock=clock, bus=bus).handle(AddReviewCommand(booking_id=result.booking_id, rating=5))

    with pytest.raises(DuplicateReview):
        AddReviewHandler(clock=clock, bus=bus).handle(AddReviewCommand(booking_id=result.booking_id, rating=1))

    service.provider.refresh_from_db()
    assert service.provider.rating == Decimal("5.00")


@pytest.mark.django_db
def test_review_before_completion_is_refused(service, guest, clock, bus):
    result = create(service, guest, clock, bus, payment_method="cash")

    with pytest.raises(InvalidTransition):
        AddReviewHandler(clock=clock, bus=bus).handle(AddReviewCommand(booking_id=result.booking_id, rating=5))

    service.provider.refresh_from_db()
    assert service.provider.rating is None
