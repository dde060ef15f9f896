from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from apps.bookings.domain.entities import (
    Booking,
    BookingStatus,
    GuestDetails,
    PaymentMethod,
    PaymentStatus,
    Schedule,
    generate_booking_number,
)
from apps.bookings.domain.events import (
    BookingCancelled,
    BookingCompleted,
    BookingConfirmed,
    BookingCreated,
    BookingPaymentFailed,
    BookingReviewed,
)
from apps.bookings.domain.pricing import compute_pricing
from apps.bookings.domain.variants import BookingKind, GenericDetails
from shared.domain.exceptions import DuplicateReview, InvalidTransition, ValidationError

NOW = datetime(2026, 6, 1, 9, 0, tzinfo=timezone.utc)


def make_booking(payment_method=PaymentMethod.ONLINE, starts_in=timedelta(days=3), category="spa"):
    starts_at = NOW + starts_in
    return Booking.open(
        payment_method=payment_method,
        now=NOW,
        booking_number=generate_booking_number(category, NOW),
        kind=BookingKind.GENERIC,
        category=category,
        service_id=1,
        provider_id=2,
        hotel_id=3,
        guest_id=4,
        guest=GuestDetails(first_name="Ada", last_name="Lovelace", email="ada@example.com", room_number="512"),
        schedule=Schedule(
            preferred_date=starts_at.date(),
            preferred_time=starts_at.strftime("%H:%M"),
            starts_at=starts_at,
        ),
        pricing=compute_pricing(Decimal("20"), 3, Decimal("0"), Decimal("15")),
        details=GenericDetails(),
    )


def test_cash_booking_starts_confirmed_and_paid():
    booking = make_booking(PaymentMethod.CASH)

    assert booking.status is BookingStatus.CONFIRMED
    assert booking.payment_status is PaymentStatus.PAID
    assert booking.paid_at == NOW
    assert not booking.requires_payment


def test_online_booking_starts_pending():
    booking = make_booking(PaymentMethod.ONLINE)

    assert booking.status is BookingStatus.PENDING
    assert booking.payment_status is PaymentStatus.PENDING
    assert booking.requires_payment


def test_open_records_booking_created():
    booking = make_booking(PaymentMethod.CASH)

    [event] = booking.events
    assert isinstance(event, BookingCreated)
    assert event.booking_id == booking.id
    assert event.status == "confirmed"
    assert event.total.amount == Decimal("69.00")


@pytest.mark.parametrize("value", ["card", "", None, "bitcoin"])
def test_unknown_payment_method_is_rejected(value):
    with pytest.raises(ValidationError, match="online"):
        PaymentMethod.parse(value)


def test_payment_method_parse_is_case_insensitive():
    assert PaymentMethod.parse(" Cash ") is PaymentMethod.CASH


def test_gateway_confirmation_moves_online_booking_to_confirmed():
    booking = make_booking()
    booking.clear_events()

    booking.confirm_payment("pi_123", now=NOW + timedelta(minutes=5))

    assert booking.status is BookingStatus.CONFIRMED
    assert booking.payment_status is PaymentStatus.PAID
    assert booking.payment_reference == "pi_123"
    assert isinstance(booking.events[0], BookingConfirmed)


def test_cash_booking_has_nothing_to_confirm():
    booking = make_booking(PaymentMethod.CASH)

    with pytest.raises(InvalidTransition):
        booking.confirm_payment("pi_123", now=NOW)


def test_confirming_twice_is_refused():
    booking = make_booking()
    booking.confirm_payment("pi_123", now=NOW)

    with pytest.raises(InvalidTransition):
        booking.confirm_payment("pi_456", now=NOW)
    assert booking.payment_reference == "pi_123"


def test_failed_payment_keeps_booking_pending():
    booking = make_booking()
    booking.clear_events()

    booking.fail_payment("card_declined", now=NOW)

    assert booking.status is BookingStatus.PENDING
    assert booking.payment_status is PaymentStatus.FAILED
    assert booking.requires_payment
    assert isinstance(booking.events[0], BookingPaymentFailed)


def test_cancel_a_day_and_a_minute_ahead():
    booking = make_booking(starts_in=timedelta(hours=24, minutes=1))
    booking.clear_events()

    booking.cancel("Change of plans", now=NOW)

    assert booking.status is BookingStatus.CANCELLED
    assert booking.cancellation_reason == "Change of plans"
    assert booking.cancelled_at == NOW
    [event] = booking.events
    assert isinstance(event, BookingCancelled)
    assert event.previous_status == "pending"


def test_cancel_inside_the_window_leaves_state_untouched():
    booking = make_booking(PaymentMethod.CASH, starts_in=timedelta(hours=23))
    booking.clear_events()

    with pytest.raises(InvalidTransition) as excinfo:
        booking.cancel("Too late", now=NOW)

    assert excinfo.value.context["hours_until_service"] == 23
    assert booking.status is BookingStatus.CONFIRMED
    assert booking.cancelled_at is None
    assert booking.events == []


def test_cancelled_booking_cannot_be_cancelled_again():
    booking = make_booking()
    booking.cancel("", now=NOW)

    with pytest.raises(InvalidTransition):
        booking.cancel("", now=NOW)


def test_complete_requires_confirmed():
    booking = make_booking()

    with pytest.raises(InvalidTransition):
        booking.complete(now=NOW)
    assert booking.status is BookingStatus.PENDING


def test_complete_settles_paid_payment():
    booking = make_booking(PaymentMethod.CASH)
    booking.clear_events()

    booking.complete(now=NOW + timedelta(days=3))

    assert booking.status is BookingStatus.COMPLETED
    assert booking.payment_status is PaymentStatus.COMPLETED
    assert isinstance(booking.events[0], BookingCompleted)


def test_completed_booking_cannot_be_cancelled():
    booking = make_booking(PaymentMethod.CASH, starts_in=timedelta(days=10))
    booking.complete(now=NOW)

    with pytest.raises(InvalidTransition):
        booking.cancel("", now=NOW)


def test_review_requires_completed_booking():
    booking = make_booking(PaymentMethod.CASH)

    with pytest.raises(InvalidTransition):
        booking.add_review(5, "Great", now=NOW)
    assert booking.review is None


def test_second_review_is_refused():
    booking = make_booking(PaymentMethod.CASH)
    booking.complete(now=NOW)
    booking.add_review(4, "Good", now=NOW)

    with pytest.raises(DuplicateReview, match="Review already submitted"):
        booking.add_review(1, "Changed my mind", now=NOW)
    assert booking.review.rating == 4


def test_review_emits_event():
    booking = make_booking(PaymentMethod.CASH)
    booking.complete(now=NOW)
    booking.clear_events()

    booking.add_review(5, "", now=NOW)

    [event] = booking.events
    assert isinstance(event, BookingReviewed)
    assert event.provider_id == 2
    assert event.rating == 5


@pytest.mark.parametrize("rating", [0, 6, -1, True])
def test_rating_must_be_between_one_and_five(rating):
    booking = make_booking(PaymentMethod.CASH)
    booking.complete(now=NOW)

    with pytest.raises(ValidationError):
        booking.add_review(rating, "", now=NOW)
    assert booking.review is None


@pytest.mark.parametrize(
    "category, prefix",
    [("laundry", "LN"), ("transportation", "TR"), ("dining", "DN"), ("housekeeping", "HK"), ("spa", "BK")],
)
def test_booking_number_prefix_follows_category(category, prefix):
    number = generate_booking_number(category, NOW)

    assert number.startswith(f"{prefix}20260601090000")
    assert len(number) == len(prefix) + 14 + 4
    assert number[-4:].isalnum() and number[-4:].upper() == number[-4:]
