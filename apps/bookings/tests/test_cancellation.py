from datetime import datetime, timedelta, timezone

from apps.bookings.domain import cancellation

NOW = datetime(2026, 5, 1, 10, 0, tzinfo=timezone.utc)


def test_less_than_a_day_ahead_is_refused():
    assert not cancellation.allows(NOW + timedelta(hours=23, minutes=59), NOW)


def test_exactly_twenty_four_hours_is_allowed():
    assert cancellation.allows(NOW + timedelta(hours=24), NOW)


def test_a_day_and_a_minute_ahead_is_allowed():
    assert cancellation.allows(NOW + timedelta(hours=24, minutes=1), NOW)


def test_past_services_cannot_be_cancelled():
    assert not cancellation.allows(NOW - timedelta(hours=1), NOW)


def test_hours_until():
    assert cancellation.hours_until(NOW + timedelta(hours=30), NOW) == 30
