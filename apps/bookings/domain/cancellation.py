"""Cancellation policy: guests may cancel up to 24 hours before the service."""

from datetime import datetime, timedelta

CANCELLATION_NOTICE = timedelta(hours=24)


def hours_until(scheduled_at: datetime, now: datetime) -> float:
    return (scheduled_at - now).total_seconds() / 3600


def allows(scheduled_at: datetime, now: datetime) -> bool:
    """Wall-clock check only; no grace period and no per-hotel override."""
    return scheduled_at - now >= CANCELLATION_NOTICE
