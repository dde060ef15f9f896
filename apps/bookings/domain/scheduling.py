"""
Preferred-time normalization

Guests may ask for a clock time ("14:30") or for a named period
("morning", "lunch", "ASAP"). Named periods form a closed set mapped to
canonical times below; anything unrecognised falls back to 09:00.
"""

import re
from datetime import date, datetime, time, tzinfo
from enum import Enum

DEFAULT_TIME = '09:00'

_CLOCK_TIME = re.compile(r'^([01]?\d|2[0-3]):([0-5]\d)$')


class TimeOfDay(Enum):
    BREAKFAST = '08:00'
    MORNING = '09:00'
    LUNCH = '12:00'
    AFTERNOON = '14:00'
    EVENING = '18:00'
    DINNER = '19:00'
    ASAP = '09:00'

    @classmethod
    def lookup(cls, name: str) -> 'TimeOfDay | None':
        return cls.__members__.get(name.strip().upper())


def normalize_time(value: str | None) -> str:
    """Return a zero-padded ``HH:MM`` for a clock time or a known period name."""
    if not value or not value.strip():
        return DEFAULT_TIME

    match = _CLOCK_TIME.match(value.strip())
    if match:
        return f"{int(match.group(1)):02d}:{match.group(2)}"

    period = TimeOfDay.lookup(value)
    if period is not None:
        return period.value
    return DEFAULT_TIME


def scheduled_at(preferred_date: date, preferred_time: str, tz: tzinfo) -> datetime:
    """Combine a date and a normalized ``HH:MM`` into an aware datetime."""
    hours, minutes = normalize_time(preferred_time).split(':')
    return datetime.combine(preferred_date, time(int(hours), int(minutes)), tzinfo=tz)
