"""
Availability Gate

Decides whether a service is bookable right now from its weekly operating
schedule. Windows are same-day only: ``start <= now <= end`` with both
bounds inclusive.

Known limitation: a window whose end lies before its start (an overnight
window such as 22:00-02:00) is not wrapped past midnight, so it never
reports open.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Mapping

from shared.domain.base import ValueObject

WEEKDAYS = (
    'monday',
    'tuesday',
    'wednesday',
    'thursday',
    'friday',
    'saturday',
    'sunday',
)

MINUTES_PER_DAY = 24 * 60


def parse_minutes(value) -> int:
    """Accept a minute-of-day offset (int) or an ``HH:MM`` string."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid time value: {value!r}")
    if isinstance(value, int):
        minutes = value
    elif isinstance(value, str) and ':' in value:
        hours, _, mins = value.strip().partition(':')
        if not (hours.isdigit() and mins.isdigit() and len(mins) == 2):
            raise ValueError(f"Invalid time value: {value!r}")
        if int(hours) > 23 or int(mins) > 59:
            raise ValueError(f"Invalid time value: {value!r}")
        minutes = int(hours) * 60 + int(mins)
    else:
        raise ValueError(f"Invalid time value: {value!r}")

    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"Minute offset out of range: {minutes}")
    return minutes


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class DaySchedule(ValueObject):
    enabled: bool
    start_minutes: int
    end_minutes: int

    def __post_init__(self):
        for value in (self.start_minutes, self.end_minutes):
            if not 0 <= value < MINUTES_PER_DAY:
                raise ValueError(f"Minute offset out of range: {value}")

    @property
    def is_overnight(self) -> bool:
        return self.end_minutes < self.start_minutes

    def contains(self, minutes: int) -> bool:
        return self.enabled and self.start_minutes <= minutes <= self.end_minutes

    def to_dict(self) -> dict:
        return {
            'enabled': self.enabled,
            'start': format_minutes(self.start_minutes),
            'end': format_minutes(self.end_minutes),
        }


@dataclass(frozen=True)
class WeeklySchedule(ValueObject):
    """Per-weekday windows; a weekday missing from ``days`` is closed."""
    days: Mapping[str, DaySchedule] = field(default_factory=dict)

    def __post_init__(self):
        unknown = set(self.days) - set(WEEKDAYS)
        if unknown:
            raise ValueError(f"Unknown weekday(s): {', '.join(sorted(unknown))}")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Mapping] | None) -> 'WeeklySchedule | None':
        """
        Build from the stored JSON shape::

            {"monday": {"enabled": true, "start": "08:00", "end": "18:00"}}

        ``None`` or an empty mapping means "no schedule" (always open).
        """
        if not raw:
            return None
        days: Dict[str, DaySchedule] = {}
        for weekday, entry in raw.items():
            key = weekday.lower()
            days[key] = DaySchedule(
                enabled=bool(entry.get('enabled', True)),
                start_minutes=parse_minutes(entry.get('start', 0)),
                end_minutes=parse_minutes(entry.get('end', MINUTES_PER_DAY - 1)),
            )
        return cls(days=days)

    def for_weekday(self, weekday: str) -> DaySchedule | None:
        return self.days.get(weekday)

    def to_dict(self) -> dict:
        return {day: entry.to_dict() for day, entry in self.days.items()}


def is_open(schedule: WeeklySchedule | None, now: datetime) -> bool:
    """
    True when a service with ``schedule`` can be booked at ``now``.

    ``now`` must already be expressed in the hotel's local time; the gate
    reads its weekday and wall-clock minutes as-is.
    """
    if schedule is None:
        return True

    entry = schedule.for_weekday(WEEKDAYS[now.weekday()])
    if entry is None:
        return False
    return entry.contains(now.hour * 60 + now.minute)
