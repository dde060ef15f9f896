"""Template set selection for booking notifications.

Message bodies are owned by the WhatsApp Business template registry and
the mail team; this module only decides which template (and subject)
applies to a given category, event and audience.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NotificationEvent(str, Enum):
    CREATED = "created"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Audience(str, Enum):
    GUEST = "guest"
    PROVIDER = "provider"


# Who hears about what; completion is only announced to the guest.
EVENT_AUDIENCES: dict[NotificationEvent, tuple[Audience, ...]] = {
    NotificationEvent.CREATED: (Audience.GUEST, Audience.PROVIDER),
    NotificationEvent.CANCELLED: (Audience.GUEST, Audience.PROVIDER),
    NotificationEvent.COMPLETED: (Audience.GUEST,),
}

_SUBJECTS = {
    (NotificationEvent.CREATED, Audience.GUEST): "{label} booking {number} received",
    (NotificationEvent.CREATED, Audience.PROVIDER): "New {label} request {number}",
    (NotificationEvent.CANCELLED, Audience.GUEST): "{label} booking {number} cancelled",
    (NotificationEvent.CANCELLED, Audience.PROVIDER): "{label} request {number} was cancelled",
    (NotificationEvent.COMPLETED, Audience.GUEST): "{label} booking {number} completed",
}


@dataclass(frozen=True)
class TemplateSet:
    name: str
    label: str

    def template_name(self, event: NotificationEvent, audience: Audience) -> str:
        return f"{self.name}_{event.value}_{audience.value}"

    def subject(self, event: NotificationEvent, audience: Audience, booking_number: str) -> str:
        return _SUBJECTS[(event, audience)].format(label=self.label, number=booking_number)


GENERIC_TEMPLATES = TemplateSet("service_booking", "Service")

TEMPLATE_SETS: dict[str, TemplateSet] = {
    "laundry": TemplateSet("laundry_booking", "Laundry"),
    "transportation": TemplateSet("transport_booking", "Transportation"),
    "housekeeping": TemplateSet("housekeeping_booking", "Housekeeping"),
    "dining": TemplateSet("dining_booking", "Dining"),
    "restaurant": TemplateSet("dining_booking", "Dining"),
}


def select_templates(category: str) -> TemplateSet:
    return TEMPLATE_SETS.get(category, GENERIC_TEMPLATES)
