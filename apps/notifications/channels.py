"""Delivery channels for booking notifications.

Channels never raise: every outcome, including a missing address or a
transport error, comes back as a ``ChannelResult``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import requests  # type: ignore
from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore

from shared.domain.exceptions import NotificationFailure

from .templates import Audience

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutgoingMessage:
    audience: Audience
    recipient_name: str
    email: str
    phone: str
    subject: str
    body: str
    template: str
    parameters: tuple[str, ...] = ()


@dataclass
class ChannelResult:
    channel: str
    audience: Audience
    recipient: str
    success: bool
    skipped: bool = False
    error: str = ""
    response: dict[str, Any] = field(default_factory=dict)


class BaseChannel(ABC):
    name = "base"

    @abstractmethod
    def send(self, message: OutgoingMessage) -> ChannelResult:
        pass

    def _skip(self, message: OutgoingMessage, reason: str) -> ChannelResult:
        return ChannelResult(
            channel=self.name,
            audience=message.audience,
            recipient="",
            success=False,
            skipped=True,
            error=reason,
        )


class EmailChannel(BaseChannel):
    """Plain-text email through Django's configured backend."""

    name = "email"

    def send(self, message: OutgoingMessage) -> ChannelResult:
        if not message.email:
            return self._skip(message, "No email")
        try:
            send_mail(
                subject=message.subject,
                message=message.body,
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[message.email],
                fail_silently=False,
            )
        except Exception as e:
            return ChannelResult(self.name, message.audience, message.email, success=False, error=str(e))
        return ChannelResult(self.name, message.audience, message.email, success=True)


class WhatsAppChannel(BaseChannel):
    """Template message through the WhatsApp Cloud API."""

    name = "whatsapp"

    def __init__(
        self,
        api_url: str | None = None,
        access_token: str | None = None,
        language: str | None = None,
        timeout: float | None = None,
    ):
        self.api_url = api_url if api_url is not None else settings.WHATSAPP_API_URL
        self.access_token = access_token if access_token is not None else settings.WHATSAPP_ACCESS_TOKEN
        self.language = language or settings.WHATSAPP_TEMPLATE_LANGUAGE
        self.timeout = timeout or settings.WHATSAPP_TIMEOUT

    @property
    def configured(self) -> bool:
        return bool(self.api_url and self.access_token)

    def send(self, message: OutgoingMessage) -> ChannelResult:
        if not self.configured:
            return self._skip(message, "WhatsApp is not configured")
        if not message.phone:
            return self._skip(message, "No phone number")
        try:
            response = self._post(message)
        except (requests.RequestException, NotificationFailure) as e:
            logger.error(f"Error sending WhatsApp message to {message.phone}: {e}")
            return ChannelResult(self.name, message.audience, message.phone, success=False, error=str(e))
        return ChannelResult(self.name, message.audience, message.phone, success=True, response=response)

    def _post(self, message: OutgoingMessage) -> dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }
        payload = {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": message.phone.lstrip("+"),
            "type": "template",
            "template": {
                "name": message.template,
                "language": {"code": self.language},
                "components": [
                    {
                        "type": "body",
                        "parameters": [{"type": "text", "text": value} for value in message.parameters],
                    }
                ],
            },
        }
        response = requests.post(f"{self.api_url}/messages", headers=headers, json=payload, timeout=self.timeout)
        if response.status_code >= 400:
            raise NotificationFailure(
                f"WhatsApp API responded {response.status_code}",
                status_code=response.status_code,
                body=response.text[:500],
            )
        return response.json()


def default_channels() -> list[BaseChannel]:
    return [EmailChannel(), WhatsAppChannel()]
