from __future__ import annotations

from unittest import mock

import requests

from apps.notifications.channels import BaseChannel, ChannelResult, EmailChannel, WhatsAppChannel
from apps.notifications.dispatcher import BookingNotice, NotificationDispatcher, build_message
from apps.notifications.templates import Audience, NotificationEvent, select_templates


def make_notice(event=NotificationEvent.CREATED, category="laundry", **extra) -> BookingNotice:
    fields = dict(
        event=event,
        booking_number="LN20260601090000ABCD",
        category=category,
        service_name="Wash & fold",
        scheduled_for="05.06.2026 09:00",
        total_amount="15.40",
        currency="USD",
        guest_name="Ada Lovelace",
        guest_email="ada@example.com",
        guest_phone="+15550000002",
        room_number="512",
        provider_name="Fresh & Clean",
        provider_email="provider@example.com",
        provider_phone="+15550000001",
    )
    fields.update(extra)
    return BookingNotice(**fields)


class RecordingChannel(BaseChannel):
    name = "recording"

    def __init__(self):
        self.sent = []

    def send(self, message):
        self.sent.append(message)
        return ChannelResult(self.name, message.audience, message.email, success=True)


class ExplodingChannel(BaseChannel):
    name = "exploding"

    def send(self, message):
        raise RuntimeError("socket closed")


def test_templates_follow_category():
    assert select_templates("laundry").name == "laundry_booking"
    assert select_templates("restaurant").name == "dining_booking"
    assert select_templates("spa").name == "service_booking"


def test_provider_message_carries_guest_room():
    message = build_message(make_notice(), Audience.PROVIDER)

    assert message.template == "laundry_booking_created_provider"
    assert message.subject == "New Laundry request LN20260601090000ABCD"
    assert message.email == "provider@example.com"
    assert "room 512" in message.body


def test_cancellation_reason_is_included():
    message = build_message(make_notice(NotificationEvent.CANCELLED, reason="Flight moved"), Audience.GUEST)

    assert message.subject == "Laundry booking LN20260601090000ABCD cancelled"
    assert "Reason: Flight moved" in message.body


def test_one_failing_channel_does_not_block_the_rest():
    recorder = RecordingChannel()
    dispatcher = NotificationDispatcher(channels=[ExplodingChannel(), recorder])

    results = dispatcher.dispatch(make_notice())

    assert [message.audience for message in recorder.sent] == [Audience.GUEST, Audience.PROVIDER]
    assert [(result.channel, result.success) for result in results] == [
        ("exploding", False),
        ("recording", True),
        ("exploding", False),
        ("recording", True),
    ]
    assert results[0].error == "socket closed"


def test_completion_only_notifies_the_guest():
    recorder = RecordingChannel()

    NotificationDispatcher(channels=[recorder]).dispatch(make_notice(NotificationEvent.COMPLETED))

    assert [message.audience for message in recorder.sent] == [Audience.GUEST]


def test_email_without_address_is_skipped():
    message = build_message(make_notice(guest_email=""), Audience.GUEST)

    result = EmailChannel().send(message)

    assert result.skipped and not result.success


def test_unconfigured_whatsapp_is_skipped(settings):
    settings.WHATSAPP_API_URL = ""
    message = build_message(make_notice(), Audience.GUEST)

    result = WhatsAppChannel().send(message)

    assert result.skipped
    assert result.error == "WhatsApp is not configured"


def test_whatsapp_posts_a_template_message(settings):
    channel = WhatsAppChannel(api_url="https://graph.example.com/v18.0/123", access_token="token")
    message = build_message(make_notice(), Audience.GUEST)

    with mock.patch("apps.notifications.channels.requests.post") as post:
        post.return_value.status_code = 200
        post.return_value.json.return_value = {"messages": [{"id": "wamid.1"}]}
        result = channel.send(message)

    assert result.success
    assert result.recipient == "+15550000002"
    args, kwargs = post.call_args
    assert args[0] == "https://graph.example.com/v18.0/123/messages"
    assert kwargs["json"]["to"] == "15550000002"
    assert kwargs["json"]["template"]["name"] == "laundry_booking_created_guest"
    assert kwargs["headers"]["Authorization"] == "Bearer token"
    assert kwargs["timeout"] == settings.WHATSAPP_TIMEOUT


def test_whatsapp_api_error_becomes_a_failed_result():
    channel = WhatsAppChannel(api_url="https://graph.example.com/v18.0/123", access_token="token", timeout=2)
    message = build_message(make_notice(), Audience.PROVIDER)

    with mock.patch("apps.notifications.channels.requests.post") as post:
        post.return_value.status_code = 401
        post.return_value.text = "invalid token"
        result = channel.send(message)

    assert not result.success and not result.skipped
    assert "401" in result.error


def test_whatsapp_transport_error_becomes_a_failed_result():
    channel = WhatsAppChannel(api_url="https://graph.example.com/v18.0/123", access_token="token", timeout=2)
    message = build_message(make_notice(), Audience.PROVIDER)

    with mock.patch("apps.notifications.channels.requests.post", side_effect=requests.Timeout("timed out")):
        result = channel.send(message)

    assert not result.success
    assert "timed out" in result.error
