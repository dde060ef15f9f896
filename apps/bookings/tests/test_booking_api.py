"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from unittest import mock
from uuid import uuid4

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.bookings.views import BookingViewSet
from apps.services.models import Service
from apps.users.models import User
from shared.domain.clock import FixedClock

from .factories import LAUNDRY_CATALOG, make_hotel, make_provider, make_service, make_user

NOW = datetime(2026, 6, 1, 9, 0, tzinfo=timezone.utc)


class BookingAPITests(APITestCase):
    """Covers creation, lifecycle transitions and access rules."""

    def setUp(self) -> None:
        patcher = mock.patch.object(BookingViewSet, "clock", FixedClock(NOW))
        patcher.start()
        self.addCleanup(patcher.stop)

        self.guest = make_user(room_number="512")
        self.hotel_admin = make_user("admin@example.com", role=User.RoleChoices.HOTEL_ADMIN)
        self.provider_user = make_user("spa@example.com", role=User.RoleChoices.PROVIDER)
        self.staff = make_user("ops@example.com", role=User.RoleChoices.SUPERUSER, is_staff=True)

        self.hotel = make_hotel(admin=self.hotel_admin, markup="15")
        self.provider = make_provider(self.hotel, user=self.provider_user)
        self.service = make_service(self.provider)

        self.client.force_authenticate(self.guest)
        self.list_url = reverse("booking-list")

    def _payload(self, **overrides) -> dict:
        payload = {
            "service": self.service.id,
            "preferred_date": "2026-06-05",
            "preferred_time": "14:30",
            "payment_method": "online",
            "quantity": 3,
        }
        payload.update(overrides)
        return payload

    def _book(self, **overrides) -> dict:
        response = self.client.post(self.list_url, self._payload(**overrides), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data

    def test_guest_can_create_booking(self) -> None:
        data = self._book()

        self.assertEqual(data["status"], "pending")
        self.assertEqual(data["payment_status"], "pending")
        self.assertTrue(data["requires_payment"])
        self.assertEqual(data["pricing"]["subtotal"], "60.00")
        self.assertEqual(data["pricing"]["markup"]["amount"], "9.00")
        self.assertEqual(data["pricing"]["markup"]["source"], "hotel_default")
        self.assertEqual(data["pricing"]["total_amount"], "69.00")
        self.assertEqual(data["preferred_time"], "14:30")
        self.assertEqual(data["room_number"], "512")

        booking = Booking.objects.get(pk=data["id"])
        self.assertEqual(booking.guest, self.guest)
        self.assertEqual(booking.provider_earnings + booking.hotel_earnings, booking.total_amount)

    def test_cash_booking_is_confirmed_immediately(self) -> None:
        data = self._book(payment_method="cash")

        self.assertEqual(data["status"], "confirmed")
        self.assertEqual(data["payment_status"], "paid")
        self.assertFalse(data["requires_payment"])

    def test_invalid_payment_method(self) -> None:
        response = self.client.post(self.list_url, self._payload(payment_method="card"), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "invalid")
        self.assertEqual(response.data["field"], "payment_method")
        self.assertEqual(Booking.objects.count(), 0)

    def test_unknown_service(self) -> None:
        response = self.client.post(self.list_url, self._payload(service=999_999), format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["code"], "not_found")

    def test_anonymous_cannot_book(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_cancel_ahead_of_time(self) -> None:
        data = self._book()

        response = self.client.post(
            reverse("booking-cancel", args=[data["id"]]), {"reason": "Change of plans"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "cancelled")
        self.assertEqual(response.data["cancellation_reason"], "Change of plans")

    def test_cancel_inside_24_hours_conflicts(self) -> None:
        data = self._book(preferred_date="2026-06-02", preferred_time="08:00")

        response = self.client.post(reverse("booking-cancel", args=[data["id"]]), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "invalid_transition")
        self.assertEqual(response.data["hours_until_service"], 23.0)
        self.assertEqual(Booking.objects.get(pk=data["id"]).status, Booking.Status.PENDING)

    def test_staff_confirms_online_payment(self) -> None:
        data = self._book()
        self.client.force_authenticate(self.staff)

        response = self.client.post(
            reverse("booking-payment-confirm"),
            {"booking_id": data["id"], "payment_reference": "pi_42"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "confirmed")
        self.assertEqual(response.data["payment_status"], "paid")
        self.assertEqual(response.data["payment_reference"], "pi_42")

    def test_guest_cannot_confirm_payment(self) -> None:
        data = self._book()

        response = self.client.post(
            reverse("booking-payment-confirm"),
            {"booking_id": data["id"], "payment_reference": "pi_42"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_failed_payment_is_recorded(self) -> None:
        data = self._book()
        self.client.force_authenticate(self.staff)

        response = self.client.post(
            reverse("booking-payment-fail"),
            {"booking_id": data["id"], "reason": "card_declined"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(response.data["payment_status"], "failed")
        self.assertTrue(response.data["requires_payment"])

    def test_confirm_unknown_booking(self) -> None:
        self.client.force_authenticate(self.staff)

        response = self.client.post(
            reverse("booking-payment-confirm"),
            {"booking_id": str(uuid4()), "payment_reference": "pi_42"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)

    def test_complete_and_review(self) -> None:
        data = self._book(payment_method="cash")

        self.client.force_authenticate(self.provider_user)
        response = self.client.post(reverse("booking-complete", args=[data["id"]]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "completed")
        self.assertEqual(response.data["payment_status"], "completed")

        self.client.force_authenticate(self.guest)
        response = self.client.post(
            reverse("booking-review", args=[data["id"]]), {"rating": 4, "comment": "Lovely"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["review"]["rating"], 4)

        self.provider.refresh_from_db()
        self.assertEqual(self.provider.rating, Decimal("4.00"))

        duplicate = self.client.post(reverse("booking-review", args=[data["id"]]), {"rating": 1}, format="json")
        self.assertEqual(duplicate.status_code, status.HTTP_409_CONFLICT, duplicate.data)
        self.assertEqual(duplicate.data["code"], "duplicate_review")

    def test_review_out_of_range(self) -> None:
        data = self._book(payment_method="cash")
        self.client.force_authenticate(self.hotel_admin)
        self.client.post(reverse("booking-complete", args=[data["id"]]))
        self.client.force_authenticate(self.guest)

        response = self.client.post(reverse("booking-review", args=[data["id"]]), {"rating": 6}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIsNone(Booking.objects.get(pk=data["id"]).review_rating)

    def test_guest_cannot_complete(self) -> None:
        data = self._book(payment_method="cash")

        response = self.client.post(reverse("booking-complete", args=[data["id"]]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_complete_pending_booking_conflicts(self) -> None:
        data = self._book()
        self.client.force_authenticate(self.provider_user)

        response = self.client.post(reverse("booking-complete", args=[data["id"]]))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)

    def test_listing_is_scoped_to_the_caller(self) -> None:
        data = self._book()
        other_guest = make_user("other@example.com")

        self.client.force_authenticate(other_guest)
        self.assertEqual(self.client.get(self.list_url).data, [])
        detail = self.client.get(reverse("booking-detail", args=[data["id"]]))
        self.assertEqual(detail.status_code, status.HTTP_404_NOT_FOUND)

        for user in (self.guest, self.provider_user, self.hotel_admin, self.staff):
            self.client.force_authenticate(user)
            response = self.client.get(self.list_url)
            self.assertEqual([item["id"] for item in response.data], [data["id"]], user.email)

    def test_filter_by_status(self) -> None:
        self._book()
        self._book(payment_method="cash")

        response = self.client.get(self.list_url, {"status": "confirmed"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["status"] for item in response.data], ["confirmed"])

    def test_malformed_laundry_items(self) -> None:
        laundry = make_service(
            self.provider,
            name="Wash & fold",
            category=Service.Category.LAUNDRY,
            item_catalog=LAUNDRY_CATALOG,
        )

        response = self.client.post(
            self.list_url,
            self._payload(service=laundry.id, details={"items": ["shirt"]}),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["field"], "items")
        self.assertEqual(Booking.objects.count(), 0)

    def test_room_number_is_required(self) -> None:
        self.client.force_authenticate(make_user("roomless@example.com"))

        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["field"], "room_number")
        self.assertEqual(Booking.objects.count(), 0)

        response = self.client.post(self.list_url, self._payload(room_number="1204"), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["room_number"], "1204")
