"""Serializers for the booking API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Guest booking request; pricing and state are decided server-side."""

    service = serializers.IntegerField()
    preferred_date = serializers.DateField()
    preferred_time = serializers.CharField(required=False, allow_blank=True, default="")
    # Validated by the domain so the error names the accepted methods.
    payment_method = serializers.CharField()
    quantity = serializers.IntegerField(required=False, default=1)
    first_name = serializers.CharField(required=False, allow_blank=True, default="")
    last_name = serializers.CharField(required=False, allow_blank=True, default="")
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(required=False, allow_blank=True, default="")
    room_number = serializers.CharField(required=False, allow_blank=True, default="")
    pickup_location = serializers.CharField(required=False, allow_blank=True, default="")
    delivery_location = serializers.CharField(required=False, allow_blank=True, default="")
    instructions = serializers.CharField(required=False, allow_blank=True, default="")
    details = serializers.DictField(required=False, default=dict)


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking representation."""

    service_name = serializers.ReadOnlyField(source="service.name")
    provider_name = serializers.ReadOnlyField(source="provider.business_name")
    pricing = serializers.SerializerMethodField()
    review = serializers.SerializerMethodField()
    requires_payment = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "booking_number",
            "kind",
            "category",
            "service",
            "service_name",
            "provider",
            "provider_name",
            "hotel",
            "guest",
            "guest_first_name",
            "guest_last_name",
            "guest_email",
            "guest_phone",
            "room_number",
            "preferred_date",
            "preferred_time",
            "scheduled_at",
            "duration_minutes",
            "pickup_location",
            "delivery_location",
            "instructions",
            "details",
            "pricing",
            "payment_method",
            "payment_status",
            "payment_reference",
            "paid_at",
            "requires_payment",
            "status",
            "confirmed_at",
            "completed_at",
            "cancelled_at",
            "cancellation_reason",
            "review",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_pricing(self, obj: Booking) -> dict:
        return {
            "base_price": str(obj.base_price),
            "quantity": obj.quantity,
            "express_surcharge": str(obj.express_surcharge),
            "subtotal": str(obj.subtotal),
            "markup": {
                "percentage": str(obj.markup_percentage),
                "amount": str(obj.markup_amount),
                "source": obj.markup_source or None,
            },
            "total_amount": str(obj.total_amount),
            "provider_earnings": str(obj.provider_earnings),
            "hotel_earnings": str(obj.hotel_earnings),
            "platform_fee": str(obj.platform_fee),
            "currency": obj.currency,
        }

    def get_review(self, obj: Booking) -> dict | None:
        if obj.review_rating is None:
            return None
        return {
            "rating": obj.review_rating,
            "comment": obj.review_comment,
            "created_at": obj.reviewed_at,
        }

    def get_requires_payment(self, obj: Booking) -> bool:
        return obj.payment_status in (Booking.PaymentStatus.PENDING, Booking.PaymentStatus.FAILED)


class CancelBookingSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)


class ReviewSerializer(serializers.Serializer):
    rating = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, default="")


class PaymentConfirmationSerializer(serializers.Serializer):
    booking_id = serializers.UUIDField()
    payment_reference = serializers.CharField(max_length=128)


class PaymentFailureSerializer(serializers.Serializer):
    booking_id = serializers.UUIDField()
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
