"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsPlatformStaff, is_platform_staff
from shared.domain.clock import system_clock

from .application.command_handlers import (
    AddReviewCommand,
    AddReviewHandler,
    CancelBookingCommand,
    CancelBookingHandler,
    CompleteBookingCommand,
    CompleteBookingHandler,
    ConfirmPaymentCommand,
    ConfirmPaymentHandler,
    CreateBookingCommand,
    CreateBookingHandler,
    FailPaymentCommand,
    FailPaymentHandler,
)
from .models import Booking
from .serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    CancelBookingSerializer,
    PaymentConfirmationSerializer,
    PaymentFailureSerializer,
    ReviewSerializer,
)


class IsBookingStakeholder(permissions.BasePermission):
    """The guest, the fulfilling provider, the hotel's administrator and staff see a booking."""

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        user = request.user
        if is_platform_staff(user):
            return True
        if obj.guest_id == user.id:
            return True
        if obj.provider.user_id == user.id:
            return True
        return obj.hotel.admin_id == user.id


def _is_fulfiller(user, booking: Booking) -> bool:
    return (
        is_platform_staff(user)
        or booking.provider.user_id == user.id
        or booking.hotel.admin_id == user.id
    )


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Booking creation, listing and lifecycle transitions."""

    queryset = Booking.objects.select_related("service", "provider", "hotel", "guest").all()
    permission_classes = [permissions.IsAuthenticated, IsBookingStakeholder]
    filterset_fields = ["status", "payment_status", "category", "hotel", "provider"]
    clock = system_clock

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if is_platform_staff(user):
            return qs
        if hasattr(user, "is_hotel_admin") and user.is_hotel_admin():
            return qs.filter(hotel__admin=user)
        if hasattr(user, "is_provider") and user.is_provider():
            return qs.filter(provider__user=user)
        return qs.filter(guest=user)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = CreateBookingHandler(clock=self.clock).handle(
            CreateBookingCommand(
                service_id=data["service"],
                guest_id=request.user.id,
                preferred_date=data["preferred_date"],
                preferred_time=data["preferred_time"],
                payment_method=data["payment_method"],
                quantity=data["quantity"],
                first_name=data["first_name"],
                last_name=data["last_name"],
                email=data["email"],
                phone=data["phone"],
                room_number=data["room_number"],
                pickup_location=data["pickup_location"],
                delivery_location=data["delivery_location"],
                instructions=data["instructions"],
                details=data["details"],
            )
        )

        booking = Booking.objects.select_related("service", "provider").get(pk=result.booking_id)
        payload = BookingSerializer(booking, context=self.get_serializer_context()).data
        return Response(payload, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        if booking.guest_id != request.user.id and not is_platform_staff(request.user):
            return Response(status=status.HTTP_403_FORBIDDEN)

        serializer = CancelBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        CancelBookingHandler(clock=self.clock).handle(
            CancelBookingCommand(booking_id=booking.id, reason=serializer.validated_data["reason"])
        )
        return self._render(booking.pk)

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        if not _is_fulfiller(request.user, booking):
            return Response(status=status.HTTP_403_FORBIDDEN)

        CompleteBookingHandler(clock=self.clock).handle(CompleteBookingCommand(booking_id=booking.id))
        return self._render(booking.pk)

    @action(detail=True, methods=["post"])
    def review(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        if booking.guest_id != request.user.id:
            return Response(status=status.HTTP_403_FORBIDDEN)

        serializer = ReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        AddReviewHandler(clock=self.clock).handle(
            AddReviewCommand(
                booking_id=booking.id,
                rating=serializer.validated_data["rating"],
                comment=serializer.validated_data["comment"],
            )
        )
        return self._render(booking.pk, status.HTTP_201_CREATED)

    @action(
        detail=False,
        methods=["post"],
        url_path="payments/confirm",
        url_name="payment-confirm",
        permission_classes=[IsPlatformStaff],
    )
    def confirm_payment(self, request):  # type: ignore
        serializer = PaymentConfirmationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = ConfirmPaymentHandler(clock=self.clock).handle(
            ConfirmPaymentCommand(
                booking_id=serializer.validated_data["booking_id"],
                payment_reference=serializer.validated_data["payment_reference"],
            )
        )
        return self._render(booking.id)

    @action(
        detail=False,
        methods=["post"],
        url_path="payments/fail",
        url_name="payment-fail",
        permission_classes=[IsPlatformStaff],
    )
    def fail_payment(self, request):  # type: ignore
        serializer = PaymentFailureSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = FailPaymentHandler(clock=self.clock).handle(
            FailPaymentCommand(
                booking_id=serializer.validated_data["booking_id"],
                reason=serializer.validated_data["reason"],
            )
        )
        return self._render(booking.id)

    def _render(self, booking_id, status_code=status.HTTP_200_OK) -> Response:
        booking = self.queryset.get(pk=booking_id)
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data, status=status_code)
