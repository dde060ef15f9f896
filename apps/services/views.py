"""Service listing API."""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import generics, permissions  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.domain.clock import system_clock

from .filters import ServiceFilterSet
from .models import Service
from .serializers import ServiceSerializer


class ServiceListView(generics.ListAPIView):
    """Services that are bookable right now, filtered by hotel and category."""

    serializer_class = ServiceSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ServiceFilterSet
    clock = system_clock

    def get_queryset(self):  # type: ignore
        return Service.objects.select_related(
            "hotel", "hotel__markup_policy", "provider",
        ).filter(
            is_active=True,
            hotel__is_active=True,
            provider__is_active=True,
        )

    def list(self, request, *args, **kwargs):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        local_now = timezone.localtime(self.clock.now())
        open_services = [service for service in queryset if service.is_open_at(local_now)]
        serializer = self.get_serializer(open_services, many=True)
        return Response(serializer.data)
