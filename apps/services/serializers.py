"""Serializers for the service listing."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Service


class ServiceSerializer(serializers.ModelSerializer):
    """Service as a guest sees it: the price already carries the hotel markup."""

    provider_name = serializers.ReadOnlyField(source="provider.business_name")
    provider_rating = serializers.ReadOnlyField(source="provider.rating")
    guest_price = serializers.SerializerMethodField()
    express_available = serializers.SerializerMethodField()

    class Meta:
        model = Service
        fields = [
            "id",
            "hotel",
            "provider",
            "provider_name",
            "provider_rating",
            "category",
            "name",
            "description",
            "guest_price",
            "currency",
            "duration_minutes",
            "express_available",
            "item_catalog",
            "availability_schedule",
        ]
        read_only_fields = fields

    def get_guest_price(self, obj: Service) -> str:
        return str(obj.quote().total_amount)

    def get_express_available(self, obj: Service) -> bool:
        return obj.express_surcharge is not None
