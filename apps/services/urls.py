"""URL routing for the service listing."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import ServiceListView

urlpatterns = [
    path("", ServiceListView.as_view(), name="service-list"),
]
