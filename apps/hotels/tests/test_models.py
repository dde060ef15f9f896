from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from apps.bookings.domain.markup import MarkupSource
from apps.bookings.tests.factories import make_hotel, make_provider, make_service
from apps.hotels.models import MarkupPolicy
from apps.providers.models import ServiceProvider
from apps.services.models import Service


@pytest.mark.django_db
def test_category_rate_beats_hotel_default():
    hotel = make_hotel(markup="12", category_percentages={"laundry": "20"})
    laundry = make_service(make_provider(hotel), category=Service.Category.LAUNDRY)
    spa = make_service(laundry.provider)

    assert laundry.resolve_markup().percentage == Decimal("20")
    assert laundry.resolve_markup().source is MarkupSource.HOTEL_CATEGORY
    assert spa.resolve_markup().source is MarkupSource.HOTEL_DEFAULT


@pytest.mark.django_db
def test_negative_category_rate_fails_validation():
    policy = MarkupPolicy(hotel=make_hotel(), category_percentages={"spa": "-1"})

    with pytest.raises(ValidationError):
        policy.clean()


@pytest.mark.django_db
@pytest.mark.parametrize("value", ["abc", "1000", None])
def test_unusable_category_rate_fails_validation(value):
    policy = MarkupPolicy(hotel=make_hotel(), category_percentages={"laundry": value})

    with pytest.raises(ValidationError) as excinfo:
        policy.full_clean()

    assert "category_percentages" in excinfo.value.message_dict


@pytest.mark.django_db
def test_category_percentages_must_be_a_mapping():
    policy = MarkupPolicy(hotel=make_hotel(), category_percentages=["laundry", "20"])

    with pytest.raises(ValidationError):
        policy.clean()


@pytest.mark.django_db
def test_internal_provider_never_marks_up():
    hotel = make_hotel(markup="15")
    provider = make_provider(
        hotel,
        provider_type=ServiceProvider.ProviderType.INTERNAL,
        markup_override=Decimal("30"),
    )
    service = make_service(provider)

    provider.refresh_from_db()
    assert provider.markup_override == Decimal("0")
    assert service.quote().total_amount == Decimal("20.00")
    assert service.resolve_markup().source is MarkupSource.PROVIDER_OVERRIDE


@pytest.mark.django_db
def test_malformed_schedule_fails_validation():
    service = make_service(
        make_provider(make_hotel()),
        availability_schedule={"monday": {"start": "25:00", "end": "18:00"}},
    )

    with pytest.raises(ValidationError):
        service.clean()


@pytest.mark.django_db
def test_clean_normalises_schedule():
    service = make_service(
        make_provider(make_hotel()),
        availability_schedule={"Monday": {"start": 540, "end": "18:00"}},
    )

    service.clean()

    assert service.availability_schedule == {"monday": {"enabled": True, "start": "09:00", "end": "18:00"}}
