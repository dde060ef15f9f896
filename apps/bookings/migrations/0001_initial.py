import decimal
import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hotels", "0001_initial"),
        ("providers", "0001_initial"),
        ("services", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("booking_number", models.CharField(editable=False, max_length=32, unique=True)),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("generic", "Generic"),
                            ("laundry", "Laundry"),
                            ("transportation", "Transportation"),
                            ("dining", "Dining"),
                        ],
                        default="generic",
                        max_length=20,
                    ),
                ),
                ("category", models.CharField(max_length=32)),
                ("guest_first_name", models.CharField(max_length=150)),
                ("guest_last_name", models.CharField(blank=True, max_length=150)),
                ("guest_email", models.EmailField(blank=True, max_length=254)),
                ("guest_phone", models.CharField(blank=True, max_length=20)),
                ("room_number", models.CharField(blank=True, max_length=20)),
                ("preferred_date", models.DateField()),
                ("preferred_time", models.CharField(help_text="Normalised HH:MM.", max_length=5)),
                (
                    "scheduled_at",
                    models.DateTimeField(
                        help_text="Start of service; the cancellation window is measured from it.",
                    ),
                ),
                ("duration_minutes", models.PositiveIntegerField(default=60)),
                ("pickup_location", models.CharField(blank=True, max_length=255)),
                ("delivery_location", models.CharField(blank=True, max_length=255)),
                ("instructions", models.TextField(blank=True)),
                ("details", models.JSONField(blank=True, default=dict)),
                ("base_price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("quantity", models.PositiveIntegerField(default=1)),
                (
                    "express_surcharge",
                    models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=10),
                ),
                ("subtotal", models.DecimalField(decimal_places=2, max_digits=12)),
                ("markup_percentage", models.DecimalField(decimal_places=2, max_digits=5)),
                ("markup_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("markup_source", models.CharField(blank=True, max_length=32)),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("provider_earnings", models.DecimalField(decimal_places=2, max_digits=12)),
                ("hotel_earnings", models.DecimalField(decimal_places=2, max_digits=12)),
                ("platform_fee", models.DecimalField(decimal_places=2, max_digits=12)),
                ("currency", models.CharField(default="USD", max_length=3)),
                (
                    "payment_method",
                    models.CharField(choices=[("online", "Online"), ("cash", "Cash")], max_length=10),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("pending", "Awaiting payment"),
                            ("paid", "Paid"),
                            ("completed", "Settled"),
                            ("failed", "Payment failed"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("payment_reference", models.CharField(blank=True, max_length=128)),
                ("payment_failure_reason", models.CharField(blank=True, max_length=255)),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("confirmed", "Confirmed"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("confirmed_at", models.DateTimeField(blank=True, null=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("cancellation_reason", models.CharField(blank=True, max_length=255)),
                ("review_rating", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("review_comment", models.TextField(blank=True)),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "guest",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="service_bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "hotel",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="hotels.hotel",
                    ),
                ),
                (
                    "provider",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="providers.serviceprovider",
                    ),
                ),
                (
                    "service",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="services.service",
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking",
                "verbose_name_plural": "Bookings",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["provider", "status"], name="booking_provider_status_idx"),
                    models.Index(fields=["hotel", "created_at"], name="booking_hotel_created_idx"),
                    models.Index(fields=["guest", "created_at"], name="booking_guest_created_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("review_rating__isnull", True))
                        | models.Q(("review_rating__gte", 1), ("review_rating__lte", 5)),
                        name="booking_review_rating_range",
                    ),
                ],
            },
        ),
    ]
