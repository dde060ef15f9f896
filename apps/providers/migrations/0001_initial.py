import decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hotels", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ServiceProvider",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("business_name", models.CharField(max_length=255, verbose_name="Business name")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="Email")),
                (
                    "phone",
                    models.CharField(
                        blank=True,
                        help_text="WhatsApp-capable number in international format.",
                        max_length=20,
                        verbose_name="Phone",
                    ),
                ),
                (
                    "provider_type",
                    models.CharField(
                        choices=[("internal", "Hotel-operated"), ("external", "External business")],
                        default="external",
                        max_length=20,
                    ),
                ),
                (
                    "markup_override",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Replaces the hotel markup for this provider's services when set.",
                        max_digits=5,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))],
                    ),
                ),
                ("markup_override_reason", models.CharField(blank=True, max_length=255)),
                (
                    "rating",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Average of all reviews on completed bookings.",
                        max_digits=3,
                        null=True,
                    ),
                ),
                ("total_bookings", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "hotel",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="providers",
                        to="hotels.hotel",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="providers",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Service provider",
                "verbose_name_plural": "Service providers",
                "ordering": ["business_name"],
                "indexes": [models.Index(fields=["hotel", "is_active"], name="provider_hotel_active_idx")],
            },
        ),
    ]
