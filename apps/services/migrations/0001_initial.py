import decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hotels", "0001_initial"),
        ("providers", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Service",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("laundry", "Laundry"),
                            ("transportation", "Transportation"),
                            ("tours", "Tours"),
                            ("spa", "Spa"),
                            ("dining", "Dining"),
                            ("entertainment", "Entertainment"),
                            ("shopping", "Shopping"),
                            ("fitness", "Fitness"),
                            ("housekeeping", "Housekeeping"),
                        ],
                        max_length=32,
                    ),
                ),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("description", models.TextField(blank=True)),
                (
                    "base_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.01"))],
                    ),
                ),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("duration_minutes", models.PositiveIntegerField(default=60)),
                (
                    "express_surcharge",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Flat surcharge for express handling; empty when express is not offered.",
                        max_digits=10,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))],
                    ),
                ),
                (
                    "item_catalog",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text='Priced items for itemised services: {"shirt": {"name": "Shirt", "price": "4.50"}}.',
                    ),
                ),
                (
                    "availability_schedule",
                    models.JSONField(
                        blank=True,
                        help_text=(
                            'Weekly hours: {"monday": {"enabled": true, "start": "08:00", "end": "18:00"}}. '
                            "Empty means always available."
                        ),
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
                        related_name="services",
                        to="hotels.hotel",
                    ),
                ),
                (
                    "provider",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="services",
                        to="providers.serviceprovider",
                    ),
                ),
            ],
            options={
                "verbose_name": "Service",
                "verbose_name_plural": "Services",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["hotel", "category", "is_active"], name="service_hotel_category_idx"),
                ],
            },
        ),
    ]
