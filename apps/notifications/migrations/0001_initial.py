import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("bookings", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="NotificationDelivery",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "event",
                    models.CharField(
                        choices=[
                            ("created", "Booking created"),
                            ("cancelled", "Booking cancelled"),
                            ("completed", "Booking completed"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "audience",
                    models.CharField(choices=[("guest", "Guest"), ("provider", "Provider")], max_length=20),
                ),
                ("channel", models.CharField(max_length=20)),
                ("recipient", models.CharField(blank=True, max_length=255)),
                (
                    "outcome",
                    models.CharField(
                        choices=[("sent", "Sent"), ("failed", "Failed"), ("skipped", "Skipped")],
                        max_length=20,
                    ),
                ),
                ("error", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "booking",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notification_deliveries",
                        to="bookings.booking",
                    ),
                ),
            ],
            options={
                "verbose_name": "Notification delivery",
                "verbose_name_plural": "Notification deliveries",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["booking", "event"], name="delivery_booking_event_idx"),
                ],
            },
        ),
    ]
