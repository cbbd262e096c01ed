import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("properties", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="BookingRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tenant_name", models.CharField(max_length=255)),
                ("tenant_phone", models.CharField(max_length=20)),
                ("tenant_email", models.EmailField(max_length=254)),
                ("preferred_viewing_date", models.DateField()),
                ("preferred_viewing_time", models.TimeField()),
                ("message", models.TextField(blank=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("declined", "Declined"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("admin_response", models.TextField(blank=True)),
                ("scheduled_date", models.DateTimeField(blank=True, null=True)),
                ("responded_at", models.DateTimeField(blank=True, null=True)),
                (
                    "feedback_rating",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(5),
                        ],
                    ),
                ),
                ("feedback_comment", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "admin",
                    models.ForeignKey(
                        blank=True,
                        help_text="Property admin at the time the request was made.",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="handled_booking_requests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "property",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="booking_requests",
                        to="properties.property",
                    ),
                ),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="booking_requests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking request",
                "verbose_name_plural": "Booking requests",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["admin", "status"], name="booking_admin_status_idx"),
                    models.Index(fields=["tenant", "-created_at"], name="booking_tenant_created_idx"),
                    models.Index(fields=["status", "-created_at"], name="booking_status_created_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(feedback_rating__isnull=True)
                        | models.Q(feedback_rating__gte=1, feedback_rating__lte=5),
                        name="booking_feedback_rating_range",
                    ),
                ],
            },
        ),
    ]
