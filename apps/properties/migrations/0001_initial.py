from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Amenity",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True)),
                (
                    "category",
                    models.CharField(
                        choices=[("basic", "Basic"), ("additional", "Additional"), ("safety", "Safety")],
                        default="basic",
                        max_length=20,
                    ),
                ),
                (
                    "icon",
                    models.CharField(blank=True, help_text="Icon identifier used by the frontend.", max_length=100),
                ),
            ],
            options={
                "verbose_name": "Amenity",
                "verbose_name_plural": "Amenities",
                "ordering": ["category", "name"],
            },
        ),
        migrations.CreateModel(
            name="Property",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                (
                    "property_type",
                    models.CharField(
                        choices=[
                            ("house", "House"),
                            ("apartment", "Apartment"),
                            ("room", "Room"),
                            ("studio", "Studio"),
                            ("villa", "Villa"),
                        ],
                        default="apartment",
                        max_length=20,
                    ),
                ),
                ("bedrooms", models.PositiveSmallIntegerField(default=1)),
                ("bathrooms", models.PositiveSmallIntegerField(default=1)),
                ("square_footage", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "rent_amount",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Monthly rent.",
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "service_fee_amount",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=12),
                ),
                (
                    "total_amount",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=12),
                ),
                ("city", models.CharField(max_length=100)),
                ("area", models.CharField(blank=True, max_length=100)),
                ("full_address", models.CharField(blank=True, max_length=255)),
                (
                    "images",
                    models.JSONField(blank=True, default=list, help_text="Image URLs, first one is the cover."),
                ),
                ("pet_policy", models.CharField(blank=True, max_length=255)),
                ("parking_available", models.BooleanField(default=False)),
                ("is_available", models.BooleanField(default=True)),
                ("is_featured", models.BooleanField(default=False)),
                ("views_count", models.PositiveIntegerField(default=0)),
                ("inquiries_count", models.PositiveIntegerField(default=0)),
                ("bookings_count", models.PositiveIntegerField(default=0)),
                (
                    "occupancy_rate",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("100")),
                        ],
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "amenities",
                    models.ManyToManyField(blank=True, related_name="properties", to="properties.amenity"),
                ),
                (
                    "assigned_admin",
                    models.ForeignKey(
                        blank=True,
                        help_text="Property admin handling this property's viewing requests.",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="assigned_properties",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Property",
                "verbose_name_plural": "Properties",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["is_available", "-created_at"], name="property_avail_created_idx"),
                    models.Index(fields=["assigned_admin", "is_available"], name="property_admin_avail_idx"),
                    models.Index(fields=["city"], name="property_city_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(rent_amount__gte=0),
                        name="property_rent_not_negative",
                    ),
                ],
            },
        ),
    ]
