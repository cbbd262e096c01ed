"""Property domain models for NyumbaLink.

Properties are listed for monthly rent. Each one is assigned to a property
admin who handles its viewing requests. The tenant-facing price is the rent
plus the platform service fee; both derived amounts are recomputed on every
save so they never drift from the rent.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain.fees import calculate_fees
from .domain.search import Listing


class Amenity(models.Model):
    """Amenity that can be attached to a property (Parking, Security, ...)."""

    class Category(models.TextChoices):
        BASIC = "basic", _("Basic")
        ADDITIONAL = "additional", _("Additional")
        SAFETY = "safety", _("Safety")

    name = models.CharField(max_length=100, unique=True)
    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.BASIC,
    )
    icon = models.CharField(
        max_length=100,
        blank=True,
        help_text=_("Icon identifier used by the frontend."),
    )

    class Meta:
        verbose_name = _("Amenity")
        verbose_name_plural = _("Amenities")
        ordering = ["category", "name"]

    def __str__(self) -> str:
        return self.name


class PropertyQuerySet(models.QuerySet):
    def available(self):
        return self.filter(is_available=True)

    def managed_by(self, admin):
        return self.filter(assigned_admin=admin)


class Property(models.Model):
    """Property listed for monthly rent."""

    class PropertyType(models.TextChoices):
        HOUSE = "house", _("House")
        APARTMENT = "apartment", _("Apartment")
        ROOM = "room", _("Room")
        STUDIO = "studio", _("Studio")
        VILLA = "villa", _("Villa")

    assigned_admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_properties",
        help_text=_("Property admin handling this property's viewing requests."),
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    property_type = models.CharField(
        max_length=20,
        choices=PropertyType.choices,
        default=PropertyType.APARTMENT,
    )
    bedrooms = models.PositiveSmallIntegerField(default=1)
    bathrooms = models.PositiveSmallIntegerField(default=1)
    square_footage = models.PositiveIntegerField(null=True, blank=True)

    rent_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Monthly rent."),
    )
    service_fee_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        editable=False,
    )
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        editable=False,
    )

    city = models.CharField(max_length=100)
    area = models.CharField(max_length=100, blank=True)
    full_address = models.CharField(max_length=255, blank=True)

    images = models.JSONField(default=list, blank=True, help_text=_("Image URLs, first one is the cover."))
    amenities = models.ManyToManyField(Amenity, blank=True, related_name="properties")
    pet_policy = models.CharField(max_length=255, blank=True)
    parking_available = models.BooleanField(default=False)

    is_available = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)

    views_count = models.PositiveIntegerField(default=0)
    inquiries_count = models.PositiveIntegerField(default=0)
    bookings_count = models.PositiveIntegerField(default=0)
    occupancy_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PropertyQuerySet.as_manager()

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rent_amount__gte=0),
                name="property_rent_not_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["is_available", "-created_at"], name="property_avail_created_idx"),
            models.Index(fields=["assigned_admin", "is_available"], name="property_admin_avail_idx"),
            models.Index(fields=["city"], name="property_city_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    def apply_fees(self) -> None:
        fees = calculate_fees(self.rent_amount)
        self.service_fee_amount = fees.service_fee_amount
        self.total_amount = fees.total_amount

    def save(self, *args, **kwargs):  # type: ignore
        self.apply_fees()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "rent_amount" in update_fields:
            kwargs["update_fields"] = set(update_fields) | {"service_fee_amount", "total_amount"}
        super().save(*args, **kwargs)

    def retire(self) -> None:
        """Take the property off the market without deleting it."""
        if self.is_available:
            self.is_available = False
            self.save(update_fields=["is_available", "updated_at"])

    def to_listing(self) -> Listing:
        """Flat view used by the in-memory search pipeline.

        Reads amenities through the prefetch cache when one is present.
        """
        return Listing(
            id=self.pk,
            title=self.title,
            price=self.rent_amount,
            city=self.city,
            district=self.area,
            neighborhood=self.full_address,
            description=self.description,
            property_type=self.property_type,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            amenities=tuple(amenity.name for amenity in self.amenities.all()),
            featured=self.is_featured,
            created_at=self.created_at,
        )
