"""User domain models for NyumbaLink.

The marketplace distinguishes three roles: tenants who browse properties and
request viewings, property admins (employees) who manage the properties
assigned to them, and super admins who hire employees, assign properties and
read platform analytics. Employee attributes (employee id, hire date,
performance rating) live on the same user row.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?\d{7,15}$",
    message=_("Invalid phone number. Use the international format without spaces."),
)


class CustomUserManager(BaseUserManager):
    """User manager that uses email as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("An email address is required to create a user.")
        email = self.normalize_email(email)

        phone = extra_fields.get("phone")
        if phone:
            extra_fields["phone"] = self.normalize_phone(phone)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.RoleChoices.TENANT)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.RoleChoices.SUPER_ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)

    def employees(self):
        """Property admins, active or not."""
        return self.filter(role=CustomUser.RoleChoices.PROPERTY_ADMIN)

    @staticmethod
    def normalize_phone(phone: str) -> str:
        """Strip spaces and dashes so phones are stored uniformly."""
        return phone.replace(" ", "").replace("-", "")


class CustomUser(AbstractUser):
    """Platform user with a role and optional employee attributes."""

    class RoleChoices(models.TextChoices):
        SUPER_ADMIN = "super_admin", _("Super admin")
        PROPERTY_ADMIN = "property_admin", _("Property admin")
        TENANT = "tenant", _("Tenant")

    username = models.CharField(
        _("Display name"),
        max_length=150,
        blank=True,
        help_text=_("Optional, shown in interfaces and notifications."),
    )
    email = models.EmailField(_("Email"), unique=True)
    full_name = models.CharField(_("Full name"), max_length=255)
    phone = models.CharField(
        _("Phone"),
        max_length=20,
        null=True,
        blank=True,
        validators=[PHONE_VALIDATOR],
    )
    role = models.CharField(
        _("Role"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.TENANT,
    )
    avatar_url = models.URLField(_("Avatar URL"), blank=True)
    is_verified = models.BooleanField(_("Verified"), default=False)
    employee_id = models.CharField(
        _("Employee ID"),
        max_length=50,
        unique=True,
        null=True,
        blank=True,
    )
    hired_date = models.DateField(_("Hired date"), null=True, blank=True)
    performance_rating = models.DecimalField(
        _("Performance rating"),
        max_digits=3,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(5)],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["full_name"]

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["role", "is_active"], name="user_role_active_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    # --- Role helpers -------------------------------------------------------
    def is_super_admin(self) -> bool:
        return self.role == self.RoleChoices.SUPER_ADMIN

    def is_property_admin(self) -> bool:
        return self.role == self.RoleChoices.PROPERTY_ADMIN

    def is_tenant(self) -> bool:
        return self.role == self.RoleChoices.TENANT


User = CustomUser
