"""Domain services for property workflows."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from django.db import transaction  # type: ignore
from django.db.models import F  # type: ignore

from shared.domain.exceptions import AuthorizationError
from shared.domain.session import Role, Session

from .domain.search import Listing, PaginationWindow, Page, SearchFilters, SortOption, apply
from .models import Amenity, Property

logger = logging.getLogger(__name__)


def can_manage(session: Session, property_obj: Property) -> bool:
    """Super admins manage every property, property admins their assigned ones."""
    if session.is_super_admin:
        return True
    return session.is_property_admin and property_obj.assigned_admin_id == session.user_id


def ensure_can_manage(session: Session, property_obj: Property) -> None:
    if not can_manage(session, property_obj):
        raise AuthorizationError()


def amenities_from_names(names: Iterable[str]) -> list[Amenity]:
    """Amenities are free text in forms; unknown names are created on the fly."""
    amenities = []
    for name in dict.fromkeys(n.strip() for n in names if n and n.strip()):
        amenity, _ = Amenity.objects.get_or_create(name=name)
        amenities.append(amenity)
    return amenities


def increment_views(property_id: int) -> None:
    """Count one more view of the property's detail page."""
    Property.objects.filter(pk=property_id).update(views_count=F("views_count") + 1)


def record_inquiry(property_id: int) -> None:
    Property.objects.filter(pk=property_id).update(inquiries_count=F("inquiries_count") + 1)


def record_completed_booking(property_id: int) -> None:
    """A completed viewing ends in a let: count it and take the property off the market."""
    Property.objects.filter(pk=property_id).update(
        bookings_count=F("bookings_count") + 1,
        is_available=False,
    )


@transaction.atomic
def create_property(session: Session, data: dict, amenities: Iterable[Amenity] = ()) -> Property:
    """Create a property; property admins become its assigned admin.

    Super admins may name any property admin or leave the property unassigned.
    """
    session.require(Role.SUPER_ADMIN, Role.PROPERTY_ADMIN)

    data = dict(data)
    if session.is_property_admin:
        data.pop("assigned_admin", None)
        data["assigned_admin_id"] = session.user_id
    property_obj = Property.objects.create(**data)
    amenities = list(amenities)
    if amenities:
        property_obj.amenities.set(amenities)
    logger.info(f"Property {property_obj.pk} created by user {session.user_id}")
    return property_obj


@transaction.atomic
def update_property(
    session: Session,
    property_obj: Property,
    changes: dict,
    amenities: Optional[Iterable[Amenity]] = None,
) -> Property:
    """Apply a partial update; fees follow the rent through `Property.save()`."""
    ensure_can_manage(session, property_obj)

    changes = dict(changes)
    if not session.is_super_admin:
        # Only super admins reassign properties
        changes.pop("assigned_admin", None)

    previous_rent = property_obj.rent_amount
    for attr, value in changes.items():
        setattr(property_obj, attr, value)
    property_obj.save()
    if amenities is not None:
        property_obj.amenities.set(list(amenities))

    if "rent_amount" in changes and changes["rent_amount"] != previous_rent:
        logger.info(
            f"Property {property_obj.pk} rent changed {previous_rent} -> {property_obj.rent_amount}, "
            f"total now {property_obj.total_amount}"
        )
    return property_obj


def remove_property(session: Session, property_obj: Property) -> bool:
    """Delete for super admins, retire (mark unavailable) for property admins.

    Returns True when the row was deleted.
    """
    ensure_can_manage(session, property_obj)
    if session.is_super_admin:
        pk = property_obj.pk
        property_obj.delete()
        logger.info(f"Property {pk} deleted by user {session.user_id}")
        return True
    property_obj.retire()
    logger.info(f"Property {property_obj.pk} retired by user {session.user_id}")
    return False


def search_listings(
    candidates: Iterable[Property],
    *,
    filters: SearchFilters,
    query: str,
    sort_by: SortOption,
    window: PaginationWindow,
    page: int,
) -> Page:
    """Run the in-memory pipeline over already fetched properties."""
    listings: list[Listing] = [property_obj.to_listing() for property_obj in candidates]
    ordered = apply(listings, filters, query, sort_by)
    return window.window(ordered, page)
