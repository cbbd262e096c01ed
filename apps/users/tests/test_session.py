"""Tests for building an acting session from a user."""

from __future__ import annotations

import pytest
from django.contrib.auth.models import AnonymousUser

from apps.users.models import User
from shared.domain.exceptions import AuthorizationError
from shared.domain.session import Role, Session


@pytest.mark.django_db
def test_session_from_property_admin() -> None:
    user = User.objects.create_user(
        email="agent@example.com",
        full_name="Baraka Agent",
        role=User.RoleChoices.PROPERTY_ADMIN,
    )
    session = Session.from_user(user)
    assert session == Session(user_id=user.pk, role=Role.PROPERTY_ADMIN)
    assert session.is_admin
    assert not session.is_super_admin


@pytest.mark.django_db
def test_inactive_user_has_no_session() -> None:
    user = User.objects.create_user(email="gone@example.com", full_name="Gone", is_active=False)
    with pytest.raises(AuthorizationError):
        Session.from_user(user)


def test_anonymous_user_has_no_session() -> None:
    with pytest.raises(AuthorizationError):
        Session.from_user(AnonymousUser())


def test_require() -> None:
    session = Session(user_id=1, role=Role.TENANT)
    session.require(Role.TENANT, Role.SUPER_ADMIN)
    with pytest.raises(AuthorizationError) as exc:
        session.require(Role.SUPER_ADMIN)
    assert exc.value.message == "Unauthorized."
