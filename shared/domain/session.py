"""
Session Value Object

Carries the identity and role of whoever performs an operation. Services
receive it explicitly instead of reading the request user, so authorization
rules can be exercised without HTTP or the database.
"""

from dataclasses import dataclass
from enum import Enum

from shared.domain.base import ValueObject
from shared.domain.exceptions import AuthorizationError


class Role(str, Enum):
    """Platform roles; values match the stored user role."""
    SUPER_ADMIN = 'super_admin'
    PROPERTY_ADMIN = 'property_admin'
    TENANT = 'tenant'


@dataclass(frozen=True)
class Session(ValueObject):
    """
    Acting user for one operation

    Built from an authenticated Django user with `Session.from_user`.
    """
    user_id: int
    role: Role

    @classmethod
    def from_user(cls, user) -> 'Session':
        if user is None or not getattr(user, 'is_authenticated', False):
            raise AuthorizationError()
        if not getattr(user, 'is_active', True):
            raise AuthorizationError()
        try:
            role = Role(user.role)
        except (AttributeError, ValueError):
            raise AuthorizationError()
        return cls(user_id=user.pk, role=role)

    @property
    def is_super_admin(self) -> bool:
        return self.role == Role.SUPER_ADMIN

    @property
    def is_property_admin(self) -> bool:
        return self.role == Role.PROPERTY_ADMIN

    @property
    def is_admin(self) -> bool:
        """Super admins and property admins both act as admins."""
        return self.role in (Role.SUPER_ADMIN, Role.PROPERTY_ADMIN)

    @property
    def is_tenant(self) -> bool:
        return self.role == Role.TENANT

    def require(self, *roles: Role) -> None:
        """Raise AuthorizationError unless the session holds one of `roles`."""
        if self.role not in roles:
            raise AuthorizationError()
