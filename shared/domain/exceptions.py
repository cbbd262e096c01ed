"""
Domain Exceptions

Errors raised by domain and service code. The API layer maps them to HTTP
responses in `shared.infrastructure.exception_handler`:
- ValidationFailed -> 400 with a field-keyed error map
- AuthorizationError -> 403 "Unauthorized."
"""

from typing import Dict, List, Mapping, Union


class DomainError(Exception):
    """Base exception for domain rule violations."""


class ValidationFailed(DomainError):
    """Raised when input or a requested state change breaks a business rule.

    `errors` maps a field name to the list of messages for that field, the
    same shape DRF uses for serializer errors.
    """

    def __init__(self, errors: Mapping[str, Union[str, List[str]]]):
        self.errors: Dict[str, List[str]] = {
            key: [value] if isinstance(value, str) else list(value)
            for key, value in errors.items()
        }
        super().__init__(self.errors)


class AuthorizationError(DomainError):
    """Raised when the acting role may not perform an operation."""

    def __init__(self, message: str = "Unauthorized."):
        self.message = message
        super().__init__(message)
