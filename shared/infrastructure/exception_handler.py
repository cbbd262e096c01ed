"""DRF exception handler translating domain and data-access errors."""

from __future__ import annotations

import logging

from django.db import DatabaseError  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import AuthorizationError, ValidationFailed

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load data. Please try again."
SAVE_FAILED_MESSAGE = "Failed to save changes. Please try again."


def domain_exception_handler(exc, context):  # type: ignore
    """Extend DRF's default handler with the platform's error taxonomy.

    - ValidationFailed -> 400 with the field-keyed error map
    - AuthorizationError -> 403 {"detail": "Unauthorized."}
    - DatabaseError -> logged, 503 with a generic retry message
    """
    if isinstance(exc, ValidationFailed):
        return Response(exc.errors, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, AuthorizationError):
        return Response({"detail": exc.message}, status=status.HTTP_403_FORBIDDEN)

    if isinstance(exc, DatabaseError):
        request = context.get("request")
        method = getattr(request, "method", "GET")
        view = context.get("view")
        logger.error(
            f"Data access error in {view.__class__.__name__ if view else 'unknown view'} "
            f"({method}): {exc}",
            exc_info=True,
        )
        message = LOAD_FAILED_MESSAGE if method in ("GET", "HEAD", "OPTIONS") else SAVE_FAILED_MESSAGE
        return Response({"detail": message}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    return exception_handler(exc, context)
