"""DRF exception handler for domain errors."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.exceptions import DomainError, InvalidTransition, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidTransition, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def domain_exception_handler(exc, context):  # type: ignore
    """Render domain errors as ``{"detail", "code", ...context}``; defer the rest to DRF."""
    if not isinstance(exc, DomainError):
        return drf_exception_handler(exc, context)

    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break

    view = context.get("view")
    logger.info(
        f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'unknown view'}: {exc.message}"
    )
    body = {"detail": exc.message, "code": exc.code}
    body.update({key: value for key, value in exc.context.items() if key not in body})
    return Response(body, status=status_code)
