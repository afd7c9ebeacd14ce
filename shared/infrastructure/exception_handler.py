"""DRF exception handler rendering domain errors.

Registered as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``. A ``DomainError``
becomes ``{"detail", "code", ...}`` with the error's HTTP status; anything
else goes through DRF's default handler.
"""

from __future__ import annotations

import logging

from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.errors import DomainError, StorageUnavailableError

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):
    if isinstance(exc, DomainError):
        view = context.get("view")
        log = logger.error if isinstance(exc, StorageUnavailableError) else logger.info
        log(
            "%s answered %s (%s)",
            view.__class__.__name__ if view is not None else "request",
            exc.status_code,
            exc.code,
        )
        return Response(exc.to_dict(), status=exc.status_code)
    return exception_handler(exc, context)
