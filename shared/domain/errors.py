"""
Domain Errors

Base exception for every rule violation raised by the domain layer.
Each error carries a stable machine-readable ``code`` and the HTTP status
the API boundary should answer with, so callers can tell failure kinds
apart without parsing messages.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors"""

    code = "domain_error"
    status_code = 400
    default_message = "Domain rule violated."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)

    def extra(self) -> dict[str, Any]:
        """Additional payload rendered next to ``detail`` and ``code``"""
        return {}

    def to_dict(self) -> dict[str, Any]:
        payload = {"detail": self.message, "code": self.code}
        payload.update(self.extra())
        return payload


class InvalidRangeError(DomainError):
    """Malformed or inverted date range input."""

    code = "invalid_range"
    status_code = 400
    default_message = "End date must not be earlier than start date."


class NotFoundError(DomainError):
    code = "not_found"
    status_code = 404
    default_message = "Not found."


class PermissionDeniedError(DomainError):
    code = "forbidden"
    status_code = 403
    default_message = "You do not have permission to perform this action."


class UnauthenticatedError(DomainError):
    """No resolved user identity for an operation that needs one."""

    code = "unauthenticated"
    status_code = 401
    default_message = "Authentication is required to perform this action."


class StorageUnavailableError(DomainError):
    """The storage collaborator failed or timed out. Never retried here."""

    code = "storage_unavailable"
    status_code = 503
    default_message = "Storage is temporarily unavailable."
