"""Permission classes applied at the API boundary."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from .identity import resolve_identity


class IsAdminRole(permissions.BasePermission):
    """
    Only administrators.

    This is the single admin capability check; views never test the role
    themselves.
    """

    message = "Administrator role required."

    def has_permission(self, request, view) -> bool:  # type: ignore
        identity = resolve_identity(request)
        return bool(identity and identity.is_admin)


class AdminWriteOrReadOnly(permissions.BasePermission):
    """
    Anyone can read, administrators can write.
    """

    message = "Administrator role required."

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        identity = resolve_identity(request)
        return bool(identity and identity.is_admin)

