"""Per-request identity resolution.

The caller's identity is resolved once at the view boundary and passed
explicitly into commands; nothing below the views looks up the current
user on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .models import CustomUser


@dataclass(frozen=True)
class Identity:
    user_id: Any
    role: str
    email: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == CustomUser.RoleChoices.ADMIN

    def to_dict(self) -> dict[str, Any]:
        return {"user_id": self.user_id, "email": self.email, "role": self.role}


def identity_for_user(user) -> Optional[Identity]:
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    role = CustomUser.RoleChoices.ADMIN if user.is_admin() else user.role
    return Identity(user_id=user.pk, role=role, email=user.email)


def resolve_identity(request) -> Optional[Identity]:
    """``Identity`` of the authenticated caller, or ``None``"""
    return identity_for_user(getattr(request, "user", None))
