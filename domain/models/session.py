"""
User session domain model.

Read-only snapshot of the authenticated principal, produced by the
authentication adapter and consumed by the authorization rules.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from shared.constants import ROLE_USER, ROLE_ADMIN
from shared.exceptions import InvalidArgumentError


class Role(Enum):
    """Principal roles."""
    USER = ROLE_USER
    ADMIN = ROLE_ADMIN

    @classmethod
    def from_string(cls, role_str: str) -> Role:
        """Create Role from string, case insensitive."""
        if not role_str:
            raise InvalidArgumentError("Role cannot be empty")
        try:
            return cls(str(role_str).strip().lower())
        except ValueError:
            raise InvalidArgumentError(f"Unsupported role: {role_str}", value=role_str)


@dataclass(frozen=True)
class UserSession:
    """Authenticated principal: who is acting and with which role."""

    user_id: str
    email: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "role": self.role.value,
        }
