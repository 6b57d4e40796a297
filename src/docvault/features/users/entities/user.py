"""User domain entity.

Only the fields access control needs: identity, e-mail and role.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from ....core.value_objects import UserId
from ....utils import utc_now


class UserRole(str, Enum):
    """Platform role of a user."""
    ADMIN = "ADMIN"
    USER = "USER"


@dataclass(frozen=True)
class User:
    """A platform user as seen by the document service."""

    id: UserId
    email: str
    role: UserRole = UserRole.USER
    display_name: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        if not isinstance(self.role, UserRole):
            object.__setattr__(self, 'role', UserRole(str(self.role).upper()))

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN
