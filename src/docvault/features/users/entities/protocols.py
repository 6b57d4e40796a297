"""Protocol interfaces for the users feature."""

from typing import Optional, Protocol, runtime_checkable

from ....core.value_objects import UserId
from .user import User


@runtime_checkable
class UserRepository(Protocol):
    """Read access to users for owner and admin checks."""

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Get a user by ID, or None if it does not exist."""
        ...

    async def save(self, user: User) -> User:
        """Insert or update a user."""
        ...
