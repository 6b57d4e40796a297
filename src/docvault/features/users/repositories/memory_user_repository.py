"""In-memory user repository for tests and local runs."""

import asyncio
from typing import Dict, Optional

from ....core.value_objects import UserId
from ..entities import User


class InMemoryUserRepository:
    """Dict-backed implementation of UserRepository protocol."""

    def __init__(self):
        self._users: Dict[UserId, User] = {}
        self._lock = asyncio.Lock()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def save(self, user: User) -> User:
        async with self._lock:
            self._users[user.id] = user
        return user
