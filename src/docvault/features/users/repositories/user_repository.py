"""AsyncPG-based user repository implementation."""

import logging
from typing import Optional

import asyncpg

from ....core.exceptions import DatabaseError
from ....core.value_objects import UserId
from ....utils import ensure_utc
from ..entities import User, UserRole

logger = logging.getLogger(__name__)


class AsyncPGUserRepository:
    """AsyncPG implementation of UserRepository protocol."""

    def __init__(self, database_manager, schema: str = "public"):
        self._db = database_manager
        self._schema = schema

    def _build_user_from_row(self, row: asyncpg.Record) -> User:
        """Build User entity from database row."""
        return User(
            id=UserId(row['id']),
            email=row['email'],
            role=UserRole(row['role']),
            display_name=row['display_name'],
            created_at=ensure_utc(row['created_at']),
        )

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        try:
            row = await self._db.fetchrow(
                f"""
                SELECT id, email, role, display_name, created_at
                FROM {self._schema}.users
                WHERE id = $1
                """,
                user_id.value
            )
            return self._build_user_from_row(row) if row else None
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to get user {user_id}: {e}")
            raise DatabaseError(f"Failed to retrieve user: {e}")

    async def save(self, user: User) -> User:
        try:
            await self._db.execute(
                f"""
                INSERT INTO {self._schema}.users (id, email, role, display_name, created_at)
                VALUES ($1, $2, $3, $4, $5)
                ON CONFLICT (id) DO UPDATE SET
                    email = EXCLUDED.email,
                    role = EXCLUDED.role,
                    display_name = EXCLUDED.display_name
                """,
                user.id.value,
                user.email,
                user.role.value,
                user.display_name,
                user.created_at,
            )
            return user
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to save user {user.id}: {e}")
            raise DatabaseError(f"Failed to save user: {e}")
