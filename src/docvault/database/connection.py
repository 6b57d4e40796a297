"""
asyncpg pool shared by the document, permission and user repositories.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, List, Optional

import asyncpg
from asyncpg import Pool, Record

from ..config import DocVaultSettings, get_settings

logger = logging.getLogger(__name__)

# Driver-level failures repositories translate into DatabaseError
DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)

SCHEMA_FILE = Path(__file__).with_name("schema.sql")


class DatabaseManager:
    """Manages the asyncpg pool and hands out connections and transactions."""

    def __init__(self, database_url: Optional[str] = None, settings: Optional[DocVaultSettings] = None, **pool_config):
        """Initialize DatabaseManager.

        Args:
            database_url: Database URL (defaults to settings.database_url)
            settings: Settings instance (defaults to get_settings())
            **pool_config: Additional pool configuration options
        """
        self.settings = settings or get_settings()
        self.pool: Optional[Pool] = None
        self.dsn = (database_url or self.settings.database_url).replace("+asyncpg", "")

        self.pool_config = {
            "min_size": self.settings.db_pool_min_size,
            "max_size": self.settings.db_pool_max_size,
            "max_inactive_connection_lifetime": 300.0,
            "command_timeout": self.settings.db_command_timeout,
            **pool_config
        }

    async def create_pool(self) -> Pool:
        """Create the pool once and return it."""
        if self.pool is None:
            logger.info(f"Opening asyncpg pool ({self.pool_config['min_size']}-{self.pool_config['max_size']} connections)")
            self.pool = await asyncpg.create_pool(
                self.dsn,
                server_settings={'application_name': self.settings.app_name},
                **self.pool_config
            )
            logger.info(f"Connected to {self.settings.app_name} database")
        return self.pool

    async def close_pool(self):
        """Close the pool; safe to call twice."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("asyncpg pool closed")

    @asynccontextmanager
    async def acquire(self):
        """Yield a pooled connection, creating the pool on first use."""
        if not self.pool:
            await self.create_pool()

        async with self.pool.acquire() as connection:
            yield connection

    @asynccontextmanager
    async def transaction(self):
        """Yield a connection inside a transaction that commits on clean exit."""
        async with self.acquire() as connection:
            async with connection.transaction():
                yield connection

    async def execute(self, query: str, *args, timeout: Optional[float] = None) -> str:
        """Run a statement and return its status string, e.g. ``DELETE 1``."""
        async with self.acquire() as connection:
            return await connection.execute(query, *args, timeout=timeout)

    async def fetch(self, query: str, *args, timeout: Optional[float] = None) -> List[Record]:
        async with self.acquire() as connection:
            return await connection.fetch(query, *args, timeout=timeout)

    async def fetchrow(self, query: str, *args, timeout: Optional[float] = None) -> Optional[Record]:
        async with self.acquire() as connection:
            return await connection.fetchrow(query, *args, timeout=timeout)

    async def fetchval(self, query: str, *args, column: int = 0, timeout: Optional[float] = None) -> Any:
        async with self.acquire() as connection:
            return await connection.fetchval(query, *args, column=column, timeout=timeout)

    async def apply_schema(self, schema_file: Path = SCHEMA_FILE) -> None:
        """Create tables and indexes if they do not exist."""
        sql = schema_file.read_text(encoding="utf-8")
        async with self.transaction() as connection:
            await connection.execute(sql)
        logger.info(f"Applied schema from {schema_file.name}")

    async def health_check(self) -> bool:
        """Return True when the database answers ``SELECT 1``."""
        try:
            async with self.acquire() as connection:
                result = await connection.fetchval("SELECT 1")
                return result == 1
        except DRIVER_ERRORS as e:
            logger.error(f"Health check failed: {e}")
            return False
