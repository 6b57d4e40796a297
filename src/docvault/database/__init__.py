"""Database connection management."""

from .connection import DatabaseManager, DRIVER_ERRORS, SCHEMA_FILE

__all__ = ["DatabaseManager", "DRIVER_ERRORS", "SCHEMA_FILE"]
