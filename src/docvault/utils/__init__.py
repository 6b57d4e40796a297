"""Shared helpers for docvault."""

from .datetime import utc_now, ensure_utc, expires_at
from .uuid import generate_uuid_v7, is_valid_uuid

__all__ = [
    "utc_now",
    "ensure_utc",
    "expires_at",
    "generate_uuid_v7",
    "is_valid_uuid",
]
