"""Document repository implementations."""

from .document_repository import AsyncPGDocumentRepository
from .memory_document_repository import InMemoryDocumentRepository

__all__ = ["AsyncPGDocumentRepository", "InMemoryDocumentRepository"]
