"""Document status."""

from enum import Enum


class DocumentStatus(str, Enum):
    """Publication state of a document.

    DRAFT --publish--> PUBLISHED --unpublish--> DRAFT. No terminal state;
    both transitions are idempotent.
    """
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"

    def publish(self) -> 'DocumentStatus':
        return DocumentStatus.PUBLISHED

    def unpublish(self) -> 'DocumentStatus':
        return DocumentStatus.DRAFT

    @property
    def is_published(self) -> bool:
        return self is DocumentStatus.PUBLISHED
