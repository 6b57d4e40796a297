"""Document workflows."""

from .base import DocumentWorkflow
from .document_service import DocumentService, UploadDocumentCommand
from .upload_service import (
    UploadService,
    InitiateUploadCommand,
    InitiateUploadResult,
    ConfirmUploadCommand,
)

__all__ = [
    "DocumentWorkflow",
    "DocumentService",
    "UploadDocumentCommand",
    "UploadService",
    "InitiateUploadCommand",
    "InitiateUploadResult",
    "ConfirmUploadCommand",
]
