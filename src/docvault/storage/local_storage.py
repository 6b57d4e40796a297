"""Local filesystem implementation of the StoragePort.

Uploads land under ``<root>/tmp`` and are moved under ``<root>/objects``
once confirmed. Paths handed out are relative to the root. Blocking
filesystem calls run in a worker thread. URLs are unsigned locators, so
this backend suits local runs behind a server that checks access itself.
"""

import asyncio
import hashlib
import logging
import mimetypes
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import quote

from ..core.exceptions import NotFoundError, ValidationError
from ..core.value_objects import DocumentId, DocumentVersionId
from ..features.documents.entities import PresignedUpload, StoredFile, StoredFileMetadata
from ..utils import expires_at, generate_uuid_v7

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def _safe_name(filename: str) -> str:
    """Strip directory components so a filename cannot escape its folder."""
    name = Path(filename.replace("\\", "/")).name
    return name or "upload"


class LocalFileStorage:
    """StoragePort backed by a directory on local disk."""

    def __init__(
        self,
        root: str,
        base_url: Optional[str] = None,
        upload_ttl_seconds: int = 3600
    ):
        self.root = Path(root).resolve()
        self.base_url = (base_url or self.root.as_uri()).rstrip("/")
        self.upload_ttl_seconds = upload_ttl_seconds

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.root / candidate
        resolved = candidate.resolve()
        if resolved != self.root and self.root not in resolved.parents:
            raise ValidationError(f"Path escapes storage root: {path}", field="path", value=path)
        return resolved

    def _relative(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    def _url(self, relative_path: str, ttl_seconds: int) -> str:
        """Plain locator under ``base_url`` with an expiry hint.

        The URL carries no signature and nothing here verifies ``expires``;
        whatever serves ``base_url`` has to enforce access on its own.
        """
        expiry = int(expires_at(ttl_seconds).timestamp())
        return f"{self.base_url}/{quote(relative_path)}?expires={expiry}"

    async def generate_presigned_upload_url(
        self,
        filename: str,
        mime_type: str,
        document_id: DocumentId,
        version_id: DocumentVersionId
    ) -> PresignedUpload:
        target = self.root / "tmp" / str(document_id) / str(version_id) / _safe_name(filename)
        await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)

        relative_path = self._relative(target)
        logger.debug(f"Reserved upload slot {relative_path} ({mime_type})")
        return PresignedUpload(
            url=self._url(relative_path, self.upload_ttl_seconds),
            upload_path=relative_path,
            expires_at=expires_at(self.upload_ttl_seconds),
        )

    def _hash_file(self, path: Path) -> Tuple[str, int]:
        hasher = hashlib.sha256()
        size = 0
        with open(path, "rb") as f:
            while chunk := f.read(CHUNK_SIZE):
                hasher.update(chunk)
                size += len(chunk)
        return hasher.hexdigest(), size

    def _move(self, source: Path, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(source), str(destination))

    async def move_to_storage(self, temp_path: str, filename: str) -> StoredFile:
        source = self._resolve(temp_path)
        if not await asyncio.to_thread(source.is_file):
            raise NotFoundError("File", temp_path)

        checksum, size = await asyncio.to_thread(self._hash_file, source)
        content_ref = generate_uuid_v7()
        destination = self.root / "objects" / content_ref[:2] / content_ref / _safe_name(filename)
        await asyncio.to_thread(self._move, source, destination)

        relative_path = self._relative(destination)
        logger.info(f"Stored {size} bytes at {relative_path}")
        return StoredFile(path=relative_path, content_ref=content_ref, size=size, checksum=checksum)

    async def delete_file(self, path: str) -> None:
        target = self._resolve(path)
        await asyncio.to_thread(target.unlink, missing_ok=True)
        logger.debug(f"Deleted {path}")

    async def get_download_url(self, path: str, ttl_seconds: int) -> str:
        target = self._resolve(path)
        if not await asyncio.to_thread(target.is_file):
            raise NotFoundError("File", path)
        return self._url(self._relative(target), ttl_seconds)

    async def file_exists(self, path: str) -> bool:
        return await asyncio.to_thread(self._resolve(path).is_file)

    async def get_file_metadata(self, path: str) -> Optional[StoredFileMetadata]:
        target = self._resolve(path)
        try:
            stat = await asyncio.to_thread(target.stat)
        except FileNotFoundError:
            return None

        content_type, _ = mimetypes.guess_type(target.name)
        return StoredFileMetadata(
            size=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            content_type=content_type or "application/octet-stream",
            etag=f"{stat.st_mtime_ns:x}-{stat.st_size:x}",
        )
