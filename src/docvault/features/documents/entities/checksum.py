"""Content checksum value object.

SHA-256 hex digest identifying a version's bytes. Two versions of the same
document may never share a checksum.
"""

import hashlib
import hmac
import re
from dataclasses import dataclass
from typing import BinaryIO

from ....core.exceptions import ValidationError

CHECKSUM_PATTERN = re.compile(r"[a-f0-9]{64}")


@dataclass(frozen=True)
class Checksum:
    """SHA-256 digest: exactly 64 lowercase hex characters."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not CHECKSUM_PATTERN.fullmatch(self.value):
            raise ValidationError(
                "Checksum must be a 64-character lowercase SHA-256 hex digest",
                field="checksum",
                value=self.value
            )

    @classmethod
    def from_bytes(cls, content: bytes) -> 'Checksum':
        """Calculate checksum from byte content."""
        return cls(hashlib.sha256(content).hexdigest())

    @classmethod
    def from_stream(cls, stream: BinaryIO, chunk_size: int = 8192) -> 'Checksum':
        """Calculate checksum from a binary stream, reading in chunks."""
        hasher = hashlib.sha256()
        while chunk := stream.read(chunk_size):
            hasher.update(chunk)
        return cls(hasher.hexdigest())

    def matches(self, other: 'Checksum') -> bool:
        """Constant-time comparison."""
        return isinstance(other, Checksum) and hmac.compare_digest(self.value, other.value)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Checksum({self.value[:12]}...)"
