"""MIME type value object."""

import re
from dataclasses import dataclass

from ....core.exceptions import ValidationError

MIME_TYPE_PATTERN = re.compile(r"[\w-]+/[\w\-+.]+(;[\w-]+=[\w-]+)*", re.ASCII)


@dataclass(frozen=True)
class MimeType:
    """MIME type such as ``application/pdf`` or ``text/plain;charset=utf-8``."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not MIME_TYPE_PATTERN.fullmatch(self.value):
            raise ValidationError(
                f"Invalid MIME type format: {self.value!r}",
                field="mime_type",
                value=self.value
            )

    @property
    def essence(self) -> str:
        """Type and subtype without parameters."""
        return self.value.split(';', 1)[0]

    @property
    def main_type(self) -> str:
        return self.essence.split('/', 1)[0]

    def __str__(self) -> str:
        return self.value
