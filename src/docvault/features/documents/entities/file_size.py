"""File size value object."""

from dataclasses import dataclass

from ....core.exceptions import ValidationError

MIN_FILE_SIZE = 1
MAX_FILE_SIZE = 100 * 1024 * 1024  # 100 MiB


@dataclass(frozen=True)
class FileSize:
    """Size of a file in bytes, between 1 byte and 100 MiB inclusive."""

    value: int

    def __post_init__(self):
        # bool is an int subclass; reject it explicitly
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"File size must be an integer, got {type(self.value).__name__}",
                field="size",
                value=self.value
            )
        if self.value < MIN_FILE_SIZE or self.value > MAX_FILE_SIZE:
            raise ValidationError(
                f"File size must be between {MIN_FILE_SIZE} and {MAX_FILE_SIZE} bytes, got {self.value}",
                field="size",
                value=self.value
            )

    def exceeds(self, limit: int) -> bool:
        """Check the size against a tighter deployment limit."""
        return self.value > limit

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"{self.value} bytes"
