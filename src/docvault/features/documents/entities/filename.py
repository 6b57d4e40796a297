"""Filename value object.

Surrounding whitespace is trimmed; the trimmed name must be 1 to 255
characters.
"""

from dataclasses import dataclass

from ....core.exceptions import ValidationError

MAX_FILENAME_LENGTH = 255


@dataclass(frozen=True)
class Filename:
    """Validated, trimmed file name."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValidationError(
                f"Filename must be a string, got {type(self.value).__name__}",
                field="filename",
                value=self.value
            )

        normalized = self.value.strip()
        if not normalized:
            raise ValidationError("Filename cannot be empty", field="filename", value=self.value)
        if len(normalized) > MAX_FILENAME_LENGTH:
            raise ValidationError(
                f"Filename must be at most {MAX_FILENAME_LENGTH} characters, got {len(normalized)}",
                field="filename",
                value=self.value
            )

        object.__setattr__(self, 'value', normalized)

    @property
    def extension(self) -> str:
        """Lower-cased extension without the dot, or an empty string."""
        if '.' not in self.value.lstrip('.'):
            return ""
        return self.value.rsplit('.', 1)[1].lower()

    def __str__(self) -> str:
        return self.value
