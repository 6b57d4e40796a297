"""Content reference value object."""

from dataclasses import dataclass

from ....core.exceptions import ValidationError

MAX_CONTENT_REF_LENGTH = 255


@dataclass(frozen=True)
class ContentRef:
    """Opaque storage identifier for a version's bytes (1 to 255 characters)."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not (1 <= len(self.value) <= MAX_CONTENT_REF_LENGTH):
            raise ValidationError(
                f"Content reference must be 1 to {MAX_CONTENT_REF_LENGTH} characters",
                field="content_ref",
                value=self.value
            )

    def __str__(self) -> str:
        return self.value
