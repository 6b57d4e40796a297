"""Version number value object."""

from dataclasses import dataclass
from functools import total_ordering

from ....core.exceptions import ValidationError


@total_ordering
@dataclass(frozen=True, eq=True)
class VersionNumber:
    """Positive, 1-based version number within one document."""

    value: int

    def __post_init__(self):
        if not isinstance(self.value, int) or isinstance(self.value, bool) or self.value < 1:
            raise ValidationError(
                f"Version number must be a positive integer, got {self.value!r}",
                field="version_number",
                value=self.value
            )

    @classmethod
    def first(cls) -> 'VersionNumber':
        return cls(1)

    def next(self) -> 'VersionNumber':
        return VersionNumber(self.value + 1)

    def __lt__(self, other: 'VersionNumber') -> bool:
        if not isinstance(other, VersionNumber):
            return NotImplemented
        return self.value < other.value

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
