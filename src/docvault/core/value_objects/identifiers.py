"""Value objects for identifiers in docvault.

All identifiers wrap a UUID. Strings are coerced on construction and new
identifiers are generated as UUIDv7 for time-ordering.
"""

from dataclasses import dataclass
from typing import Union
from uuid import UUID

from ..exceptions import ValidationError
from ...utils import generate_uuid_v7


def _coerce_uuid(owner: object, value: Union[UUID, str]) -> None:
    if isinstance(value, UUID):
        return
    try:
        object.__setattr__(owner, 'value', UUID(str(value)))
    except (ValueError, TypeError, AttributeError):
        name = type(owner).__name__
        raise ValidationError(
            f"{name} must be a valid UUID, got: {value!r}",
            field=name,
            value=value
        )


@dataclass(frozen=True)
class DocumentId:
    """Document identifier value object."""
    value: UUID

    def __post_init__(self):
        _coerce_uuid(self, self.value)

    @classmethod
    def generate(cls) -> 'DocumentId':
        """Generate a new DocumentId using UUIDv7 for time-ordering."""
        return cls(generate_uuid_v7())

    @classmethod
    def from_string(cls, value: str) -> 'DocumentId':
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class DocumentVersionId:
    """Document version identifier value object."""
    value: UUID

    def __post_init__(self):
        _coerce_uuid(self, self.value)

    @classmethod
    def generate(cls) -> 'DocumentVersionId':
        return cls(generate_uuid_v7())

    @classmethod
    def from_string(cls, value: str) -> 'DocumentVersionId':
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId:
    """User identifier value object with UUIDv7 support."""
    value: UUID

    def __post_init__(self):
        _coerce_uuid(self, self.value)

    @classmethod
    def generate(cls) -> 'UserId':
        """Generate a new UserId using UUIDv7 for time-ordering."""
        return cls(generate_uuid_v7())

    @classmethod
    def from_string(cls, value: str) -> 'UserId':
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"UserId(value={self.value!r})"


@dataclass(frozen=True)
class PermissionId:
    """Document permission identifier value object."""
    value: UUID

    def __post_init__(self):
        _coerce_uuid(self, self.value)

    @classmethod
    def generate(cls) -> 'PermissionId':
        return cls(generate_uuid_v7())

    @classmethod
    def from_string(cls, value: str) -> 'PermissionId':
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)
