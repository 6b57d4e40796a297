"""Document permission levels.

READ < WRITE < DELETE. A granted level satisfies any required level at or
below it.
"""

from enum import Enum
from typing import List

from ....core.exceptions import ValidationError


class PermissionType(str, Enum):
    """Access level on a single document."""
    READ = "READ"
    WRITE = "WRITE"
    DELETE = "DELETE"

    @property
    def level(self) -> int:
        return PERMISSION_HIERARCHY[self]

    def satisfies(self, required: 'PermissionType') -> bool:
        """Whether holding this level grants ``required``."""
        return self.level >= required.level

    def implied(self) -> List['PermissionType']:
        """All levels granted by holding this one, lowest first."""
        return [p for p in PermissionType if p.level <= self.level]

    @classmethod
    def from_string(cls, value: str) -> 'PermissionType':
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValidationError(
                f"Invalid permission type: {value!r}. Expected one of READ, WRITE, DELETE",
                field="permission",
                value=value
            )

    @classmethod
    def highest(cls) -> 'PermissionType':
        return cls.DELETE


PERMISSION_HIERARCHY = {
    PermissionType.READ: 1,
    PermissionType.WRITE: 2,
    PermissionType.DELETE: 3,
}
