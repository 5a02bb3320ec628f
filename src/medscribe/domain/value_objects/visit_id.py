"""
Visit ID value object for type-safe visit identification.
"""

from dataclasses import dataclass
from typing import Any, Union

from ...core.utils.string_utils import generate_id


@dataclass(frozen=True)
class VisitId:
    """Immutable visit identifier value object."""

    value: str

    def __post_init__(self) -> None:
        """Validate visit ID."""
        if not isinstance(self.value, str):
            raise ValueError("Visit ID must be a string")

        if not self.value.strip():
            raise ValueError("Visit ID cannot be empty")

    def __str__(self) -> str:
        """String representation."""
        return self.value

    @classmethod
    def generate(cls) -> "VisitId":
        """Generate a new visit ID."""
        return cls(generate_id())

    @classmethod
    def from_raw(cls, raw: Union[str, int, Any]) -> "VisitId":
        """Build from a stored value; older documents carry numeric ids."""
        return cls(str(raw))
