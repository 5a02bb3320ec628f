"""
Patient ID value object for type-safe patient identification.
The value is an opaque token; only uniqueness and immutability matter.
"""

from dataclasses import dataclass
from typing import Any, Union

from ...core.utils.string_utils import generate_id


@dataclass(frozen=True)
class PatientId:
    """Immutable patient identifier value object."""

    value: str

    def __post_init__(self) -> None:
        """Validate patient ID."""
        if not isinstance(self.value, str):
            raise ValueError("Patient ID must be a string")

        if not self.value.strip():
            raise ValueError("Patient ID cannot be empty")

    def __str__(self) -> str:
        """String representation."""
        return self.value

    @classmethod
    def generate(cls) -> "PatientId":
        """Generate a new patient ID."""
        return cls(generate_id())

    @classmethod
    def from_raw(cls, raw: Union[str, int, Any]) -> "PatientId":
        """Build from a stored value; older documents carry numeric ids."""
        return cls(str(raw))
