"""Visit domain entity: one recorded consultation saved to a patient record."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict

from ...core.utils.datetime_utils import (
    format_iso_timestamp,
    format_local_timestamp,
    get_current_timestamp,
    parse_iso_timestamp,
)
from ..value_objects.visit_id import VisitId


@dataclass(frozen=True)
class Visit:
    """Visit domain entity. Immutable once created."""

    visit_id: VisitId
    transcript: str
    notes: str
    date: datetime = field(default_factory=get_current_timestamp)
    timestamp: str = ""

    def __post_init__(self) -> None:
        if not self.timestamp:
            object.__setattr__(self, "timestamp", format_local_timestamp(self.date))

    @classmethod
    def record(cls, transcript: str, notes: str) -> "Visit":
        """Create a visit for the current moment."""
        return cls(visit_id=VisitId.generate(), transcript=transcript, notes=notes)

    def to_document(self) -> Dict[str, Any]:
        return {
            "id": self.visit_id.value,
            "date": format_iso_timestamp(self.date),
            "transcript": self.transcript,
            "notes": self.notes,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Visit":
        return cls(
            visit_id=VisitId.from_raw(doc["id"]),
            date=parse_iso_timestamp(doc["date"]),
            transcript=doc.get("transcript", ""),
            notes=doc.get("notes", ""),
            timestamp=doc.get("timestamp", ""),
        )
