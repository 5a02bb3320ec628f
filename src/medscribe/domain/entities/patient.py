"""Patient domain entity representing a patient record kept by the scribe."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Tuple

from ...core.constants import PATIENT_NAME_REQUIRED
from ...core.utils.datetime_utils import (
    format_iso_timestamp,
    get_current_timestamp,
    parse_iso_timestamp,
)
from ..errors import InvalidPatientDataError
from ..value_objects.patient_id import PatientId
from .visit import Visit


@dataclass(frozen=True)
class Patient:
    """Patient domain entity.

    Only ``patient_id`` identifies a patient; name and MRN are display and
    search fields and may repeat. Visit history is append-only: ``add_visit``
    returns a new Patient and leaves earlier visits untouched.
    """

    patient_id: PatientId
    name: str
    dob: str = ""
    mrn: str = ""
    conditions: str = ""
    visits: Tuple[Visit, ...] = ()
    created_at: datetime = field(default_factory=get_current_timestamp)

    def __post_init__(self) -> None:
        """Validate patient data."""
        if not self.name or not self.name.strip():
            raise InvalidPatientDataError("name", PATIENT_NAME_REQUIRED)
        if not isinstance(self.visits, tuple):
            object.__setattr__(self, "visits", tuple(self.visits))

    @classmethod
    def register(cls, name: str, dob: str = "", mrn: str = "", conditions: str = "") -> "Patient":
        """Create a new patient with a fresh id and no visits."""
        return cls(
            patient_id=PatientId.generate(),
            name=name,
            dob=dob or "",
            mrn=mrn or "",
            conditions=conditions or "",
        )

    def add_visit(self, visit: Visit) -> "Patient":
        """Return a copy of this patient with ``visit`` appended."""
        return replace(self, visits=self.visits + (visit,))

    def recent_visits(self, count: int) -> Tuple[Visit, ...]:
        """The last ``count`` visits, oldest first."""
        if count <= 0:
            return ()
        return self.visits[-count:]

    @property
    def display_label(self) -> str:
        return f"{self.name} ({self.mrn}) - {len(self.visits)} visits"

    def to_document(self) -> Dict[str, Any]:
        return {
            "id": self.patient_id.value,
            "name": self.name,
            "dob": self.dob,
            "mrn": self.mrn,
            "conditions": self.conditions,
            "visits": [visit.to_document() for visit in self.visits],
            "createdAt": format_iso_timestamp(self.created_at),
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Patient":
        return cls(
            patient_id=PatientId.from_raw(doc["id"]),
            name=doc.get("name", ""),
            dob=doc.get("dob", ""),
            mrn=doc.get("mrn", ""),
            conditions=doc.get("conditions", ""),
            visits=tuple(Visit.from_document(v) for v in doc.get("visits", [])),
            created_at=parse_iso_timestamp(doc["createdAt"]),
        )
