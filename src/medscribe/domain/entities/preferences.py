"""AI note preferences: a single document per installation."""

from dataclasses import dataclass
from typing import Any, Dict

from ..enums.notes import NoteStyle


@dataclass(frozen=True)
class AIPreferences:
    """How generated notes should be styled and which sections they need."""

    note_style: NoteStyle = NoteStyle.STANDARD
    include_assessment: bool = True
    include_plan: bool = True
    custom_instructions: str = ""

    def __post_init__(self) -> None:
        # Accept plain strings from forms and stored documents
        if not isinstance(self.note_style, NoteStyle):
            object.__setattr__(self, "note_style", NoteStyle(self.note_style))

    def to_document(self) -> Dict[str, Any]:
        return {
            "noteStyle": self.note_style.value,
            "includeAssessment": self.include_assessment,
            "includePlan": self.include_plan,
            "customInstructions": self.custom_instructions,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "AIPreferences":
        defaults = cls()
        return cls(
            note_style=doc.get("noteStyle", defaults.note_style),
            include_assessment=bool(doc.get("includeAssessment", defaults.include_assessment)),
            include_plan=bool(doc.get("includePlan", defaults.include_plan)),
            custom_instructions=doc.get("customInstructions", defaults.custom_instructions) or "",
        )
