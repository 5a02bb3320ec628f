"""AI preference schemas."""

from pydantic import BaseModel, Field

from ...domain.entities.preferences import AIPreferences
from ...domain.enums.notes import NoteStyle


class PreferencesSchema(BaseModel):
    note_style: NoteStyle = Field(NoteStyle.STANDARD, description="standard, detailed or concise")
    include_assessment: bool = Field(True, description="Ask for an Assessment section")
    include_plan: bool = Field(True, description="Ask for a Plan section")
    custom_instructions: str = Field("", description="Extra instructions appended to the system prompt")

    @classmethod
    def from_preferences(cls, preferences: AIPreferences) -> "PreferencesSchema":
        return cls(
            note_style=preferences.note_style,
            include_assessment=preferences.include_assessment,
            include_plan=preferences.include_plan,
            custom_instructions=preferences.custom_instructions,
        )

    def to_preferences(self) -> AIPreferences:
        return AIPreferences(
            note_style=self.note_style,
            include_assessment=self.include_assessment,
            include_plan=self.include_plan,
            custom_instructions=self.custom_instructions,
        )
