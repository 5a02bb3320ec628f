"""Prompt assembly for medical note generation.

The wording here is what the deployed model was tuned against, so it is
reproduced character for character; change it only together with the tests.
"""

from typing import Dict, List, Optional

from ...core.utils.string_utils import truncate_string
from ...domain.entities.patient import Patient
from ...domain.entities.preferences import AIPreferences
from ...domain.enums.notes import NoteStyle

SYSTEM_PROMPT_PREFIX = "You are a medical scribe assistant specializing in obesity medicine. "
SYSTEM_PROMPT_SUFFIX = "Use appropriate medical terminology and maintain professional format."

STYLE_CLAUSES = {
    NoteStyle.DETAILED: "Create comprehensive, detailed medical notes. ",
    NoteStyle.CONCISE: "Create concise, focused medical notes. ",
}
DEFAULT_STYLE_CLAUSE = "Create standard medical notes. "

USER_PROMPT_TEMPLATE = (
    "{patient_context}\n\n"
    "CURRENT VISIT TRANSCRIPT:\n"
    "{transcript}\n\n"
    "Please convert this into structured medical notes following the specified format and preferences."
)


def build_system_prompt(preferences: AIPreferences) -> str:
    prompt = SYSTEM_PROMPT_PREFIX
    prompt += STYLE_CLAUSES.get(preferences.note_style, DEFAULT_STYLE_CLAUSE)

    prompt += "Include the following sections: "
    if preferences.include_assessment:
        prompt += "Assessment, "
    if preferences.include_plan:
        prompt += "Plan, "
    prompt += "Chief Complaint, History of Present Illness. "

    if preferences.custom_instructions:
        prompt += f"Additional instructions: {preferences.custom_instructions} "

    return prompt + SYSTEM_PROMPT_SUFFIX


def build_visit_history(patient: Patient, visit_count: int = 3, note_chars: int = 200) -> str:
    """One line per recent visit: ``<timestamp>: <start of notes>...``."""
    return "\n".join(
        f"{visit.timestamp}: {truncate_string(visit.notes, note_chars)}"
        for visit in patient.recent_visits(visit_count)
    )


def build_patient_context(
    patient: Optional[Patient], visit_count: int = 3, note_chars: int = 200
) -> str:
    """Patient context block, or an empty string when no patient is selected."""
    if patient is None:
        return ""
    return (
        "\nPATIENT CONTEXT:\n"
        f"Name: {patient.name}\n"
        f"DOB: {patient.dob}\n"
        f"MRN: {patient.mrn}\n"
        f"Known Conditions: {patient.conditions}\n"
        "\n"
        "RECENT VISIT HISTORY:\n"
        f"{build_visit_history(patient, visit_count, note_chars)}\n"
    )


def build_user_prompt(transcript: str, patient_context: str = "") -> str:
    return USER_PROMPT_TEMPLATE.format(patient_context=patient_context, transcript=transcript)


def build_note_messages(
    transcript: str,
    preferences: AIPreferences,
    patient: Optional[Patient] = None,
    history_visits: int = 3,
    history_note_chars: int = 200,
) -> List[Dict[str, str]]:
    """System and user messages for one note generation request."""
    patient_context = build_patient_context(patient, history_visits, history_note_chars)
    return [
        {"role": "system", "content": build_system_prompt(preferences)},
        {"role": "user", "content": build_user_prompt(transcript, patient_context)},
    ]
