"""
Recording session and speech recognition enums.
"""

from enum import Enum


class RecordingState(str, Enum):
    """States of the recording session."""
    IDLE = "idle"
    REQUESTING_PERMISSION = "requesting_permission"
    ACTIVE = "active"
    STOPPING = "stopping"
    ERROR = "error"  # Resting state after a failed start or a canceled stream


class RecognitionReason(str, Enum):
    """Why the speech engine emitted a result."""
    RECOGNIZING_SPEECH = "recognizing_speech"  # Interim hypothesis
    RECOGNIZED_SPEECH = "recognized_speech"    # Finalized phrase
    NO_MATCH = "no_match"                      # Audio without recognizable speech
    OTHER = "other"
