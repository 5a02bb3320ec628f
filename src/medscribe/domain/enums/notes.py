"""
Note generation enums.
"""

from enum import Enum


class NoteStyle(str, Enum):
    """Level of detail requested for generated notes."""
    STANDARD = "standard"
    DETAILED = "detailed"
    CONCISE = "concise"
