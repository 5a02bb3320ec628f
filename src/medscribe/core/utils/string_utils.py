"""
String utility functions for MedScribe application.
"""

import uuid


def generate_id(prefix: str = "") -> str:
    """Generate a unique ID with optional prefix."""
    unique_id = str(uuid.uuid4()).replace("-", "")
    return f"{prefix}{unique_id}" if prefix else unique_id


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """Cut text to max_length characters and always append suffix.

    Used for history digests where the marker shows the note continues.
    """
    return (text or "")[:max_length] + suffix


def mask_secret(value: str, visible: int = 4) -> str:
    """Mask a credential, keeping only its last few characters."""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
