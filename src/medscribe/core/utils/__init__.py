"""
Utility functions for MedScribe application.
"""

from .datetime_utils import (
    format_local_timestamp,
    format_iso_timestamp,
    get_current_timestamp,
    parse_iso_timestamp,
)
from .string_utils import generate_id, mask_secret, truncate_string

__all__ = [
    # Datetime utilities
    "get_current_timestamp",
    "format_iso_timestamp",
    "parse_iso_timestamp",
    "format_local_timestamp",
    # String utilities
    "generate_id",
    "mask_secret",
    "truncate_string",
]
