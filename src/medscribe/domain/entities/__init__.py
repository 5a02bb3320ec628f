"""
Domain entities package.
"""

from .api_settings import ApiSettings
from .patient import Patient
from .preferences import AIPreferences
from .session import ScribeSession
from .visit import Visit

__all__ = [
    "ApiSettings",
    "AIPreferences",
    "Patient",
    "ScribeSession",
    "Visit",
]
