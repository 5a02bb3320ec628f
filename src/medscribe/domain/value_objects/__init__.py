"""
Value objects package for domain layer.
"""

from .patient_id import PatientId
from .visit_id import VisitId

__all__ = [
    "PatientId",
    "VisitId",
]
