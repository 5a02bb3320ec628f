"""
Domain-specific error types for business rule violations.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class PatientNotFoundError(DomainError):
    """Patient not found."""

    def __init__(self, patient_id: str) -> None:
        message = f"Patient with ID '{patient_id}' not found"
        super().__init__(message, "PATIENT_NOT_FOUND", {"patient_id": patient_id})


class InvalidPatientDataError(DomainError):
    """Invalid patient data."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message, "INVALID_PATIENT_DATA", {"field": field})


class EmptyTranscriptError(DomainError):
    """Notes were requested before anything was transcribed."""

    def __init__(self) -> None:
        super().__init__("No transcript available", "EMPTY_TRANSCRIPT")


class ConfigurationMissingError(DomainError):
    """Credentials for an external service have not been configured."""

    def __init__(self, service: str, missing_fields: list) -> None:
        message = f"{service} settings are incomplete: {', '.join(missing_fields)}"
        super().__init__(
            message,
            "CONFIGURATION_MISSING",
            {"service": service, "missing_fields": missing_fields},
        )


class MicrophonePermissionDeniedError(DomainError):
    """Access to the microphone was refused."""

    def __init__(self, reason: str = "") -> None:
        super().__init__(
            f"Microphone access denied{': ' + reason if reason else ''}",
            "MICROPHONE_PERMISSION_DENIED",
        )


class PersistenceError(DomainError):
    """The document store could not load or save a document."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Storage operation failed for '{key}': {reason}",
            "PERSISTENCE_ERROR",
            {"key": key},
        )
