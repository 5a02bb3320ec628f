"""
Exception handling for MedScribe application.

This module provides custom exception classes for the infrastructure layers
of the application. Business rule violations live in domain.errors.
"""

from typing import Any, Dict, Optional


class MedScribeException(Exception):
    """Base exception class for MedScribe application."""

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


class ConfigurationError(MedScribeException):
    """Raised when there's a configuration error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "CONFIG_ERROR", details)


class ExternalServiceError(MedScribeException):
    """Raised when there's an external service error."""

    def __init__(
        self,
        service: str,
        message: str,
        error_code: str = "EXTERNAL_SERVICE_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.service = service
        self.raw_message = message
        full_message = f"{service} service error: {message}"
        super().__init__(full_message, error_code, details)


class SpeechServiceError(ExternalServiceError):
    """Raised when the speech engine fails to start or stop a stream."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("Azure Speech", message, "SPEECH_SERVICE_ERROR", details)


class CompletionServiceError(ExternalServiceError):
    """Raised when the chat-completion service call fails.

    ``status_code`` is the HTTP status reported by the service, or None when the
    request never produced a response (connection errors, timeouts).
    """

    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    OTHER = "other"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        super().__init__("Azure OpenAI", message, "COMPLETION_SERVICE_ERROR", details)

    @property
    def category(self) -> str:
        if self.status_code == 401:
            return self.AUTHENTICATION
        if self.status_code == 404:
            return self.NOT_FOUND
        if self.status_code == 429:
            return self.RATE_LIMITED
        return self.OTHER
