"""
Speech engine interface for continuous speech-to-text.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from ....domain.enums.recording import RecognitionReason


@dataclass(frozen=True)
class RecognitionEvent:
    """A recognition result delivered by the engine."""

    text: str
    reason: RecognitionReason


@dataclass(frozen=True)
class CancellationDetails:
    """Why the engine canceled a running session."""

    error_code: str = ""
    error_details: str = ""
    is_error: bool = True

    def __str__(self) -> str:
        if self.error_code and self.error_details:
            return f"{self.error_code}: {self.error_details}"
        return self.error_details or self.error_code


@dataclass
class RecognitionHandlers:
    """Sinks registered on a recognizer before the stream starts.

    Implementations call these on the event loop, in emission order.
    """

    on_interim: Callable[[RecognitionEvent], None]
    on_final: Callable[[RecognitionEvent], None]
    on_session_stopped: Callable[[], None]
    on_canceled: Callable[[CancellationDetails], None]


class SpeechRecognizer(ABC):
    """Handle to one continuous recognition stream."""

    @abstractmethod
    async def start(self, handlers: RecognitionHandlers) -> None:
        """Register handlers and start continuous recognition.

        Raises:
            SpeechServiceError: if the engine refuses to start the stream.
        """
        pass

    @abstractmethod
    async def stop(self) -> None:
        """Stop continuous recognition.

        Raises:
            SpeechServiceError: if the engine reports an error while stopping.
        """
        pass


class SpeechEngine(ABC):
    """Abstract factory for recognizers."""

    @abstractmethod
    def create_recognizer(
        self,
        credential_key: str,
        region: str,
        recognition_language: Optional[str] = None,
    ) -> SpeechRecognizer:
        """Build a recognizer bound to the microphone.

        Raises:
            SpeechServiceError: if the recognizer cannot be configured.
        """
        pass
