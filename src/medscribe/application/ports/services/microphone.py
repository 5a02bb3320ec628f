"""
Microphone access interface.
"""

from abc import ABC, abstractmethod


class MicrophoneAccess(ABC):
    """Abstract gate in front of the audio input device."""

    @abstractmethod
    async def request_access(self) -> None:
        """Ensure the microphone can be opened.

        Raises:
            MicrophonePermissionDeniedError: if access is refused or no
                input device is available.
        """
        pass
