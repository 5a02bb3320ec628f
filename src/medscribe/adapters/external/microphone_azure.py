"""Default-microphone access check backed by the Azure Speech SDK."""

import asyncio
import logging

import azure.cognitiveservices.speech as speechsdk

from ...application.ports.services.microphone import MicrophoneAccess
from ...domain.errors import MicrophonePermissionDeniedError

logger = logging.getLogger(__name__)


class DefaultMicrophoneAccess(MicrophoneAccess):
    """Opens an audio config on the default input device to see if it is usable."""

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled

    async def request_access(self) -> None:
        if not self._enabled:
            raise MicrophonePermissionDeniedError("microphone disabled by configuration")

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None, lambda: speechsdk.audio.AudioConfig(use_default_microphone=True)
            )
        except RuntimeError as e:
            logger.warning(f"Default microphone unavailable: {e}")
            raise MicrophonePermissionDeniedError(str(e))
