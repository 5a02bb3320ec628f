"""
Chat-completion service interface used for medical note generation.
"""

from abc import ABC, abstractmethod
from typing import Dict, List

from ....domain.entities.api_settings import ApiSettings


class CompletionService(ABC):
    """Abstract interface for a chat-completion endpoint."""

    @abstractmethod
    async def complete(
        self,
        api_settings: ApiSettings,
        messages: List[Dict[str, str]],
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        Send a chat-completion request and return the first choice's content.

        Args:
            api_settings: Endpoint, key, deployment and API version to use
            messages: Chat messages (``role``/``content`` dicts)
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature

        Returns:
            The generated message content

        Raises:
            CompletionServiceError: on any transport or HTTP failure
        """
        pass
