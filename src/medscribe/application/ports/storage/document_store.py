"""
Document store interface: whole JSON documents addressed by key.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class DocumentStore(ABC):
    """Abstract key/document store.

    Documents are loaded once at startup and overwritten wholesale on save.
    Both operations raise ``PersistenceError`` when the backend fails.
    """

    @abstractmethod
    async def load(self, key: str) -> Optional[Any]:
        """Return the stored document, or None if nothing was saved yet."""
        pass

    @abstractmethod
    async def save(self, key: str, document: Any) -> None:
        """Replace the document stored under key."""
        pass
