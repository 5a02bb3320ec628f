"""Stand-in document store for a backend that could not be reached at startup."""

from typing import Any, Optional

from ...application.ports.storage.document_store import DocumentStore
from ...domain.errors import PersistenceError


class UnavailableDocumentStore(DocumentStore):
    """Fails every operation so each store degrades to memory through StorageHealth."""

    def __init__(self, reason: str) -> None:
        self._reason = reason

    async def load(self, key: str) -> Optional[Any]:
        raise PersistenceError(key, self._reason)

    async def save(self, key: str, document: Any) -> None:
        raise PersistenceError(key, self._reason)
