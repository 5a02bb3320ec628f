"""Write-through persistence shared by the patient, preferences and settings stores."""

import asyncio
import logging
from typing import Any, Optional

from ...domain.errors import PersistenceError
from ..ports.storage.document_store import DocumentStore
from ..services.storage_health import StorageHealth

logger = logging.getLogger(__name__)


class DocumentBackedStore:
    """One in-memory value mirrored to one document.

    Subclasses build a new value, call ``_persist`` with its document form and
    only then replace their in-memory value, all while holding ``_write_lock``
    so overlapping updates apply one after another. After the first storage
    failure the store keeps working from memory and stops touching the backend.
    """

    document_key: str = ""

    def __init__(self, document_store: DocumentStore, health: StorageHealth) -> None:
        self._document_store = document_store
        self._health = health
        self._write_lock = asyncio.Lock()

    @property
    def degraded(self) -> bool:
        return self._health.is_degraded(self.document_key)

    async def _load_document(self) -> Optional[Any]:
        if self.degraded:
            return None
        try:
            return await self._document_store.load(self.document_key)
        except PersistenceError as exc:
            self._health.report_failure(self.document_key, exc)
            return None

    async def _persist(self, document: Any) -> None:
        if self.degraded:
            return
        try:
            await self._document_store.save(self.document_key, document)
        except PersistenceError as exc:
            self._health.report_failure(self.document_key, exc)

    def _reject_document(self, reason: str) -> None:
        """Treat an unreadable stored document as a storage failure.

        The stored copy is left untouched because the store stops writing.
        """
        self._health.report_failure(
            self.document_key, PersistenceError(self.document_key, reason)
        )
