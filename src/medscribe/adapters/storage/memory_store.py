"""In-process document store; nothing survives a restart."""

import copy
from typing import Any, Dict, Optional

from ...application.ports.storage.document_store import DocumentStore


class MemoryDocumentStore(DocumentStore):
    def __init__(self, documents: Optional[Dict[str, Any]] = None) -> None:
        self._documents: Dict[str, Any] = copy.deepcopy(documents or {})

    async def load(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._documents.get(key))

    async def save(self, key: str, document: Any) -> None:
        self._documents[key] = copy.deepcopy(document)
