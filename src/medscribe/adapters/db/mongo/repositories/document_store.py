"""
MongoDB implementation of DocumentStore.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from pymongo.errors import PyMongoError

from medscribe.application.ports.storage.document_store import DocumentStore
from medscribe.domain.errors import PersistenceError

from ..models.document_m import StoredDocumentMongo

logger = logging.getLogger(__name__)


class MongoDocumentStore(DocumentStore):
    """Documents stored through Beanie; ``init_beanie`` must have run first."""

    async def load(self, key: str) -> Optional[Any]:
        try:
            stored = await StoredDocumentMongo.find_one(StoredDocumentMongo.key == key)
        except PyMongoError as e:
            raise PersistenceError(key, f"{type(e).__name__}: {e}")
        return stored.payload if stored else None

    async def save(self, key: str, document: Any) -> None:
        try:
            stored = await StoredDocumentMongo.find_one(StoredDocumentMongo.key == key)
            if stored is None:
                stored = StoredDocumentMongo(key=key, payload=document)
            else:
                stored.payload = document
                stored.updated_at = datetime.now(timezone.utc)
            await stored.save()
        except PyMongoError as e:
            raise PersistenceError(key, f"{type(e).__name__}: {e}")
        logger.debug(f"Saved document '{key}' to MongoDB")
