"""
Storage adapters for MedScribe.

This module contains the document store backends and the factory that picks
one from configuration.
"""

from ...application.ports.storage.document_store import DocumentStore
from ...core.config import Settings
from ...core.exceptions import ConfigurationError
from .json_file_store import JsonFileDocumentStore
from .memory_store import MemoryDocumentStore
from .unavailable_store import UnavailableDocumentStore


def get_document_store(settings: Settings) -> DocumentStore:
    """Build the document store selected by ``STORAGE_BACKEND``."""
    backend = settings.storage.backend
    if backend == "file":
        return JsonFileDocumentStore(settings.storage.path)
    if backend == "memory":
        return MemoryDocumentStore()
    if backend == "mongo":
        if not settings.database.uri:
            raise ConfigurationError(
                "MONGO_URI is required when STORAGE_BACKEND=mongo",
                {"backend": backend},
            )
        from ..db.mongo.repositories.document_store import MongoDocumentStore

        return MongoDocumentStore()
    raise ConfigurationError(f"Unknown storage backend: {backend}", {"backend": backend})


__all__ = [
    "get_document_store",
    "JsonFileDocumentStore",
    "MemoryDocumentStore",
    "UnavailableDocumentStore",
]
