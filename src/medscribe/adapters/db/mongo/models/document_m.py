"""MongoDB Beanie model for stored scribe documents."""

from datetime import datetime, timezone
from typing import Any

from beanie import Document
from pydantic import Field


class StoredDocumentMongo(Document):
    """One whole document (patients, preferences or API settings) per key."""

    key: str = Field(..., description="Document key")
    payload: Any = Field(None, description="Document content as stored by the client")
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "documents"
        indexes = [
            "key",
        ]
