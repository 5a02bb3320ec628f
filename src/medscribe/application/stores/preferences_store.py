"""AI note preferences, persisted as a single document."""

from ...core.constants import PREFERENCES_DOCUMENT_KEY
from ...domain.entities.preferences import AIPreferences
from .base import DocumentBackedStore


class PreferencesStore(DocumentBackedStore):
    document_key = PREFERENCES_DOCUMENT_KEY

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._preferences = AIPreferences()

    @property
    def current(self) -> AIPreferences:
        return self._preferences

    async def load(self) -> None:
        document = await self._load_document()
        if document is None:
            return
        try:
            self._preferences = AIPreferences.from_document(document)
        except (AttributeError, TypeError, ValueError) as exc:
            self._reject_document(f"malformed preferences document: {exc}")

    async def update(self, preferences: AIPreferences) -> AIPreferences:
        async with self._write_lock:
            await self._persist(preferences.to_document())
            self._preferences = preferences
        return preferences
