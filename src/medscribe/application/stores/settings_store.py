"""API settings, persisted as a single document.

Nothing in here logs setting values; only which fields are set.
"""

import logging

from ...core.constants import API_SETTINGS_DOCUMENT_KEY
from ...domain.entities.api_settings import ApiSettings
from .base import DocumentBackedStore

logger = logging.getLogger(__name__)


class ApiSettingsStore(DocumentBackedStore):
    document_key = API_SETTINGS_DOCUMENT_KEY

    def __init__(self, *args, defaults: ApiSettings = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._defaults = defaults or ApiSettings()
        self._settings = self._defaults

    @property
    def current(self) -> ApiSettings:
        return self._settings

    async def load(self) -> None:
        document = await self._load_document()
        if document is None:
            return
        try:
            merged = {**self._defaults.to_document(), **document}
            self._settings = ApiSettings.from_document(merged)
        except (AttributeError, TypeError, ValueError) as exc:
            self._reject_document(f"malformed API settings document: {type(exc).__name__}")

    async def update(self, settings: ApiSettings) -> ApiSettings:
        async with self._write_lock:
            await self._persist(settings.to_document())
            self._settings = settings
        logger.info(
            "API settings updated "
            f"(speech configured: {not settings.missing_speech_fields()}, "
            f"completion configured: {not settings.missing_completion_fields()})"
        )
        return settings
