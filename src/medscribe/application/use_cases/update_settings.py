"""Update use cases for the API settings and AI preferences documents."""

from ...core.constants import STATUS_API_SETTINGS_SAVED, STATUS_PREFERENCES_SAVED
from ...domain.entities.api_settings import ApiSettings
from ...domain.entities.preferences import AIPreferences
from ...domain.entities.session import ScribeSession
from ..services.storage_health import StorageHealth
from ..stores.preferences_store import PreferencesStore
from ..stores.settings_store import ApiSettingsStore


class UpdateApiSettingsUseCase:
    def __init__(self, session: ScribeSession, settings_store: ApiSettingsStore, health: StorageHealth):
        self._session = session
        self._settings_store = settings_store
        self._health = health

    async def execute(self, settings: ApiSettings) -> ApiSettings:
        saved = await self._settings_store.update(settings)
        self._session.status = self._health.status_with_notice(STATUS_API_SETTINGS_SAVED)
        return saved


class UpdatePreferencesUseCase:
    def __init__(self, session: ScribeSession, preferences_store: PreferencesStore, health: StorageHealth):
        self._session = session
        self._preferences_store = preferences_store
        self._health = health

    async def execute(self, preferences: AIPreferences) -> AIPreferences:
        saved = await self._preferences_store.update(preferences)
        self._session.status = self._health.status_with_notice(STATUS_PREFERENCES_SAVED)
        return saved
