"""Tracks which documents fell back to in-memory operation."""

import logging
from typing import Optional, Set

from ...core.constants import STATUS_STORAGE_UNAVAILABLE
from ...domain.errors import PersistenceError

logger = logging.getLogger(__name__)


class StorageHealth:
    """Shared by the stores so a storage outage is reported to the clinician once."""

    def __init__(self) -> None:
        self._degraded_keys: Set[str] = set()
        self._notice_pending = False
        self._notice_shown = False

    def report_failure(self, key: str, error: PersistenceError) -> None:
        if key in self._degraded_keys:
            return
        self._degraded_keys.add(key)
        logger.warning(
            f"⚠️ Document store unavailable for '{key}', keeping changes in memory only: {error.message}"
        )
        if not self._notice_shown:
            self._notice_pending = True

    def is_degraded(self, key: str) -> bool:
        return key in self._degraded_keys

    @property
    def degraded(self) -> bool:
        return bool(self._degraded_keys)

    @property
    def degraded_keys(self) -> Set[str]:
        return set(self._degraded_keys)

    def take_notice(self) -> Optional[str]:
        """Return the storage warning the first time it is due, then None."""
        if not self._notice_pending:
            return None
        self._notice_pending = False
        self._notice_shown = True
        return STATUS_STORAGE_UNAVAILABLE

    def status_with_notice(self, status: str) -> str:
        """The pending storage warning, if any, takes precedence over ``status``."""
        return self.take_notice() or status
