"""
Local JSON file document store.

One ``<key>.json`` file per document under a storage directory. Writes go to a
temporary file that is then renamed over the target, so an interrupted save
leaves the previous document intact.
"""

import asyncio
import json
import logging
import os
from functools import partial
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from ...application.ports.storage.document_store import DocumentStore
from ...domain.errors import PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_blocking(func: Callable[..., T], *args: Any) -> T:
    """Run blocking file IO in the default executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args))


class JsonFileDocumentStore(DocumentStore):
    def __init__(self, base_path: str) -> None:
        self._base_path = Path(base_path)

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _path_for(self, key: str) -> Path:
        return self._base_path / f"{key}.json"

    def _read(self, key: str) -> Optional[Any]:
        path = self._path_for(key)
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)

    def _write(self, key: str, document: Any) -> None:
        self._base_path.mkdir(parents=True, exist_ok=True)
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(document, fh, ensure_ascii=False)
        os.replace(tmp_path, path)

    async def load(self, key: str) -> Optional[Any]:
        try:
            return await run_blocking(self._read, key)
        except (OSError, ValueError) as e:
            raise PersistenceError(key, f"{type(e).__name__}: {e}")

    async def save(self, key: str, document: Any) -> None:
        try:
            await run_blocking(self._write, key, document)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(key, f"{type(e).__name__}: {e}")
        logger.debug(f"Saved document '{key}' to {self._base_path}")
