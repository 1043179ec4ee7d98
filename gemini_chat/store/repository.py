"""Persistence backends for the thread collection.

The store only ever loads the whole collection at startup and saves the whole
collection after each mutation, so a backend needs exactly two operations.
"""

import logging
from collections.abc import MutableMapping, Sequence
from typing import Any, Protocol

from pydantic import TypeAdapter, ValidationError

from gemini_chat.models import Thread

logger = logging.getLogger(__name__)

STORAGE_KEY = "gemini_threads"

_threads_adapter = TypeAdapter(list[Thread])


class StorageCorruptError(Exception):
    """Raised when saved threads exist but cannot be parsed."""

    pass


class ThreadRepository(Protocol):
    def load(self) -> list[Thread] | None:
        """Return the saved collection, or ``None`` if nothing was saved."""
        ...

    def save(self, threads: Sequence[Thread]) -> None: ...


class BrowserStorageRepository:
    """Saves threads as one JSON document under a fixed key.

    Works with any mutable mapping. In the app this is NiceGUI's
    ``app.storage.user``, which persists per browser.
    """

    def __init__(self, storage: MutableMapping[str, Any], key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    def load(self) -> list[Thread] | None:
        raw = self._storage.get(self._key)
        if raw is None:
            return None
        try:
            if isinstance(raw, str | bytes):
                return _threads_adapter.validate_json(raw)
            return _threads_adapter.validate_python(raw)
        except ValidationError as e:
            raise StorageCorruptError(f"Saved threads under '{self._key}' are unreadable: {e}") from e

    def save(self, threads: Sequence[Thread]) -> None:
        self._storage[self._key] = _threads_adapter.dump_json(list(threads)).decode("utf-8")

