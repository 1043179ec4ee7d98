"""Conversation thread storage.

Owns every thread and turn, exposes them through synchronous commands, and
persists the full collection after each change.
"""

from gemini_chat.store.repository import (
    STORAGE_KEY,
    BrowserStorageRepository,
    StorageCorruptError,
    ThreadRepository,
)
from gemini_chat.store.thread_store import ThreadNotFoundError, ThreadStore, TurnNotFoundError

__all__ = [
    "STORAGE_KEY",
    "BrowserStorageRepository",
    "StorageCorruptError",
    "ThreadNotFoundError",
    "ThreadRepository",
    "ThreadStore",
    "TurnNotFoundError",
]
