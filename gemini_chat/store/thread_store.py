"""In-memory thread store with save-on-every-mutation persistence.

The store is the single owner of all threads and turns. Callers mutate state
only through its commands; the accumulator and renderer never hold references
to stored records.
"""

import logging
from datetime import UTC, datetime

from gemini_chat.models import (
    IMAGE_QUERY_TITLE,
    TITLE_MAX_LENGTH,
    InlineImagePart,
    Part,
    Role,
    TextPart,
    Thread,
    Turn,
)
from gemini_chat.store.repository import StorageCorruptError, ThreadRepository

logger = logging.getLogger(__name__)


class ThreadNotFoundError(KeyError):
    """Raised when a thread id is not in the store."""

    pass


class TurnNotFoundError(KeyError):
    """Raised when a turn id is not in the given thread."""

    pass


class ThreadStore:
    """Ordered conversation threads (newest first) and the active thread.

    Every command that changes the collection saves it through the
    repository before returning.
    """

    def __init__(self, repository: ThreadRepository) -> None:
        """Load saved threads, or seed one empty thread if none were saved.

        Args:
            repository: Persistence backend for the whole collection.
        """
        self._repository = repository
        self._threads: list[Thread] = []
        self._active_id: str | None = None

        try:
            saved = repository.load()
        except StorageCorruptError as e:
            logger.warning(f"Discarding unreadable saved threads: {e}")
            saved = None

        if saved is None:
            self.create_thread()
        else:
            self._threads = saved
            self._active_id = saved[0].id if saved else None
            logger.info(f"Loaded {len(saved)} saved threads")

    # === Queries ===

    @property
    def threads(self) -> list[Thread]:
        return list(self._threads)

    @property
    def active_thread_id(self) -> str | None:
        return self._active_id

    def active_thread(self) -> Thread | None:
        if self._active_id is None:
            return None
        return self.get_thread(self._active_id)

    def get_thread(self, thread_id: str) -> Thread:
        for thread in self._threads:
            if thread.id == thread_id:
                return thread
        raise ThreadNotFoundError(thread_id)

    # === Commands ===

    def create_thread(self) -> Thread:
        """Prepend a new empty thread and make it active."""
        now = datetime.now(UTC)
        thread = Thread(created_at=now, updated_at=now)
        self._threads.insert(0, thread)
        self._active_id = thread.id
        self._save()
        return thread

    def select_thread(self, thread_id: str) -> None:
        self._active_id = self.get_thread(thread_id).id

    def delete_thread(self, thread_id: str) -> None:
        """Remove a thread.

        If it was active, the first remaining thread becomes active, or no
        thread when the list is empty.
        """
        thread = self.get_thread(thread_id)
        self._threads.remove(thread)
        if self._active_id == thread_id:
            self._active_id = self._threads[0].id if self._threads else None
        self._save()

    def append_user_turn(
        self,
        thread_id: str,
        text: str,
        image: InlineImagePart | None = None,
    ) -> Turn:
        """Append a user turn built from text and an optional image.

        The thread title is taken from the first user turn only.

        Args:
            thread_id: Target thread.
            text: Message text. Blank text contributes no text part.
            image: Optional attached image, placed after the text part.

        Returns:
            The appended turn.

        Raises:
            ThreadNotFoundError: If the thread does not exist.
            ValueError: If there is neither text nor an image.
        """
        thread = self.get_thread(thread_id)

        parts: list[Part] = []
        if text.strip():
            parts.append(TextPart(text=text))
        if image is not None:
            parts.append(image)
        if not parts:
            raise ValueError("A user turn needs text or an image")

        turn = Turn(role=Role.USER, content=text, parts=parts)
        if not thread.messages:
            thread.title = text[:TITLE_MAX_LENGTH] if text.strip() else IMAGE_QUERY_TITLE
        thread.messages.append(turn)
        thread.updated_at = datetime.now(UTC)
        self._save()
        return turn

    def append_placeholder_model_turn(self, thread_id: str) -> str:
        """Append an empty model turn to be filled in while streaming.

        Returns:
            Id of the placeholder turn.
        """
        thread = self.get_thread(thread_id)
        turn = Turn(role=Role.MODEL, content="")
        thread.messages.append(turn)
        self._save()
        return turn.id

    def patch_turn_content(self, thread_id: str, turn_id: str, content: str) -> None:
        """Replace a turn's content with the latest cumulative snapshot."""
        turn = self.get_thread(thread_id).find_turn(turn_id)
        if turn is None:
            raise TurnNotFoundError(turn_id)
        turn.content = content
        self._save()

    def remove_turn(self, thread_id: str, turn_id: str) -> None:
        """Drop a turn from a thread, e.g. a model placeholder that never got text."""
        thread = self.get_thread(thread_id)
        turn = thread.find_turn(turn_id)
        if turn is None:
            raise TurnNotFoundError(turn_id)
        thread.messages.remove(turn)
        self._save()

    def _save(self) -> None:
        self._repository.save(self._threads)
