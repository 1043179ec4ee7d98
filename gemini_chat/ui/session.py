"""Per-browser chat session: the submit flow between store and model."""

import logging
from collections.abc import Callable

from gemini_chat.agent import StreamingAccumulator, TransmissionError
from gemini_chat.models import InlineImagePart
from gemini_chat.store import ThreadStore

logger = logging.getLogger(__name__)


class ChatSession:
    """Manages chat state for a user session.

    Owns the transient composer state (in-flight flag, attached image) and
    runs one model exchange at a time against the active thread.
    """

    def __init__(self, store: ThreadStore, accumulator: StreamingAccumulator) -> None:
        self.store = store
        self.accumulator = accumulator
        self.is_streaming: bool = False
        self.attached_image: InlineImagePart | None = None

    def can_submit(self, text: str) -> bool:
        return (
            not self.is_streaming
            and self.store.active_thread_id is not None
            and bool(text.strip() or self.attached_image)
        )

    async def submit(
        self,
        text: str,
        on_started: Callable[[], None] | None = None,
        on_update: Callable[[str, str], None] | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> bool:
        """Send a message to the active thread and stream the reply into it.

        Args:
            text: Composer text.
            on_started: Called once the user turn and the placeholder model
                turn are in the store.
            on_update: Called with ``(turn_id, snapshot)`` after each patch
                of the placeholder.
            on_error: Called with the failure message if the exchange fails.
                The placeholder keeps the last delivered snapshot, or is
                removed if no text arrived.

        Returns:
            False if the submit was ignored, True otherwise (including when
            the exchange failed).
        """
        if not self.can_submit(text):
            return False

        thread_id = self.store.active_thread_id
        image, self.attached_image = self.attached_image, None
        self.is_streaming = True
        placeholder_id: str | None = None

        try:
            self.store.append_user_turn(thread_id, text, image)
            history = list(self.store.get_thread(thread_id).messages)
            placeholder_id = self.store.append_placeholder_model_turn(thread_id)
            if on_started:
                on_started()

            def patch(snapshot: str) -> None:
                self.store.patch_turn_content(thread_id, placeholder_id, snapshot)
                if on_update:
                    on_update(placeholder_id, snapshot)

            await self.accumulator.send(history, patch)
        except TransmissionError as e:
            logger.error(f"Model exchange failed for thread {thread_id}: {e}")
            if on_error:
                on_error(str(e))
        finally:
            if placeholder_id is not None:
                self._drop_if_empty(thread_id, placeholder_id)
            self.is_streaming = False

        return True

    def _drop_if_empty(self, thread_id: str, turn_id: str) -> None:
        # Only an in-flight placeholder may be persisted without content
        turn = self.store.get_thread(thread_id).find_turn(turn_id)
        if turn is not None and not turn.content:
            self.store.remove_turn(thread_id, turn_id)
