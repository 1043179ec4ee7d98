"""Pydantic models for conversations and the streaming API.

Provides type safety, validation, and JSON (de)serialization for both the
persisted thread collection and the HTTP wire format.

Models:
    - Role, TextPart, InlineImagePart, Part: turn content
    - Turn, Thread: the records owned by the thread store
    - TransportTurn, ChatRequest: request payload for /chat/stream
    - StreamChunk, StreamStatus: SSE response chunks
"""

from gemini_chat.models.conversation import (
    IMAGE_QUERY_TITLE,
    NEW_THREAD_TITLE,
    TITLE_MAX_LENGTH,
    InlineImagePart,
    Part,
    Role,
    TextPart,
    Thread,
    Turn,
)
from gemini_chat.models.schemas import ChatRequest, StreamChunk, StreamStatus, TransportTurn

__all__ = [
    "IMAGE_QUERY_TITLE",
    "NEW_THREAD_TITLE",
    "TITLE_MAX_LENGTH",
    "ChatRequest",
    "InlineImagePart",
    "Part",
    "Role",
    "StreamChunk",
    "StreamStatus",
    "TextPart",
    "Thread",
    "TransportTurn",
    "Turn",
]
