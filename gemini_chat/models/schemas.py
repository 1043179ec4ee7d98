from enum import Enum

from pydantic import BaseModel, Field

from gemini_chat.models.conversation import Part, Role


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class TransportTurn(BaseModel):
    """A turn in the model service's wire format.

    Attributes:
        role: ``user`` or ``model``. System turns never reach the wire.
        parts: Ordered text/image parts, at least one.
    """

    role: Role
    parts: list[Part] = Field(..., min_length=1)


class ChatRequest(BaseModel):
    """Request payload for the streaming chat endpoint.

    Attributes:
        contents: Conversation history, oldest first, ending with the
            user turn to answer.
    """

    contents: list[TransportTurn] = Field(..., min_length=1)


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text delta carried by this chunk.
        done: Whether this is the final chunk.
        status: Current processing status (generating, complete, error).
        error: Error message if something went wrong.
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None
