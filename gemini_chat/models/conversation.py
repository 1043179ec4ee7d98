"""Conversation data model: parts, turns and threads.

These are the records the thread store owns and persists. Everything is a
pydantic model so the whole collection serializes to a single JSON document.
"""

import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

NEW_THREAD_TITLE = "New Conversation"
IMAGE_QUERY_TITLE = "Image Query"
TITLE_MAX_LENGTH = 30


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(UTC)


class Role(str, Enum):
    """Author of a turn."""

    USER = "user"
    MODEL = "model"
    SYSTEM = "system"


class TextPart(BaseModel):
    """A plain text segment of a turn."""

    type: Literal["text"] = "text"
    text: str


class InlineImagePart(BaseModel):
    """An image embedded in a turn as base64 data.

    Attributes:
        mime_type: Image MIME type, e.g. ``image/png``.
        data: Base64-encoded image bytes.
    """

    type: Literal["inline_image"] = "inline_image"
    mime_type: str = Field(..., pattern=r"^image/")
    data: str = Field(..., min_length=1)

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


Part = Annotated[TextPart | InlineImagePart, Field(discriminator="type")]


class Turn(BaseModel):
    """One message in a conversation.

    Attributes:
        id: Unique turn identifier.
        role: Who authored the turn.
        content: Plain text of the turn. For a streaming model turn this is
            replaced with the cumulative text on every received snapshot.
        parts: Mixed text/image segments. ``None`` means ``content`` is the
            only text.
        timestamp: Creation time (UTC).
    """

    id: str = Field(default_factory=_new_id)
    role: Role
    content: str = ""
    parts: list[Part] | None = None
    timestamp: datetime = Field(default_factory=_now)

    def transport_parts(self) -> list[Part]:
        """Parts to send to the model, falling back to ``content`` as text."""
        if self.parts is None:
            return [TextPart(text=self.content)]
        return list(self.parts)


class Thread(BaseModel):
    """A conversation thread: an ordered list of turns plus metadata."""

    id: str = Field(default_factory=_new_id)
    title: str = NEW_THREAD_TITLE
    messages: list[Turn] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    def find_turn(self, turn_id: str) -> Turn | None:
        for turn in self.messages:
            if turn.id == turn_id:
                return turn
        return None
