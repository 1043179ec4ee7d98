"""Model transports: sources of streamed text deltas.

A transport takes the conversation in wire format and yields the model's
reply as a lazy, single-pass sequence of text deltas. Two implementations:

- ``GeminiTransport`` talks to the Gemini API through the google-genai SDK.
- ``HttpStreamTransport`` consumes this project's own ``/chat/stream`` SSE
  endpoint, so the browser UI never holds the API key.
"""

import base64
import logging
from collections.abc import AsyncIterator, Sequence
from typing import Protocol

import httpx
from google import genai
from google.genai import types

from gemini_chat.agent.config import ChatConfig, get_chat_config
from gemini_chat.models import InlineImagePart, StreamChunk, TextPart, TransportTurn

logger = logging.getLogger(__name__)


class TransmissionError(Exception):
    """Raised when a model exchange fails for any reason."""

    pass


class ModelTransport(Protocol):
    """Anything that can stream a reply for a conversation."""

    def stream(self, contents: Sequence[TransportTurn]) -> AsyncIterator[str]: ...


def to_gemini_part(part: TextPart | InlineImagePart) -> types.Part:
    """Convert a conversation part to the SDK's part type."""
    match part:
        case TextPart(text=text):
            return types.Part(text=text)
        case InlineImagePart(mime_type=mime_type, data=data):
            return types.Part(
                inline_data=types.Blob(mime_type=mime_type, data=base64.b64decode(data))
            )
        case _:
            raise TypeError(f"Unsupported part type: {type(part).__name__}")


def to_gemini_contents(contents: Sequence[TransportTurn]) -> list[types.Content]:
    return [
        types.Content(role=turn.role.value, parts=[to_gemini_part(p) for p in turn.parts])
        for turn in contents
    ]


class GeminiTransport:
    """Streams replies from the Gemini API.

    Hidden design decisions:
    - Google GenAI client initialization
    - Fixed generation config (system instruction and sampling parameters)
    - Message format conversion, including base64 image decoding
    """

    def __init__(self, config: ChatConfig | None = None) -> None:
        """Initialize the transport.

        Args:
            config: Optional model configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_chat_config()
        self._client = genai.Client(api_key=self._config.api_key)
        self._generation_config = types.GenerateContentConfig(
            system_instruction=self._config.system_instruction,
            temperature=self._config.temperature,
            top_p=self._config.top_p,
            top_k=self._config.top_k,
        )

    @property
    def model(self) -> str:
        return self._config.model_name

    async def stream(self, contents: Sequence[TransportTurn]) -> AsyncIterator[str]:
        """Yield text deltas for the given conversation.

        Args:
            contents: Conversation history in wire format.

        Yields:
            Non-empty text deltas in arrival order.
        """
        response_stream = await self._client.aio.models.generate_content_stream(
            model=self._config.model_name,
            contents=to_gemini_contents(contents),
            config=self._generation_config,
        )
        async for chunk in response_stream:
            if text := chunk.text:
                yield text


class HttpStreamTransport:
    """Consumes the ``/chat/stream`` SSE endpoint."""

    def __init__(
        self,
        base_url: str,
        http_transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 120.0,
    ) -> None:
        self._base_url = base_url
        self._http_transport = http_transport
        self._timeout = timeout

    async def stream(self, contents: Sequence[TransportTurn]) -> AsyncIterator[str]:
        payload = {"contents": [turn.model_dump(mode="json") for turn in contents]}
        async with (
            httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._http_transport,
            ) as client,
            client.stream(
                "POST",
                "/chat/stream",
                json=payload,
                headers={"Accept": "text/event-stream"},
            ) as response,
        ):
            response.raise_for_status()
            async for line in response.aiter_lines():
                if not line.startswith("data: "):
                    continue
                chunk = StreamChunk.model_validate_json(line.removeprefix("data: "))
                if chunk.error:
                    raise TransmissionError(chunk.error)
                if chunk.content:
                    yield chunk.content
                if chunk.done:
                    return
        # The body closed without a done chunk
        raise TransmissionError("Stream ended before completion")


# Module-level singleton instance
_transport: GeminiTransport | None = None


def get_transport() -> GeminiTransport:
    """Get or create the global Gemini transport.

    Returns:
        The GeminiTransport instance.
    """
    global _transport
    if _transport is None:
        _transport = GeminiTransport()
        logger.info(f"Gemini transport ready (model: {_transport.model})")
    return _transport
