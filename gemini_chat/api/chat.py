"""Streaming chat endpoint.

Relays a conversation to the model transport and streams the reply back as
Server-Sent Events, one ``StreamChunk`` per text delta.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from gemini_chat.agent.transport import ModelTransport, get_transport
from gemini_chat.models import ChatRequest, StreamChunk, StreamStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def _sse(chunk: StreamChunk) -> str:
    return f"data: {chunk.model_dump_json()}\n\n"


async def _event_stream(
    request: ChatRequest,
    transport: ModelTransport,
) -> AsyncGenerator[str]:
    """Yield SSE frames for one exchange.

    Errors are reported in-band as a final error chunk, since the response
    status has already been sent by the time the transport fails.
    """
    try:
        async for delta in transport.stream(request.contents):
            if delta:
                yield _sse(
                    StreamChunk(content=delta, done=False, status=StreamStatus.GENERATING)
                )
    except Exception as e:
        logger.error(f"Streaming failed: {e}")
        yield _sse(
            StreamChunk(
                content="",
                done=True,
                status=StreamStatus.ERROR,
                error=str(e) or type(e).__name__,
            )
        )
        return

    yield _sse(StreamChunk(content="", done=True, status=StreamStatus.COMPLETE))


@router.post("/stream")
async def chat_stream(
    request: ChatRequest,
    transport: ModelTransport = Depends(get_transport),
) -> StreamingResponse:
    """Stream a model reply for the given conversation.

    Args:
        request: Conversation history in wire format.
        transport: Model transport (overridable for tests).

    Returns:
        ``text/event-stream`` response of ``data: <StreamChunk>`` frames.
    """
    logger.info(f"Streaming reply for {len(request.contents)} turns")
    return StreamingResponse(
        _event_stream(request, transport),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
