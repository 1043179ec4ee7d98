"""Model service access and streaming.

Talks to the hosted Gemini model and turns its streamed output into growing
text snapshots.

Responsibilities:
    - Configuration of the model, system instruction and sampling parameters
    - Conversion of stored turns to the wire format
    - Streaming transports (direct SDK, or this project's SSE endpoint)
    - Delta accumulation with per-snapshot callbacks

Keeps no conversation state; the thread store owns all history.
"""

from gemini_chat.agent.accumulator import StreamingAccumulator, to_transport_turns
from gemini_chat.agent.config import ChatConfig, get_chat_config
from gemini_chat.agent.transport import (
    GeminiTransport,
    HttpStreamTransport,
    ModelTransport,
    TransmissionError,
    get_transport,
)

__all__ = [
    "ChatConfig",
    "GeminiTransport",
    "HttpStreamTransport",
    "ModelTransport",
    "StreamingAccumulator",
    "TransmissionError",
    "get_chat_config",
    "get_transport",
    "to_transport_turns",
]
