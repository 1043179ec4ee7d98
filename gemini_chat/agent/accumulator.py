"""Streaming response accumulator.

Drives a single exchange with the model service: maps the conversation to the
wire format, consumes the delta stream and hands each growing snapshot of the
reply to a callback.
"""

import logging
from collections.abc import Callable, Sequence

from gemini_chat.agent.transport import ModelTransport, TransmissionError
from gemini_chat.models import Role, TransportTurn, Turn

logger = logging.getLogger(__name__)


def to_transport_turns(history: Sequence[Turn]) -> list[TransportTurn]:
    """Map stored turns to the wire format.

    System turns are dropped; system behavior is configured on the transport.

    Args:
        history: Conversation turns, oldest first.

    Returns:
        One transport turn per non-system turn.
    """
    return [
        TransportTurn(role=turn.role, parts=turn.transport_parts())
        for turn in history
        if turn.role != Role.SYSTEM
    ]


class StreamingAccumulator:
    """Accumulates streamed deltas into the full reply text.

    Holds no per-exchange state; one instance can serve any number of
    sequential or concurrent ``send`` calls.
    """

    def __init__(self, transport: ModelTransport) -> None:
        self._transport = transport

    async def send(self, history: Sequence[Turn], on_update: Callable[[str], None]) -> str:
        """Send the conversation and stream the reply.

        ``on_update`` is called once per delta with the cumulative text, before
        the next delta is awaited. Snapshots only ever grow.

        Args:
            history: Conversation turns, oldest first.
            on_update: Receives each cumulative snapshot.

        Returns:
            The complete reply text ("" for an empty stream).

        Raises:
            TransmissionError: If the transport fails. Snapshots already
                delivered are not retracted.
        """
        contents = to_transport_turns(history)
        stream = aiter(self._transport.stream(contents))
        full_text = ""

        while True:
            try:
                delta = await anext(stream)
            except StopAsyncIteration:
                break
            except TransmissionError:
                raise
            except Exception as e:
                logger.error(f"Model transport failed after {len(full_text)} chars: {e}")
                raise TransmissionError(str(e) or type(e).__name__) from e

            full_text += delta
            on_update(full_text)

        return full_text
