"""Unit tests for the streaming response accumulator."""

import pytest
import pytest_check as check

from gemini_chat.agent import StreamingAccumulator, TransmissionError, to_transport_turns
from gemini_chat.models import InlineImagePart, Role, TextPart, Turn
from tests.fakes import ScriptedTransport


def user(text: str) -> Turn:
    return Turn(role=Role.USER, content=text, parts=[TextPart(text=text)])


class TestSnapshots:
    """Tests for cumulative snapshot delivery."""

    async def test_each_delta_produces_growing_snapshot(self) -> None:
        """on_update receives d1, d1+d2, ... and the result is the last one."""
        accumulator = StreamingAccumulator(ScriptedTransport(["Hel", "lo", " world"]))
        updates: list[str] = []

        result = await accumulator.send([user("Hi")], updates.append)

        check.equal(updates, ["Hel", "Hello", "Hello world"])
        check.equal(result, "Hello world")

    async def test_empty_stream_returns_empty_string(self) -> None:
        """No deltas means no updates and an empty result."""
        accumulator = StreamingAccumulator(ScriptedTransport([]))
        updates: list[str] = []

        result = await accumulator.send([user("Hi")], updates.append)

        check.equal(updates, [])
        check.equal(result, "")

    async def test_single_request_per_send(self) -> None:
        """One send issues exactly one transport request."""
        transport = ScriptedTransport(["a", "b"])
        accumulator = StreamingAccumulator(transport)

        await accumulator.send([user("Hi")], lambda _: None)

        assert len(transport.requests) == 1

    async def test_no_state_kept_between_sends(self) -> None:
        """A second send starts from an empty snapshot."""
        accumulator = StreamingAccumulator(ScriptedTransport(["x", "y"]))
        first: list[str] = []
        second: list[str] = []

        await accumulator.send([user("one")], first.append)
        await accumulator.send([user("two")], second.append)

        check.equal(first, ["x", "xy"])
        check.equal(second, ["x", "xy"])


class TestFailures:
    """Tests for transport failures."""

    async def test_error_after_partial_output_raises_transmission_error(self) -> None:
        """Snapshots delivered before the failure stand; the error is wrapped."""
        transport = ScriptedTransport(["par", "tial"], error=RuntimeError("quota exceeded"))
        accumulator = StreamingAccumulator(transport)
        updates: list[str] = []

        with pytest.raises(TransmissionError, match="quota exceeded") as exc_info:
            await accumulator.send([user("Hi")], updates.append)

        check.equal(updates, ["par", "partial"])
        check.is_instance(exc_info.value.__cause__, RuntimeError)

    async def test_immediate_error_makes_no_updates(self) -> None:
        """A transport failing before any delta produces no snapshots."""
        accumulator = StreamingAccumulator(ScriptedTransport([], error=ConnectionError("down")))
        updates: list[str] = []

        with pytest.raises(TransmissionError):
            await accumulator.send([user("Hi")], updates.append)

        assert updates == []

    async def test_transmission_error_passes_through_unchanged(self) -> None:
        """A TransmissionError from the transport is not wrapped again."""
        original = TransmissionError("server said no")
        accumulator = StreamingAccumulator(ScriptedTransport(["a"], error=original))

        with pytest.raises(TransmissionError) as exc_info:
            await accumulator.send([user("Hi")], lambda _: None)

        assert exc_info.value is original

    async def test_callback_errors_are_not_wrapped(self) -> None:
        """Errors raised by on_update propagate as themselves."""
        accumulator = StreamingAccumulator(ScriptedTransport(["a", "b"]))

        def failing_update(_: str) -> None:
            raise ValueError("ui broke")

        with pytest.raises(ValueError, match="ui broke"):
            await accumulator.send([user("Hi")], failing_update)


class TestToTransportTurns:
    """Tests for history to wire-format mapping."""

    def test_system_turns_are_dropped(self) -> None:
        """System turns never reach the transport."""
        history = [
            Turn(role=Role.SYSTEM, content="be nice"),
            user("Hi"),
            Turn(role=Role.MODEL, content="Hello"),
        ]

        turns = to_transport_turns(history)

        assert [t.role for t in turns] == [Role.USER, Role.MODEL]

    def test_content_is_used_when_parts_absent(self) -> None:
        """A turn without parts is sent as a single text part."""
        turns = to_transport_turns([Turn(role=Role.MODEL, content="Earlier reply")])

        assert turns[0].parts == [TextPart(text="Earlier reply")]

    def test_parts_are_sent_in_order(self) -> None:
        """Text and image parts keep their order."""
        image = InlineImagePart(mime_type="image/png", data="aGVsbG8=")
        turn = Turn(role=Role.USER, content="Look", parts=[TextPart(text="Look"), image])

        turns = to_transport_turns([turn])

        assert turns[0].parts == [TextPart(text="Look"), image]

    async def test_send_transmits_mapped_history(self) -> None:
        """send passes the mapped history to the transport."""
        transport = ScriptedTransport(["ok"])
        history = [Turn(role=Role.SYSTEM, content="sys"), user("Hi")]

        await StreamingAccumulator(transport).send(history, lambda _: None)

        sent = transport.requests[0]
        check.equal(len(sent), 1)
        check.equal(sent[0].role, Role.USER)
        check.equal(sent[0].parts, [TextPart(text="Hi")])
