"""Tests for the long-polling loop: cursor, delivery order and reconnection."""

import asyncio
import sys
import os

import pytest
import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from telekit.events import EventKind
from telekit.exceptions import APIException
from telekit.models import Message
from telekit.poller import ConnectionState, Poller


def _updates(*ids: int) -> list:
    return [
        {
            "update_id": update_id,
            "message": {"message_id": update_id, "date": 0, "chat": {"id": 1, "type": "private"}, "text": str(update_id)},
        }
        for update_id in ids
    ]


class FakeBot:
    """Replays scripted getUpdates outcomes and records every call."""

    def __init__(self, *outcomes) -> None:
        self.outcomes = list(outcomes)
        self.calls: list = []

    async def get_updates(self, offset=None, limit=None, timeout=None):
        self.calls.append({"offset": offset, "limit": limit, "timeout": timeout})
        outcome = self.outcomes.pop(0) if self.outcomes else []
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


async def _take(stream, count: int) -> list:
    events = []
    async for event in stream:
        events.append(event)
        if len(events) == count:
            break
    return events


# ── Cursor & delivery ────────────────────────────────────────────────────────


class TestCursor:
    """The cursor only moves once a whole batch has been consumed."""

    def test_initial_state(self) -> None:
        poller = Poller(FakeBot())
        assert poller.cursor is None
        assert poller.state is ConnectionState.DISCONNECTED
        assert poller.poll_timeout == 0

    @pytest.mark.asyncio
    async def test_batch_delivered_in_order_then_cursor_advances(self) -> None:
        bot = FakeBot(_updates(5, 6, 7), _updates(8))
        poller = Poller(bot, retry_delay=0)

        events = await _take(poller, 4)

        assert [e.update_id for e in events] == [5, 6, 7, 8]
        assert all(e.kind is EventKind.MESSAGE for e in events)
        assert bot.calls[0]["offset"] is None
        assert bot.calls[1]["offset"] == 8

    @pytest.mark.asyncio
    async def test_events_are_bound_to_the_bot(self) -> None:
        bot = FakeBot(_updates(1))
        events = await _take(Poller(bot), 1)
        assert events[0].bot is bot

    @pytest.mark.asyncio
    async def test_empty_batch_keeps_cursor(self) -> None:
        bot = FakeBot(_updates(3), [], [], _updates(4))
        poller = Poller(bot, retry_delay=0)

        await _take(poller, 2)

        assert [call["offset"] for call in bot.calls] == [None, 4, 4, 4]

    @pytest.mark.asyncio
    async def test_cursor_never_decreases(self) -> None:
        bot = FakeBot(_updates(10, 11), requests.ConnectionError("down"), _updates(12), [], _updates(13, 14))
        poller = Poller(bot, retry_delay=0)

        await _take(poller, 5)

        offsets = [call["offset"] for call in bot.calls if call["offset"] is not None]
        assert offsets == sorted(offsets)
        assert offsets[0] == 12

    @pytest.mark.asyncio
    async def test_abandoned_batch_is_redelivered(self) -> None:
        bot = FakeBot(_updates(1, 2, 3, 4), _updates(5, 6, 7), _updates(5, 6, 7))
        poller = Poller(bot, retry_delay=0)

        # Consume the first batch fully and stop after update 6 of the second.
        stream = poller.run()
        seen = []
        async for event in stream:
            seen.append(event.update_id)
            if event.update_id == 6:
                break
        await stream.aclose()

        assert seen == [1, 2, 3, 4, 5, 6]
        assert poller.cursor == 5

        resumed = await _take(poller, 1)
        assert resumed[0].update_id == 5
        assert bot.calls[-1]["offset"] == 5


# ── Connection state machine ─────────────────────────────────────────────────


class TestConnectionState:
    """DISCONNECTED → CONNECTED on success, back on failure."""

    @pytest.mark.asyncio
    async def test_timeouts_follow_state(self) -> None:
        bot = FakeBot(
            _updates(1),
            requests.Timeout("slow"),
            requests.ConnectionError("down"),
            _updates(2),
            _updates(3),
        )
        poller = Poller(bot, retry_delay=0)

        await _take(poller, 3)

        assert [call["timeout"] for call in bot.calls] == [0, 60, 10, 10, 60]
        assert poller.state is ConnectionState.CONNECTED

    @pytest.mark.asyncio
    async def test_custom_timeouts_and_limit(self) -> None:
        bot = FakeBot(_updates(1), ValueError("garbage"), _updates(2))
        poller = Poller(bot, limit=5, long_poll_timeout=30, retry_poll_timeout=3, retry_delay=0)

        await _take(poller, 2)

        assert [call["timeout"] for call in bot.calls] == [0, 30, 3]
        assert all(call["limit"] == 5 for call in bot.calls)

    @pytest.mark.asyncio
    async def test_failure_while_disconnected_keeps_state(self) -> None:
        bot = FakeBot(requests.ConnectionError("down"), requests.ConnectionError("down"), _updates(1))
        poller = Poller(bot, retry_delay=0)

        await _take(poller, 1)

        assert [call["timeout"] for call in bot.calls] == [0, 0, 0]
        assert poller.state is ConnectionState.CONNECTED
        assert poller.poll_timeout == 60

    @pytest.mark.asyncio
    async def test_survives_many_failures(self) -> None:
        failures = [requests.ConnectionError("down")] * 1000
        bot = FakeBot(*failures, _updates(99))
        poller = Poller(bot, retry_delay=0)

        events = await _take(poller, 1)

        assert events[0].update_id == 99
        assert len(bot.calls) == 1001

    @pytest.mark.asyncio
    async def test_api_errors_are_absorbed(self) -> None:
        bot = FakeBot(_updates(1), APIException("Conflict", 409), ValueError("bad json"), _updates(2))
        poller = Poller(bot, retry_delay=0)

        events = await _take(poller, 2)

        assert [e.update_id for e in events] == [1, 2]
        assert poller.cursor == 2

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self) -> None:
        bot = FakeBot(RuntimeError("bug"))
        with pytest.raises(RuntimeError):
            await _take(Poller(bot), 1)


# ── Per-update decoding ──────────────────────────────────────────────────────


BROKEN = {"update_id": 2, "message": {"message_id": "not-a-number", "chat": {"id": 1, "type": "private"}}}


class TestDecoding:
    """One malformed update never holds back the rest of the stream."""

    @pytest.mark.asyncio
    async def test_broken_update_is_delivered_as_unknown(self) -> None:
        bot = FakeBot(_updates(1) + [BROKEN] + _updates(3))
        events = await _take(Poller(bot), 3)

        assert [e.update_id for e in events] == [1, 2, 3]
        assert [e.kind for e in events] == [EventKind.MESSAGE, EventKind.UNKNOWN, EventKind.MESSAGE]
        assert events[1].payload == BROKEN
        assert events[1].update is None
        assert events[1].bot is bot

    @pytest.mark.asyncio
    async def test_cursor_moves_past_broken_last_update(self) -> None:
        bot = FakeBot(_updates(1) + [BROKEN], _updates(3))
        poller = Poller(bot, retry_delay=0)

        await _take(poller, 3)

        assert bot.calls[1]["offset"] == 3

    @pytest.mark.asyncio
    async def test_update_without_id_keeps_cursor(self) -> None:
        bot = FakeBot([{"message": {"message_id": 1}}], _updates(4))
        poller = Poller(bot, retry_delay=0)

        events = await _take(poller, 2)

        assert events[0].kind is EventKind.UNKNOWN
        assert events[0].update_id is None
        assert [call["offset"] for call in bot.calls] == [None, None]
        assert poller.cursor is None

    @pytest.mark.asyncio
    async def test_payload_models_are_bound_to_the_bot(self) -> None:
        bot = FakeBot(_updates(1))
        events = await _take(Poller(bot), 1)

        assert isinstance(events[0].message, Message)
        assert events[0].message._bot is bot
        assert events[0].message.chat._bot is bot


# ── Single consumer ──────────────────────────────────────────────────────────


class GatedBot(FakeBot):
    """Holds every getUpdates call until the gate opens."""

    def __init__(self, *outcomes) -> None:
        super().__init__(*outcomes)
        self.gate = asyncio.Event()
        self.waiting = asyncio.Event()

    async def get_updates(self, offset=None, limit=None, timeout=None):
        self.waiting.set()
        await self.gate.wait()
        return await super().get_updates(offset=offset, limit=limit, timeout=timeout)


class TestSingleConsumer:
    """A poller refuses a second loop while a call is in flight."""

    @pytest.mark.asyncio
    async def test_second_consumer_raises(self) -> None:
        bot = GatedBot(_updates(1))
        poller = Poller(bot)

        first = asyncio.create_task(_take(poller, 1))
        await bot.waiting.wait()

        with pytest.raises(RuntimeError):
            await _take(poller, 1)

        bot.gate.set()
        events = await first
        assert [e.update_id for e in events] == [1]
        assert len(bot.calls) == 1

    @pytest.mark.asyncio
    async def test_sequential_consumers_are_allowed(self) -> None:
        bot = FakeBot(_updates(1), _updates(2))
        poller = Poller(bot)

        assert (await _take(poller, 1))[0].update_id == 1
        assert (await _take(poller, 1))[0].update_id == 2
