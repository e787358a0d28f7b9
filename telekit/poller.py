"""Long-polling update loop with connection-state tracking.

:class:`Poller` drives ``getUpdates`` forever and hands out one
:class:`~telekit.events.Event` at a time through an async generator::

    poller = Poller(bot)
    async for event in poller:
        ...

Connection handling is a two-state machine.  The poller starts
``DISCONNECTED`` and polls with ``timeout=0`` so the first answer comes back
immediately.  The first successful call switches it to ``CONNECTED`` and to
the long-poll timeout (60 s by default).  Any failed call while connected
switches it back to ``DISCONNECTED`` with the short retry timeout (10 s by
default).  Failures are logged and retried; they are never raised to the
consumer.

The cursor (``offset``) moves past a batch only once every event of that
batch has been yielded.  A consumer that stops mid-batch (``break``,
``aclose()``, task cancellation) leaves the cursor where it was, so the whole
batch is delivered again by the next :meth:`Poller.run` on the same poller.
Handlers should therefore be idempotent or de-duplicate on ``update_id``.

Updates are decoded one by one.  An update the models reject is logged and
delivered as ``EventKind.UNKNOWN`` with its raw JSON, and the cursor still
moves past it.

A poller serves a single consumer.  Starting a second ``run()`` while the
first is waiting on ``getUpdates`` raises :class:`RuntimeError`.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any, AsyncIterator, Dict, List, Optional, Protocol

import requests
from pydantic import ValidationError

from telekit.config import LONG_POLL_TIMEOUT, POLL_LIMIT, RETRY_DELAY, RETRY_POLL_TIMEOUT
from telekit.events import Event
from telekit.exceptions import APIException
from telekit.logger import TelekitLogger
from telekit.models import Update

logger = TelekitLogger.get_logger()

# Failures a poll absorbs. A body that is not JSON raises ValueError.
POLL_FAILURES = (requests.RequestException, ValueError, APIException)


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class UpdateSource(Protocol):
    """What the poller needs from a bot: the ``getUpdates`` call."""

    async def get_updates(self, offset: Optional[int] = None, limit: Optional[int] = None, timeout: Optional[int] = None) -> List[Dict[str, Any]]: ...  # noqa: E704


class Poller:
    """Infinite, cursor-tracking stream of events for one bot.

    State is private to the instance; several pollers (one per bot token)
    may run side by side in the same event loop.

    Args:
        bot: Source of updates, normally a :class:`~telekit.client.Bot`.
        limit: Maximum number of updates requested per call.
        long_poll_timeout: ``timeout`` sent while connected.
        retry_poll_timeout: ``timeout`` sent right after a disconnect.
        retry_delay: Seconds to sleep after a failed call before retrying.
    """

    def __init__(
        self,
        bot: UpdateSource,
        *,
        limit: int = POLL_LIMIT,
        long_poll_timeout: int = LONG_POLL_TIMEOUT,
        retry_poll_timeout: int = RETRY_POLL_TIMEOUT,
        retry_delay: float = RETRY_DELAY,
    ) -> None:
        self._bot = bot
        self._limit = limit
        self._long_poll_timeout = long_poll_timeout
        self._retry_poll_timeout = retry_poll_timeout
        self._retry_delay = retry_delay

        self._cursor: Optional[int] = None
        self._state = ConnectionState.DISCONNECTED
        self._poll_timeout = 0
        self._in_flight = False

    # ------------------------------------------------------------------
    #  Read-only state
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> Optional[int]:
        """``offset`` of the next ``getUpdates`` call; ``None`` until the first batch."""
        return self._cursor

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def poll_timeout(self) -> int:
        """``timeout`` of the next ``getUpdates`` call."""
        return self._poll_timeout

    # ------------------------------------------------------------------
    #  State transitions
    # ------------------------------------------------------------------

    def _on_success(self) -> None:
        if self._state is ConnectionState.DISCONNECTED:
            self._state = ConnectionState.CONNECTED
            self._poll_timeout = self._long_poll_timeout
            logger.info("Bot is connected and receiving updates", extra={"api_endpoint": "getUpdates", "poll_timeout": self._poll_timeout})

    def _on_failure(self, exc: Exception) -> None:
        if self._state is ConnectionState.CONNECTED:
            self._state = ConnectionState.DISCONNECTED
            self._poll_timeout = self._retry_poll_timeout
            logger.warning("Lost connection to the Bot API, retrying until it is back", extra={"api_endpoint": "getUpdates", "poll_timeout": self._poll_timeout, "error": str(exc)})
        else:
            logger.debug("getUpdates failed while disconnected", extra={"api_endpoint": "getUpdates", "error": str(exc)})

    # ------------------------------------------------------------------
    #  Loop
    # ------------------------------------------------------------------

    async def _poll(self) -> List[Dict[str, Any]]:
        """Perform one ``getUpdates`` call; a failure yields an empty batch.

        Raises:
            RuntimeError: If another consumer's call is still in flight.
        """
        if self._in_flight:
            raise RuntimeError("Another consumer is already polling this Poller")
        self._in_flight = True
        try:
            updates = await self._bot.get_updates(offset=self._cursor, limit=self._limit, timeout=self._poll_timeout)
        except POLL_FAILURES as exc:
            self._on_failure(exc)
            await asyncio.sleep(self._retry_delay)
            return []
        finally:
            self._in_flight = False
        self._on_success()
        return updates

    def _decode(self, raw: Any) -> Event:
        """Turn one raw update into an event; an undecodable one becomes ``UNKNOWN``."""
        try:
            update = Update.model_validate(raw)
        except ValidationError as exc:
            event = Event.undecodable(raw, self._bot)
            logger.warning("Update could not be decoded, delivering it as unknown", extra={"api_endpoint": "getUpdates", "update_id": event.update_id, "error": str(exc)})
            return event
        return Event.from_update(update.bind(self._bot), self._bot)

    async def run(self) -> AsyncIterator[Event]:
        """Yield events forever, advancing the cursor after each full batch.

        Only one ``run()`` may wait on ``getUpdates`` at a time; see
        :meth:`_poll`.
        """
        while True:
            updates = await self._poll()
            if not updates:
                continue

            logger.debug("Received updates", extra={"api_endpoint": "getUpdates", "count": len(updates), "offset": self._cursor})
            events = [self._decode(raw) for raw in updates]
            for event in events:
                yield event

            ids = [event.update_id for event in events if event.update_id is not None]
            if ids:
                self._cursor = max(ids) + 1

    def __aiter__(self) -> AsyncIterator[Event]:
        return self.run()
