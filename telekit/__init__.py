"""Telekit: async Telegram Bot API client with a long-polling event stream.

:class:`Bot` wraps every Bot API method used by the library with an async
method returning Pydantic models.  Iterating a bot (or a :class:`Poller`)
yields :class:`Event` envelopes forever, reconnecting on its own.

Usage::

    from telekit import Bot, EventKind

    async for event in Bot.from_env():
        if event.kind is EventKind.MESSAGE:
            await event.reply("pong")
"""

from telekit.client import Bot
from telekit.events import PRIORITY, Event, EventKind, resolve_kind
from telekit.exceptions import APIException
from telekit.logger import TelekitLogger
from telekit.poller import ConnectionState, Poller

__all__ = [
    # Client
    "Bot",
    "APIException",
    # Update stream
    "Poller",
    "ConnectionState",
    "Event",
    "EventKind",
    "PRIORITY",
    "resolve_kind",
    # Logging
    "TelekitLogger",
]
