"""Event envelopes: the decoded, consumer-facing form of an update.

Telegram promises that at most one payload field of an update is set.  An
:class:`Event` makes that explicit: it carries a single :class:`EventKind`
discriminant and the matching ``payload`` object.  When a malformed update
populates several fields, the first one in :data:`PRIORITY` wins.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Sequence

from telekit.models import (
    CallbackQuery,
    ChosenInlineResult,
    InlineQuery,
    Message,
    Poll,
    PollAnswer,
    PreCheckoutQuery,
    ShippingQuery,
    Update,
)

if TYPE_CHECKING:
    from telekit.client import Bot


class EventKind(str, Enum):
    """Which payload an update carries; values are the wire field names."""

    MESSAGE = "message"
    EDITED_MESSAGE = "edited_message"
    INLINE_QUERY = "inline_query"
    POLL = "poll"
    CALLBACK_QUERY = "callback_query"
    CHOSEN_INLINE_RESULT = "chosen_inline_result"
    CHANNEL_POST = "channel_post"
    EDITED_CHANNEL_POST = "edited_channel_post"
    SHIPPING_QUERY = "shipping_query"
    PRE_CHECKOUT_QUERY = "pre_checkout_query"
    POLL_ANSWER = "poll_answer"
    UNKNOWN = "unknown"


# Resolution order when more than one payload field is present.
PRIORITY: tuple[EventKind, ...] = (
    EventKind.MESSAGE,
    EventKind.EDITED_MESSAGE,
    EventKind.INLINE_QUERY,
    EventKind.POLL,
    EventKind.CALLBACK_QUERY,
    EventKind.CHOSEN_INLINE_RESULT,
    EventKind.CHANNEL_POST,
    EventKind.EDITED_CHANNEL_POST,
    EventKind.SHIPPING_QUERY,
    EventKind.PRE_CHECKOUT_QUERY,
    EventKind.POLL_ANSWER,
)

_MESSAGE_KINDS = frozenset({
    EventKind.MESSAGE,
    EventKind.EDITED_MESSAGE,
    EventKind.CHANNEL_POST,
    EventKind.EDITED_CHANNEL_POST,
})


def resolve_kind(update: Update) -> EventKind:
    """Return the first populated payload kind of *update* in priority order."""
    for kind in PRIORITY:
        if getattr(update, kind.value) is not None:
            return kind
    return EventKind.UNKNOWN


@dataclasses.dataclass(frozen=True, slots=True)
class Event:
    """One update, handed to the consumer exactly once.

    ``bot`` is the :class:`~telekit.client.Bot` the event came from; it backs
    the :meth:`reply` and :meth:`answer` shortcuts.

    An update that fails to decode arrives as ``EventKind.UNKNOWN`` with the
    raw JSON object as ``payload`` and ``update`` set to ``None``.
    """

    update_id: Optional[int]
    kind: EventKind
    payload: Any
    update: Optional[Update] = dataclasses.field(repr=False)
    bot: Optional["Bot"] = dataclasses.field(default=None, repr=False, compare=False)

    @classmethod
    def from_update(cls, update: Update, bot: Optional["Bot"] = None) -> "Event":
        """Decode *update* into an envelope carrying its single payload."""
        kind = resolve_kind(update)
        payload = None if kind is EventKind.UNKNOWN else getattr(update, kind.value)
        return cls(update_id=update.update_id, kind=kind, payload=payload, update=update, bot=bot)

    @classmethod
    def undecodable(cls, raw: Any, bot: Optional["Bot"] = None) -> "Event":
        """Wrap an update that did not decode, keeping its raw JSON."""
        update_id = raw.get("update_id") if isinstance(raw, dict) else None
        if isinstance(update_id, bool) or not isinstance(update_id, int):
            update_id = None
        return cls(update_id=update_id, kind=EventKind.UNKNOWN, payload=raw, update=None, bot=bot)

    # ------------------------------------------------------------------
    #  Typed accessors: the payload when ``kind`` matches, else None
    # ------------------------------------------------------------------

    def _payload_if(self, kind: EventKind) -> Any:
        return self.payload if self.kind is kind else None

    @property
    def message(self) -> Optional[Message]:
        return self._payload_if(EventKind.MESSAGE)

    @property
    def edited_message(self) -> Optional[Message]:
        return self._payload_if(EventKind.EDITED_MESSAGE)

    @property
    def inline_query(self) -> Optional[InlineQuery]:
        return self._payload_if(EventKind.INLINE_QUERY)

    @property
    def poll(self) -> Optional[Poll]:
        return self._payload_if(EventKind.POLL)

    @property
    def callback_query(self) -> Optional[CallbackQuery]:
        return self._payload_if(EventKind.CALLBACK_QUERY)

    @property
    def chosen_inline_result(self) -> Optional[ChosenInlineResult]:
        return self._payload_if(EventKind.CHOSEN_INLINE_RESULT)

    @property
    def channel_post(self) -> Optional[Message]:
        return self._payload_if(EventKind.CHANNEL_POST)

    @property
    def edited_channel_post(self) -> Optional[Message]:
        return self._payload_if(EventKind.EDITED_CHANNEL_POST)

    @property
    def shipping_query(self) -> Optional[ShippingQuery]:
        return self._payload_if(EventKind.SHIPPING_QUERY)

    @property
    def pre_checkout_query(self) -> Optional[PreCheckoutQuery]:
        return self._payload_if(EventKind.PRE_CHECKOUT_QUERY)

    @property
    def poll_answer(self) -> Optional[PollAnswer]:
        return self._payload_if(EventKind.POLL_ANSWER)

    @property
    def effective_message(self) -> Optional[Message]:
        """The message this event is about, if any (including a callback's message)."""
        if self.kind in _MESSAGE_KINDS:
            return self.payload
        if self.kind is EventKind.CALLBACK_QUERY:
            return self.payload.message
        return None

    # ------------------------------------------------------------------
    #  Shortcuts
    # ------------------------------------------------------------------

    def _require_bot(self) -> "Bot":
        if self.bot is None:
            raise RuntimeError("Event is not bound to a Bot")
        return self.bot

    async def reply(self, text: str, **options: Any) -> Message:
        """Send *text* to the chat this event came from.

        For message events the new message quotes the original one; extra
        keyword arguments are forwarded to :meth:`Bot.send_message`.

        Raises:
            ValueError: If the event has no chat to reply to.
        """
        message = self.effective_message
        if message is None:
            raise ValueError(f"Cannot reply to a {self.kind.value} event")
        if self.kind in _MESSAGE_KINDS:
            options.setdefault("reply_to_message_id", message.message_id)
        return await self._require_bot().send_message(message.chat.id, text, **options)

    async def answer(self, results: Optional[Sequence[Any]] = None, **options: Any) -> bool:
        """Answer a callback query or an inline query.

        *results* is required for inline queries and ignored otherwise.

        Raises:
            ValueError: If the event is neither kind of query.
        """
        bot = self._require_bot()
        if self.kind is EventKind.CALLBACK_QUERY:
            return await bot.answer_callback_query(self.payload.id, **options)
        if self.kind is EventKind.INLINE_QUERY:
            return await bot.answer_inline_query(self.payload.id, list(results or []), **options)
        raise ValueError(f"Cannot answer a {self.kind.value} event")
