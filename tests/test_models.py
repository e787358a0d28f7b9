"""Tests for the Pydantic Bot API models."""

import sys
import os
from unittest.mock import AsyncMock

import pytest

# Ensure the project root is importable.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from telekit.models import (
    BotCommand,
    CallbackQuery,
    Chat,
    ChatPermissions,
    ChatPhoto,
    Document,
    InlineQuery,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    Message,
    Poll,
    PollAnswer,
    ReplyKeyboardRemove,
    Update,
    User,
    to_payload,
)
from pydantic import ValidationError


MESSAGE = {
    "message_id": 10,
    "date": 1600000000,
    "chat": {"id": 42, "type": "private", "first_name": "Ann"},
    "from": {"id": 7, "is_bot": False, "first_name": "Ann"},
    "text": "hello",
}


# ── User / Message ───────────────────────────────────────────────────────────


class TestUserModel:
    """Validate the User schema."""

    def test_required_fields(self) -> None:
        user = User(id=1, is_bot=False, first_name="Ann")
        assert user.id == 1
        assert user.username is None

    def test_missing_required_raises(self) -> None:
        with pytest.raises(ValidationError):
            User(id=1, is_bot=False)  # missing first_name

    def test_unknown_fields_ignored(self) -> None:
        user = User.model_validate({"id": 1, "is_bot": True, "first_name": "B", "brand_new_field": 1})
        assert user.is_bot is True


class TestMessageModel:
    """``from`` is exposed as ``from_user``."""

    def test_from_alias(self) -> None:
        msg = Message.model_validate(MESSAGE)
        assert msg.from_user is not None
        assert msg.from_user.id == 7
        assert msg.chat.id == 42

    def test_populate_by_name(self) -> None:
        msg = Message(message_id=1, date=0, chat={"id": 1, "type": "group"}, from_user=User(id=2, is_bot=False, first_name="X"))
        assert msg.from_user.first_name == "X"

    def test_dump_uses_wire_alias(self) -> None:
        msg = Message.model_validate(MESSAGE)
        dumped = to_payload(msg)
        assert dumped["from"]["id"] == 7
        assert "from_user" not in dumped

    def test_nested_reply(self) -> None:
        raw = dict(MESSAGE, reply_to_message=dict(MESSAGE, message_id=9))
        msg = Message.model_validate(raw)
        assert msg.reply_to_message.message_id == 9


# ── Updates & queries ────────────────────────────────────────────────────────


class TestUpdateModel:
    def test_message_update(self) -> None:
        update = Update.model_validate({"update_id": 5, "message": MESSAGE})
        assert update.update_id == 5
        assert update.message.text == "hello"
        assert update.callback_query is None

    def test_callback_query(self) -> None:
        cq = CallbackQuery.model_validate({
            "id": "cb1",
            "from": {"id": 7, "is_bot": False, "first_name": "Ann"},
            "chat_instance": "ci",
            "data": "like",
        })
        assert cq.from_user.id == 7
        assert cq.data == "like"

    def test_poll_update(self) -> None:
        poll = {
            "id": "p1",
            "question": "?",
            "options": [{"text": "a", "voter_count": 1}],
            "total_voter_count": 1,
            "is_closed": False,
            "is_anonymous": True,
            "type": "regular",
            "allows_multiple_answers": False,
        }
        update = Update.model_validate({"update_id": 6, "poll": poll})
        assert isinstance(update.poll, Poll)
        assert update.poll.options[0].voter_count == 1

    def test_missing_update_id_raises(self) -> None:
        with pytest.raises(ValidationError):
            Update.model_validate({"message": MESSAGE})

    def test_anonymous_poll_answer(self) -> None:
        update = Update.model_validate({
            "update_id": 8,
            "poll_answer": {"poll_id": "p1", "voter_chat": {"id": -100, "type": "channel"}, "option_ids": [1]},
        })
        assert isinstance(update.poll_answer, PollAnswer)
        assert update.poll_answer.user is None
        assert update.poll_answer.voter_chat.type == "channel"


# ── Payload serialisation ────────────────────────────────────────────────────


class TestToPayload:
    """Validate outgoing serialisation."""

    def test_keyboard(self) -> None:
        markup = InlineKeyboardMarkup(inline_keyboard=[[InlineKeyboardButton(text="Go", url="https://t.me")]])
        assert to_payload(markup) == {"inline_keyboard": [[{"text": "Go", "url": "https://t.me"}]]}

    def test_reply_keyboard_remove(self) -> None:
        assert to_payload(ReplyKeyboardRemove()) == {"remove_keyboard": True}

    def test_permissions_drop_unset(self) -> None:
        assert to_payload(ChatPermissions(can_send_messages=False)) == {"can_send_messages": False}

    def test_nested_lists_and_dicts(self) -> None:
        body = {"commands": [BotCommand(command="start", description="Start")], "skip": None}
        assert to_payload(body) == {"commands": [{"command": "start", "description": "Start"}]}

    def test_plain_values_pass_through(self) -> None:
        assert to_payload("x") == "x"
        assert to_payload(3) == 3


# ── Bound helpers ────────────────────────────────────────────────────────────

GROUP_MESSAGE = {**MESSAGE, "chat": {"id": -5, "type": "supergroup", "title": "Devs"}}


def _bound(model, data: dict):
    bot = AsyncMock()
    return model.model_validate(data).bind(bot), bot


class TestBinding:
    def test_bind_reaches_nested_models(self) -> None:
        msg, bot = _bound(Message, {**MESSAGE, "reply_to_message": MESSAGE})
        assert msg._bot is bot
        assert msg.chat._bot is bot
        assert msg.from_user._bot is bot
        assert msg.reply_to_message.chat._bot is bot

    @pytest.mark.asyncio
    async def test_unbound_model_raises(self) -> None:
        with pytest.raises(RuntimeError):
            await Message.model_validate(MESSAGE).delete()

    def test_binding_is_not_serialised(self) -> None:
        msg, _ = _bound(Message, MESSAGE)
        assert "_bot" not in to_payload(msg)


class TestMessageHelpers:
    @pytest.mark.asyncio
    async def test_reply_with_text_quotes_the_message(self) -> None:
        msg, bot = _bound(Message, MESSAGE)
        await msg.reply_with_text("hi", parse_mode="HTML")
        bot.send_message.assert_awaited_once_with(42, "hi", reply_to_message_id=10, parse_mode="HTML")

    @pytest.mark.asyncio
    async def test_reply_keeps_explicit_reply_target(self) -> None:
        msg, bot = _bound(Message, MESSAGE)
        await msg.reply_with_venue(1.0, 2.0, "Cafe", "Main St", reply_to_message_id=None)
        bot.send_venue.assert_awaited_once_with(42, 1.0, 2.0, "Cafe", "Main St", reply_to_message_id=None)

    @pytest.mark.asyncio
    async def test_edit_text_targets_this_message(self) -> None:
        msg, bot = _bound(Message, MESSAGE)
        await msg.edit_text("edited")
        bot.edit_message_text.assert_awaited_once_with("edited", chat_id=42, message_id=10)

    @pytest.mark.asyncio
    async def test_forward_and_delete(self) -> None:
        msg, bot = _bound(Message, MESSAGE)
        await msg.forward_to(99, disable_notification=True)
        await msg.delete()
        bot.forward_message.assert_awaited_once_with(99, 42, 10, disable_notification=True)
        bot.delete_message.assert_awaited_once_with(42, 10)

    @pytest.mark.asyncio
    async def test_pin_in_group(self) -> None:
        msg, bot = _bound(Message, GROUP_MESSAGE)
        await msg.pin()
        bot.pin_chat_message.assert_awaited_once_with(-5, 10)

    @pytest.mark.asyncio
    async def test_pin_in_private_chat_raises(self) -> None:
        msg, bot = _bound(Message, MESSAGE)
        with pytest.raises(ValueError):
            await msg.pin()
        bot.pin_chat_message.assert_not_awaited()


class TestChatHelpers:
    @pytest.mark.asyncio
    async def test_member_management(self) -> None:
        chat, bot = _bound(Chat, {"id": -5, "type": "supergroup"})
        await chat.kick_member(7, until_date=0)
        await chat.restrict_member(7, ChatPermissions(can_send_messages=False))
        await chat.get_member(7)
        bot.kick_chat_member.assert_awaited_once_with(-5, 7, until_date=0)
        bot.restrict_chat_member.assert_awaited_once_with(-5, 7, ChatPermissions(can_send_messages=False))
        bot.get_chat_member.assert_awaited_once_with(-5, 7)

    @pytest.mark.asyncio
    async def test_chat_settings(self) -> None:
        chat, bot = _bound(Chat, {"id": -5, "type": "supergroup"})
        await chat.set_title("New")
        await chat.unpin_message(message_id=3)
        await chat.leave()
        bot.set_chat_title.assert_awaited_once_with(-5, "New")
        bot.unpin_chat_message.assert_awaited_once_with(-5, message_id=3)
        bot.leave_chat.assert_awaited_once_with(-5)


class TestQueryHelpers:
    @pytest.mark.asyncio
    async def test_callback_query_answer(self) -> None:
        cq, bot = _bound(CallbackQuery, {
            "id": "cb1",
            "from": {"id": 7, "is_bot": False, "first_name": "Ann"},
            "chat_instance": "ci",
        })
        await cq.answer(text="ok")
        bot.answer_callback_query.assert_awaited_once_with("cb1", text="ok")

    @pytest.mark.asyncio
    async def test_inline_query_answer(self) -> None:
        query, bot = _bound(InlineQuery, {
            "id": "iq1",
            "from": {"id": 7, "is_bot": False, "first_name": "Ann"},
            "query": "cats",
            "offset": "",
        })
        await query.answer(({"type": "article", "id": "1"},), cache_time=0)
        bot.answer_inline_query.assert_awaited_once_with("iq1", [{"type": "article", "id": "1"}], cache_time=0)

    @pytest.mark.asyncio
    async def test_user_profile_photos(self) -> None:
        user, bot = _bound(User, {"id": 7, "is_bot": False, "first_name": "Ann"})
        await user.get_profile_photos(limit=1)
        bot.get_user_profile_photos.assert_awaited_once_with(7, limit=1)


class TestFileHelpers:
    @pytest.mark.asyncio
    async def test_document_download(self) -> None:
        doc, bot = _bound(Document, {"file_id": "f1", "file_unique_id": "u1"})
        await doc.download()
        await doc.get_download_link()
        bot.download_file.assert_awaited_once_with("f1")
        bot.get_file_download_link.assert_awaited_once_with("f1")

    @pytest.mark.asyncio
    async def test_chat_photo_sizes(self) -> None:
        photo, bot = _bound(ChatPhoto, {
            "small_file_id": "s", "small_file_unique_id": "su",
            "big_file_id": "b", "big_file_unique_id": "bu",
        })
        await photo.download_big()
        await photo.download_small()
        assert [c.args for c in bot.download_file.await_args_list] == [("b",), ("s",)]
