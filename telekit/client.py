"""Bot: async service layer wrapping the Telegram Bot API endpoints.

Every public coroutine corresponds to one Bot API method.  Optional
parameters are explicit keyword arguments; ``None`` means "not sent".
Results are returned as Pydantic models from :mod:`telekit.models`, and an
``ok: false`` answer raises :class:`~telekit.exceptions.APIException`
carrying Telegram's description and error code.  Nothing here retries.

Blocking HTTP calls (``requests``) run in a worker thread through
:func:`telekit.transport.make_request`, so the event loop stays free.

Iterating a bot runs its long-poll loop::

    bot = Bot.from_env()
    async for event in bot:
        if event.message and event.message.text:
            await event.reply(event.message.text)
"""

from __future__ import annotations

from datetime import datetime
from typing import IO, Any, AsyncIterator, Dict, List, Optional, Sequence, Type, TypeVar, Union

from telekit import config
from telekit.events import Event
from telekit.exceptions import APIException
from telekit.files import is_upload, pack_media, pack_media_group
from telekit.logger import TelekitLogger
from telekit.models import (
    BotCommand,
    Chat,
    ChatMember,
    ChatPermissions,
    DownloadedFile,
    File,
    FileLink,
    InputMedia,
    MaskPosition,
    Message,
    MessageEntity,
    ReplyMarkup,
    StickerSet,
    TelekitModel,
    User,
    UserProfilePhotos,
)
from telekit.poller import Poller
from telekit.transport import call_json, call_multipart, fetch_file, file_url, make_request

logger = TelekitLogger.get_logger()

ChatId = Union[int, str]
InputFileType = Union[str, bytes, IO[bytes]]
Timestamp = Union[int, float, datetime]
M = TypeVar("M", bound=TelekitModel)


def _unix(value: Optional[Timestamp]) -> Optional[int]:
    """Convert a datetime (or seconds) into integer Unix seconds."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return int(value.timestamp())
    return int(value)


def _file_extension(file_path: str) -> str:
    """Return the text after the last ``.`` of *file_path* (``""`` if none)."""
    name = file_path.rsplit("/", 1)[-1]
    return name.rsplit(".", 1)[-1] if "." in name else ""


class Bot:
    """Client for one bot token.

    Args:
        token: Bot token issued by @BotFather.  Read-only afterwards.
        api_host: Bot API host, for local Bot API servers or tests.
        request_timeout: HTTP timeout for ordinary calls; for ``getUpdates``
            it is added on top of the long-poll timeout.
        **poller_options: Forwarded to :class:`~telekit.poller.Poller`
            (``limit``, ``long_poll_timeout``, ``retry_poll_timeout``,
            ``retry_delay``).
    """

    def __init__(self, token: str, *, api_host: str = config.API_HOST, request_timeout: float = config.REQUEST_TIMEOUT, **poller_options: Any) -> None:
        if not token:
            raise ValueError("A bot token is required")
        self._token = token
        self._api_host = api_host
        self._request_timeout = request_timeout
        self._poller_options = poller_options
        self._poller: Optional[Poller] = None

    @classmethod
    def from_env(cls, **kwargs: Any) -> "Bot":
        """Create a bot from the ``BOT_TOKEN`` environment variable.

        Raises:
            EnvironmentError: If ``BOT_TOKEN`` is not set.
        """
        if not config.BOT_TOKEN:
            logger.error("BOT_TOKEN is NOT set")
            raise EnvironmentError("BOT_TOKEN environment variable is not set or is empty.")
        return cls(config.BOT_TOKEN, **kwargs)

    @property
    def token(self) -> str:
        return self._token

    @token.setter
    def token(self, value: str) -> None:
        raise AttributeError("The token can not be changed after the Bot is created")

    def __repr__(self) -> str:
        bot_id = self._token.split(":", 1)[0]
        return f"Bot(id={bot_id!r}, api_host={self._api_host!r})"

    # ------------------------------------------------------------------
    #  Update stream
    # ------------------------------------------------------------------

    @property
    def poller(self) -> Poller:
        """The bot's poller, created on first use and kept for its cursor."""
        if self._poller is None:
            self._poller = Poller(self, **self._poller_options)
        return self._poller

    def __aiter__(self) -> AsyncIterator[Event]:
        """Run the shared poller.

        A bot serves one consumer at a time: iterate it from a single task
        and fan events out from there.  A second loop polling while the
        first one waits on ``getUpdates`` raises :class:`RuntimeError`.
        """
        return self.poller.run()

    # ------------------------------------------------------------------
    #  Internal helpers
    # ------------------------------------------------------------------

    def _unwrap(self, endpoint: str, envelope: Dict[str, Any]) -> Any:
        """Return the envelope's ``result`` or raise :class:`APIException`."""
        if envelope.get("ok"):
            return envelope.get("result")
        logger.warning("Bot API call rejected", extra={"api_endpoint": endpoint, "error_code": envelope.get("error_code"), "description": envelope.get("description")})
        raise APIException.from_envelope(envelope)

    async def _call(self, endpoint: str, payload: Optional[Dict[str, Any]] = None, *, timeout: Optional[float] = None) -> Any:
        """Make a JSON call and return its unwrapped ``result``."""
        logger.debug("Calling Bot API", extra={"api_endpoint": endpoint})
        envelope = await make_request(
            call_json,
            self._token,
            endpoint,
            payload,
            timeout=timeout if timeout is not None else self._request_timeout,
            api_host=self._api_host,
        )
        return self._unwrap(endpoint, envelope)

    async def _call_files(self, endpoint: str, payload: Dict[str, Any]) -> Any:
        """Make a multipart call and return its unwrapped ``result``."""
        logger.debug("Calling Bot API with uploads", extra={"api_endpoint": endpoint})
        envelope = await make_request(
            call_multipart,
            self._token,
            endpoint,
            payload,
            timeout=self._request_timeout,
            api_host=self._api_host,
        )
        return self._unwrap(endpoint, envelope)

    async def _call_auto(self, endpoint: str, payload: Dict[str, Any], *file_fields: str) -> Any:
        """Pick multipart if any of *file_fields* holds an upload, else JSON."""
        if any(is_upload(payload.get(name)) for name in file_fields):
            return await self._call_files(endpoint, payload)
        return await self._call(endpoint, payload)

    def _model(self, model: Type[M], data: Any) -> M:
        """Decode *data* into *model* and bind the result to this bot."""
        return model.model_validate(data).bind(self)

    def _message_or_true(self, result: Any) -> Union[Message, bool]:
        """Edits of inline messages return ``True`` instead of the Message."""
        if isinstance(result, dict):
            return self._model(Message, result)
        return bool(result)

    # ------------------------------------------------------------------
    #  Bot & updates
    # ------------------------------------------------------------------

    async def get_me(self) -> User:
        """Return basic information about the bot; handy to test the token."""
        return self._model(User, await self._call("getMe"))

    async def get_updates(self, offset: Optional[int] = None, limit: Optional[int] = None, timeout: Optional[int] = None, allowed_updates: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        """Long-poll for incoming updates, returned as raw JSON objects.

        Decoding happens per update in :class:`~telekit.poller.Poller`; an
        update that does not decode still reaches the consumer as
        ``EventKind.UNKNOWN``.

        The HTTP read timeout is the long-poll *timeout* plus the bot's
        request timeout, so a silent connection is eventually dropped.

        Raises:
            APIException: If Telegram answers ``ok: false``.
            requests.RequestException: On transport-level failures.
            ValueError: If the body is not JSON or ``result`` is not a list.
        """
        payload = {"offset": offset, "limit": limit, "timeout": timeout, "allowed_updates": allowed_updates}
        result = await self._call("getUpdates", payload, timeout=(timeout or 0) + self._request_timeout)
        if not isinstance(result, list):
            raise ValueError(f"Unexpected getUpdates result: {result!r}")
        return result

    async def set_my_commands(self, commands: Sequence[Union[BotCommand, Dict[str, str]]]) -> bool:
        """Change the list of the bot's commands."""
        return await self._call("setMyCommands", {"commands": list(commands)})

    async def get_my_commands(self) -> List[BotCommand]:
        return [self._model(BotCommand, item) for item in await self._call("getMyCommands")]

    # ------------------------------------------------------------------
    #  Sending messages
    # ------------------------------------------------------------------

    async def send_message(self, chat_id: ChatId, text: str, *, parse_mode: Optional[str] = None, entities: Optional[List[MessageEntity]] = None, disable_web_page_preview: Optional[bool] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, allow_sending_without_reply: Optional[bool] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send a text message (1-4096 characters after entity parsing)."""
        payload = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": parse_mode,
            "entities": entities,
            "disable_web_page_preview": disable_web_page_preview,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "allow_sending_without_reply": allow_sending_without_reply,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call("sendMessage", payload))

    async def send_poll(self, chat_id: ChatId, question: str, options: Sequence[str], *, is_anonymous: Optional[bool] = None, type: Optional[str] = None, allows_multiple_answers: Optional[bool] = None, correct_option_id: Optional[int] = None, explanation: Optional[str] = None, explanation_parse_mode: Optional[str] = None, open_period: Optional[int] = None, close_date: Optional[Timestamp] = None, is_closed: Optional[bool] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send a native poll; *type* is ``"regular"`` (default) or ``"quiz"``."""
        payload = {
            "chat_id": chat_id,
            "question": question,
            "options": list(options),
            "is_anonymous": is_anonymous,
            "type": type,
            "allows_multiple_answers": allows_multiple_answers,
            "correct_option_id": correct_option_id,
            "explanation": explanation,
            "explanation_parse_mode": explanation_parse_mode,
            "open_period": open_period,
            "close_date": _unix(close_date),
            "is_closed": is_closed,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call("sendPoll", payload))

    async def send_photo(self, chat_id: ChatId, photo: InputFileType, *, caption: Optional[str] = None, parse_mode: Optional[str] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send a photo by file_id, URL, or upload."""
        payload = {
            "chat_id": chat_id,
            "photo": photo,
            "caption": caption,
            "parse_mode": parse_mode,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call_auto("sendPhoto", payload, "photo"))

    async def send_animation(self, chat_id: ChatId, animation: InputFileType, *, duration: Optional[int] = None, width: Optional[int] = None, height: Optional[int] = None, thumb: Optional[InputFileType] = None, caption: Optional[str] = None, parse_mode: Optional[str] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send a GIF or a soundless H.264/MPEG-4 AVC video."""
        payload = {
            "chat_id": chat_id,
            "animation": animation,
            "duration": duration,
            "width": width,
            "height": height,
            "thumb": thumb,
            "caption": caption,
            "parse_mode": parse_mode,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call_auto("sendAnimation", payload, "animation", "thumb"))

    async def send_video(self, chat_id: ChatId, video: InputFileType, *, duration: Optional[int] = None, width: Optional[int] = None, height: Optional[int] = None, thumb: Optional[InputFileType] = None, caption: Optional[str] = None, parse_mode: Optional[str] = None, supports_streaming: Optional[bool] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        payload = {
            "chat_id": chat_id,
            "video": video,
            "duration": duration,
            "width": width,
            "height": height,
            "thumb": thumb,
            "caption": caption,
            "parse_mode": parse_mode,
            "supports_streaming": supports_streaming,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call_auto("sendVideo", payload, "video", "thumb"))

    async def send_video_note(self, chat_id: ChatId, video_note: InputFileType, *, duration: Optional[int] = None, length: Optional[int] = None, thumb: Optional[InputFileType] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send a rounded square video message (up to 1 minute)."""
        payload = {
            "chat_id": chat_id,
            "video_note": video_note,
            "duration": duration,
            "length": length,
            "thumb": thumb,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call_auto("sendVideoNote", payload, "video_note", "thumb"))

    async def send_document(self, chat_id: ChatId, document: InputFileType, *, thumb: Optional[InputFileType] = None, caption: Optional[str] = None, parse_mode: Optional[str] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        payload = {
            "chat_id": chat_id,
            "document": document,
            "thumb": thumb,
            "caption": caption,
            "parse_mode": parse_mode,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call_auto("sendDocument", payload, "document", "thumb"))

    async def send_audio(self, chat_id: ChatId, audio: InputFileType, *, caption: Optional[str] = None, parse_mode: Optional[str] = None, duration: Optional[int] = None, performer: Optional[str] = None, title: Optional[str] = None, thumb: Optional[InputFileType] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send an .MP3 or .M4A file for the music player."""
        payload = {
            "chat_id": chat_id,
            "audio": audio,
            "caption": caption,
            "parse_mode": parse_mode,
            "duration": duration,
            "performer": performer,
            "title": title,
            "thumb": thumb,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call_auto("sendAudio", payload, "audio", "thumb"))

    async def send_voice(self, chat_id: ChatId, voice: InputFileType, *, caption: Optional[str] = None, parse_mode: Optional[str] = None, duration: Optional[int] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send an OGG/OPUS voice message."""
        payload = {
            "chat_id": chat_id,
            "voice": voice,
            "caption": caption,
            "parse_mode": parse_mode,
            "duration": duration,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call_auto("sendVoice", payload, "voice"))

    async def send_sticker(self, chat_id: ChatId, sticker: InputFileType, *, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send a .WEBP static or .TGS animated sticker."""
        payload = {
            "chat_id": chat_id,
            "sticker": sticker,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call_auto("sendSticker", payload, "sticker"))

    async def send_media_group(self, chat_id: ChatId, media: Sequence[Union[InputMedia, Dict[str, Any]]], *, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None) -> List[Message]:
        """Send 2-10 photos/videos/documents/audios as an album.

        Items to upload are attached to the multipart body under their file
        names and referenced from the ``media`` JSON as ``attach://<name>``.
        """
        payload: Dict[str, Any] = {
            "chat_id": chat_id,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
        }
        payload["media"] = pack_media_group(media, payload)
        result = await self._call_files("sendMediaGroup", payload)
        return [self._model(Message, item) for item in result]

    async def send_location(self, chat_id: ChatId, latitude: float, longitude: float, *, live_period: Optional[int] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send a point on the map; *live_period* (60-86400 s) makes it live."""
        payload = {
            "chat_id": chat_id,
            "latitude": latitude,
            "longitude": longitude,
            "live_period": live_period,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call("sendLocation", payload))

    async def edit_message_live_location(self, latitude: float, longitude: float, *, chat_id: Optional[ChatId] = None, message_id: Optional[int] = None, inline_message_id: Optional[str] = None, reply_markup: Optional[ReplyMarkup] = None) -> Union[Message, bool]:
        payload = {
            "chat_id": chat_id,
            "message_id": message_id,
            "inline_message_id": inline_message_id,
            "latitude": latitude,
            "longitude": longitude,
            "reply_markup": reply_markup,
        }
        return self._message_or_true(await self._call("editMessageLiveLocation", payload))

    async def stop_message_live_location(self, *, chat_id: Optional[ChatId] = None, message_id: Optional[int] = None, inline_message_id: Optional[str] = None, reply_markup: Optional[ReplyMarkup] = None) -> Union[Message, bool]:
        payload = {
            "chat_id": chat_id,
            "message_id": message_id,
            "inline_message_id": inline_message_id,
            "reply_markup": reply_markup,
        }
        return self._message_or_true(await self._call("stopMessageLiveLocation", payload))

    async def send_venue(self, chat_id: ChatId, latitude: float, longitude: float, title: str, address: str, *, foursquare_id: Optional[str] = None, foursquare_type: Optional[str] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        payload = {
            "chat_id": chat_id,
            "latitude": latitude,
            "longitude": longitude,
            "title": title,
            "address": address,
            "foursquare_id": foursquare_id,
            "foursquare_type": foursquare_type,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call("sendVenue", payload))

    async def send_contact(self, chat_id: ChatId, phone_number: str, first_name: str, *, last_name: Optional[str] = None, vcard: Optional[str] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        payload = {
            "chat_id": chat_id,
            "phone_number": phone_number,
            "first_name": first_name,
            "last_name": last_name,
            "vcard": vcard,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call("sendContact", payload))

    async def send_dice(self, chat_id: ChatId, *, emoji: Optional[str] = None, disable_notification: Optional[bool] = None, reply_to_message_id: Optional[int] = None, reply_markup: Optional[ReplyMarkup] = None) -> Message:
        """Send an animated emoji with a random value (🎲 by default)."""
        payload = {
            "chat_id": chat_id,
            "emoji": emoji,
            "disable_notification": disable_notification,
            "reply_to_message_id": reply_to_message_id,
            "reply_markup": reply_markup,
        }
        return self._model(Message, await self._call("sendDice", payload))

    async def forward_message(self, chat_id: ChatId, from_chat_id: ChatId, message_id: int, *, disable_notification: Optional[bool] = None) -> Message:
        payload = {
            "chat_id": chat_id,
            "from_chat_id": from_chat_id,
            "message_id": message_id,
            "disable_notification": disable_notification,
        }
        return self._model(Message, await self._call("forwardMessage", payload))

    async def send_chat_action(self, chat_id: ChatId, action: str) -> bool:
        """Show a status such as ``"typing"`` or ``"upload_photo"`` for ~5 s."""
        return await self._call("sendChatAction", {"chat_id": chat_id, "action": action})

    # ------------------------------------------------------------------
    #  Editing & deleting messages
    # ------------------------------------------------------------------

    async def delete_message(self, chat_id: ChatId, message_id: int) -> bool:
        """Delete a message; bots can only delete messages younger than 48 h."""
        return await self._call("deleteMessage", {"chat_id": chat_id, "message_id": message_id})

    async def edit_message_text(self, text: str, *, chat_id: Optional[ChatId] = None, message_id: Optional[int] = None, inline_message_id: Optional[str] = None, parse_mode: Optional[str] = None, disable_web_page_preview: Optional[bool] = None, reply_markup: Optional[ReplyMarkup] = None) -> Union[Message, bool]:
        """Edit a text message; pass *chat_id* + *message_id* or *inline_message_id*."""
        payload = {
            "chat_id": chat_id,
            "message_id": message_id,
            "inline_message_id": inline_message_id,
            "text": text,
            "parse_mode": parse_mode,
            "disable_web_page_preview": disable_web_page_preview,
            "reply_markup": reply_markup,
        }
        return self._message_or_true(await self._call("editMessageText", payload))

    async def edit_message_caption(self, caption: Optional[str] = None, *, chat_id: Optional[ChatId] = None, message_id: Optional[int] = None, inline_message_id: Optional[str] = None, parse_mode: Optional[str] = None, reply_markup: Optional[ReplyMarkup] = None) -> Union[Message, bool]:
        payload = {
            "chat_id": chat_id,
            "message_id": message_id,
            "inline_message_id": inline_message_id,
            "caption": caption,
            "parse_mode": parse_mode,
            "reply_markup": reply_markup,
        }
        return self._message_or_true(await self._call("editMessageCaption", payload))

    async def edit_message_media(self, media: Union[InputMedia, Dict[str, Any]], *, chat_id: Optional[ChatId] = None, message_id: Optional[int] = None, inline_message_id: Optional[str] = None, reply_markup: Optional[ReplyMarkup] = None) -> Union[Message, bool]:
        """Replace the animation, audio, document, photo or video of a message."""
        payload: Dict[str, Any] = {
            "chat_id": chat_id,
            "message_id": message_id,
            "inline_message_id": inline_message_id,
            "reply_markup": reply_markup,
        }
        payload["media"] = pack_media(media, payload)
        return self._message_or_true(await self._call_files("editMessageMedia", payload))

    async def edit_message_reply_markup(self, reply_markup: Optional[ReplyMarkup] = None, *, chat_id: Optional[ChatId] = None, message_id: Optional[int] = None, inline_message_id: Optional[str] = None) -> Union[Message, bool]:
        payload = {
            "chat_id": chat_id,
            "message_id": message_id,
            "inline_message_id": inline_message_id,
            "reply_markup": reply_markup,
        }
        return self._message_or_true(await self._call("editMessageReplyMarkup", payload))

    # ------------------------------------------------------------------
    #  Chats & members
    # ------------------------------------------------------------------

    async def get_chat(self, chat_id: ChatId) -> Chat:
        return self._model(Chat, await self._call("getChat", {"chat_id": chat_id}))

    async def kick_chat_member(self, chat_id: ChatId, user_id: int, *, until_date: Optional[Timestamp] = None) -> bool:
        """Ban a user; banned for ever unless *until_date* is within 30 s-366 days."""
        payload = {"chat_id": chat_id, "user_id": user_id, "until_date": _unix(until_date)}
        return await self._call("kickChatMember", payload)

    async def unban_chat_member(self, chat_id: ChatId, user_id: int) -> bool:
        return await self._call("unbanChatMember", {"chat_id": chat_id, "user_id": user_id})

    async def restrict_chat_member(self, chat_id: ChatId, user_id: int, permissions: Union[ChatPermissions, Dict[str, bool]], *, until_date: Optional[Timestamp] = None) -> bool:
        payload = {
            "chat_id": chat_id,
            "user_id": user_id,
            "permissions": permissions,
            "until_date": _unix(until_date),
        }
        return await self._call("restrictChatMember", payload)

    async def promote_chat_member(self, chat_id: ChatId, user_id: int, *, can_change_info: Optional[bool] = None, can_post_messages: Optional[bool] = None, can_edit_messages: Optional[bool] = None, can_delete_messages: Optional[bool] = None, can_invite_users: Optional[bool] = None, can_restrict_members: Optional[bool] = None, can_pin_messages: Optional[bool] = None, can_promote_members: Optional[bool] = None) -> bool:
        """Promote or demote a user; pass ``False`` everywhere to demote."""
        payload = {
            "chat_id": chat_id,
            "user_id": user_id,
            "can_change_info": can_change_info,
            "can_post_messages": can_post_messages,
            "can_edit_messages": can_edit_messages,
            "can_delete_messages": can_delete_messages,
            "can_invite_users": can_invite_users,
            "can_restrict_members": can_restrict_members,
            "can_pin_messages": can_pin_messages,
            "can_promote_members": can_promote_members,
        }
        return await self._call("promoteChatMember", payload)

    async def set_chat_administrator_custom_title(self, chat_id: ChatId, user_id: int, custom_title: str) -> bool:
        payload = {"chat_id": chat_id, "user_id": user_id, "custom_title": custom_title}
        return await self._call("setChatAdministratorCustomTitle", payload)

    async def set_chat_permissions(self, chat_id: ChatId, permissions: Union[ChatPermissions, Dict[str, bool]]) -> bool:
        return await self._call("setChatPermissions", {"chat_id": chat_id, "permissions": permissions})

    async def export_chat_invite_link(self, chat_id: ChatId) -> str:
        """Generate a new primary invite link; the previous one is revoked."""
        return await self._call("exportChatInviteLink", {"chat_id": chat_id})

    async def set_chat_photo(self, chat_id: ChatId, photo: Union[bytes, IO[bytes]]) -> bool:
        return await self._call_files("setChatPhoto", {"chat_id": chat_id, "photo": photo})

    async def delete_chat_photo(self, chat_id: ChatId) -> bool:
        return await self._call("deleteChatPhoto", {"chat_id": chat_id})

    async def set_chat_title(self, chat_id: ChatId, title: str) -> bool:
        return await self._call("setChatTitle", {"chat_id": chat_id, "title": title})

    async def set_chat_description(self, chat_id: ChatId, description: Optional[str] = None) -> bool:
        return await self._call("setChatDescription", {"chat_id": chat_id, "description": description})

    async def pin_chat_message(self, chat_id: ChatId, message_id: int, *, disable_notification: Optional[bool] = None) -> bool:
        payload = {"chat_id": chat_id, "message_id": message_id, "disable_notification": disable_notification}
        return await self._call("pinChatMessage", payload)

    async def unpin_chat_message(self, chat_id: ChatId, *, message_id: Optional[int] = None) -> bool:
        """Unpin *message_id*, or the most recent pinned message if omitted."""
        return await self._call("unpinChatMessage", {"chat_id": chat_id, "message_id": message_id})

    async def leave_chat(self, chat_id: ChatId) -> bool:
        return await self._call("leaveChat", {"chat_id": chat_id})

    async def get_chat_member(self, chat_id: ChatId, user_id: int) -> ChatMember:
        return self._model(ChatMember, await self._call("getChatMember", {"chat_id": chat_id, "user_id": user_id}))

    async def get_chat_members_count(self, chat_id: ChatId) -> int:
        return await self._call("getChatMembersCount", {"chat_id": chat_id})

    async def get_chat_administrators(self, chat_id: ChatId) -> List[ChatMember]:
        result = await self._call("getChatAdministrators", {"chat_id": chat_id})
        return [self._model(ChatMember, item) for item in result]

    async def set_chat_sticker_set(self, chat_id: ChatId, sticker_set_name: str) -> bool:
        return await self._call("setChatStickerSet", {"chat_id": chat_id, "sticker_set_name": sticker_set_name})

    async def delete_chat_sticker_set(self, chat_id: ChatId) -> bool:
        return await self._call("deleteChatStickerSet", {"chat_id": chat_id})

    # ------------------------------------------------------------------
    #  Stickers
    # ------------------------------------------------------------------

    async def get_sticker_set(self, name: str) -> StickerSet:
        return self._model(StickerSet, await self._call("getStickerSet", {"name": name}))

    async def upload_sticker_file(self, user_id: int, png_sticker: Union[bytes, IO[bytes]]) -> File:
        """Upload a PNG (max 512 kB, one side exactly 512 px) for later use in sets."""
        return self._model(File, await self._call_files("uploadStickerFile", {"user_id": user_id, "png_sticker": png_sticker}))

    async def create_new_sticker_set(self, user_id: int, name: str, title: str, emojis: str, *, png_sticker: Optional[InputFileType] = None, tgs_sticker: Optional[Union[bytes, IO[bytes]]] = None, contains_masks: Optional[bool] = None, mask_position: Optional[MaskPosition] = None) -> bool:
        """Create a sticker set owned by *user_id*.

        Exactly one of *png_sticker* or *tgs_sticker* must be given; *name*
        must end in ``_by_<bot username>``.
        """
        payload = {
            "user_id": user_id,
            "name": name,
            "title": title,
            "png_sticker": png_sticker,
            "tgs_sticker": tgs_sticker,
            "emojis": emojis,
            "contains_masks": contains_masks,
            "mask_position": mask_position,
        }
        return await self._call_files("createNewStickerSet", payload)

    async def add_sticker_to_set(self, user_id: int, name: str, emojis: str, *, png_sticker: Optional[InputFileType] = None, tgs_sticker: Optional[Union[bytes, IO[bytes]]] = None, mask_position: Optional[MaskPosition] = None) -> bool:
        payload = {
            "user_id": user_id,
            "name": name,
            "png_sticker": png_sticker,
            "tgs_sticker": tgs_sticker,
            "emojis": emojis,
            "mask_position": mask_position,
        }
        return await self._call_files("addStickerToSet", payload)

    async def set_sticker_position_in_set(self, sticker: str, position: int) -> bool:
        return await self._call("setStickerPositionInSet", {"sticker": sticker, "position": position})

    async def delete_sticker_from_set(self, sticker: str) -> bool:
        return await self._call("deleteStickerFromSet", {"sticker": sticker})

    async def set_sticker_set_thumb(self, name: str, user_id: int, *, thumb: Optional[InputFileType] = None) -> bool:
        payload = {"name": name, "user_id": user_id, "thumb": thumb}
        return await self._call_auto("setStickerSetThumb", payload, "thumb")

    # ------------------------------------------------------------------
    #  Users, queries & commands
    # ------------------------------------------------------------------

    async def get_user_profile_photos(self, user_id: int, *, offset: Optional[int] = None, limit: Optional[int] = None) -> UserProfilePhotos:
        payload = {"user_id": user_id, "offset": offset, "limit": limit}
        return self._model(UserProfilePhotos, await self._call("getUserProfilePhotos", payload))

    async def answer_inline_query(self, inline_query_id: str, results: Sequence[Any], *, cache_time: Optional[int] = None, is_personal: Optional[bool] = None, next_offset: Optional[str] = None, switch_pm_text: Optional[str] = None, switch_pm_parameter: Optional[str] = None) -> bool:
        """Send at most 50 results for an inline query."""
        payload = {
            "inline_query_id": inline_query_id,
            "results": list(results),
            "cache_time": cache_time,
            "is_personal": is_personal,
            "next_offset": next_offset,
            "switch_pm_text": switch_pm_text,
            "switch_pm_parameter": switch_pm_parameter,
        }
        return await self._call("answerInlineQuery", payload)

    async def answer_callback_query(self, callback_query_id: str, *, text: Optional[str] = None, show_alert: Optional[bool] = None, url: Optional[str] = None, cache_time: Optional[int] = None) -> bool:
        """Acknowledge a callback query so the spinner disappears for the user."""
        payload = {
            "callback_query_id": callback_query_id,
            "text": text,
            "show_alert": show_alert,
            "url": url,
            "cache_time": cache_time,
        }
        return await self._call("answerCallbackQuery", payload)

    # ------------------------------------------------------------------
    #  Files
    # ------------------------------------------------------------------

    async def get_file(self, file_id: str) -> File:
        """Resolve a ``file_id`` to a :class:`~telekit.models.File` with its path."""
        return self._model(File, await self._call("getFile", {"file_id": file_id}))

    async def _resolve_file_path(self, file_id: str) -> str:
        file = await self.get_file(file_id)
        if not file.file_path:
            raise APIException(f"File {file_id} has no file_path (is it larger than 20 MB?)", None, {})
        return file.file_path

    async def get_file_download_link(self, file_id: str) -> FileLink:
        """Return a direct link to the file.  The link embeds the bot token."""
        file_path = await self._resolve_file_path(file_id)
        return FileLink(link=file_url(self._token, file_path, self._api_host), file_extension=_file_extension(file_path))

    async def download_file(self, file_id: str) -> DownloadedFile:
        """Download a file (bots may fetch files of up to 20 MB).

        Raises:
            APIException: If ``getFile`` is rejected.
            requests.HTTPError: If the file server answers non-2xx.
        """
        file_path = await self._resolve_file_path(file_id)
        url = file_url(self._token, file_path, self._api_host)
        data = await make_request(fetch_file, url, timeout=self._request_timeout)
        logger.debug("File downloaded", extra={"api_endpoint": "getFile", "file_id": file_id, "size": len(data)})
        return DownloadedFile(data=data, file_extension=_file_extension(file_path))
