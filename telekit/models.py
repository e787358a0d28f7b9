"""Pydantic models for the Telegram Bot API objects telekit sends and receives.

Field names match the wire format (snake_case) except for the reserved word
``from``, exposed as ``from_user``.  Unknown fields sent by newer Bot API
versions are ignored so that decoding never fails just because Telegram
added something.

Objects returned by a :class:`~telekit.client.Bot` are *bound* to it, so
they can act on themselves::

    sent = await bot.send_message(chat_id, "hello")
    await sent.edit_text("hello, world")
    await sent.chat.pin_message(sent.message_id)

Outgoing objects (keyboards, commands, permissions, input media) are dumped
with :func:`to_payload` before they hit the wire.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

if TYPE_CHECKING:
    from telekit.client import Bot


class TelekitModel(BaseModel):
    """Common base: accept wire aliases and field names, ignore extras."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    _bot: Any = PrivateAttr(default=None)

    def bind(self, bot: "Bot") -> "TelekitModel":
        """Attach *bot* to this object and every model nested in it; return self."""
        _bind(self, bot)
        return self

    def _require_bot(self) -> "Bot":
        if self._bot is None:
            raise RuntimeError(f"{type(self).__name__} is not bound to a Bot")
        return self._bot


def _bind(value: Any, bot: Any) -> None:
    if isinstance(value, TelekitModel):
        value._bot = bot
        for name in type(value).model_fields:
            _bind(getattr(value, name), bot)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _bind(item, bot)


def to_payload(value: Any) -> Any:
    """Convert models (possibly nested in lists/dicts) to plain JSON data."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True, mode="json")
    if isinstance(value, (list, tuple)):
        return [to_payload(item) for item in value]
    if isinstance(value, dict):
        return {key: to_payload(item) for key, item in value.items() if item is not None}
    return value


class _Downloadable(TelekitModel):
    """Mixin for objects identified by a ``file_id`` on Telegram's servers."""

    async def download(self) -> "DownloadedFile":
        """Download the file's bytes (bots may fetch files of up to 20 MB)."""
        return await self._require_bot().download_file(self.file_id)

    async def get_download_link(self) -> "FileLink":
        """Return a direct link to the file.  The link embeds the bot token."""
        return await self._require_bot().get_file_download_link(self.file_id)


# ── Users & chats ────────────────────────────────────────────────────────────


class User(TelekitModel):
    """A Telegram user or bot."""

    id: int
    is_bot: bool
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = None
    can_join_groups: Optional[bool] = None
    can_read_all_group_messages: Optional[bool] = None
    supports_inline_queries: Optional[bool] = None

    async def get_profile_photos(self, **options: Any) -> "UserProfilePhotos":
        return await self._require_bot().get_user_profile_photos(self.id, **options)


class ChatPhoto(TelekitModel):
    """Small and big versions of a chat photo, by file id."""

    small_file_id: str
    small_file_unique_id: str
    big_file_id: str
    big_file_unique_id: str

    async def download_big(self) -> "DownloadedFile":
        """Download the 640x640 version."""
        return await self._require_bot().download_file(self.big_file_id)

    async def download_small(self) -> "DownloadedFile":
        """Download the 160x160 version."""
        return await self._require_bot().download_file(self.small_file_id)

    async def get_download_link(self) -> "FileLink":
        """Return a direct link to the small version.  The link embeds the bot token."""
        return await self._require_bot().get_file_download_link(self.small_file_id)


class ChatPermissions(TelekitModel):
    """Actions non-administrator members are allowed to perform."""

    can_send_messages: Optional[bool] = None
    can_send_media_messages: Optional[bool] = None
    can_send_polls: Optional[bool] = None
    can_send_other_messages: Optional[bool] = None
    can_add_web_page_previews: Optional[bool] = None
    can_change_info: Optional[bool] = None
    can_invite_users: Optional[bool] = None
    can_pin_messages: Optional[bool] = None


class Chat(TelekitModel):
    """A private chat, group, supergroup or channel."""

    id: int
    type: str
    title: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo: Optional[ChatPhoto] = None
    bio: Optional[str] = None
    description: Optional[str] = None
    invite_link: Optional[str] = None
    pinned_message: Optional["Message"] = None
    permissions: Optional[ChatPermissions] = None
    slow_mode_delay: Optional[int] = None
    sticker_set_name: Optional[str] = None
    can_set_sticker_set: Optional[bool] = None
    linked_chat_id: Optional[int] = None

    # Administration shortcuts; each one calls the Bot method of the same
    # name with this chat's id.

    async def kick_member(self, user_id: int, **options: Any) -> bool:
        return await self._require_bot().kick_chat_member(self.id, user_id, **options)

    async def unban_member(self, user_id: int) -> bool:
        return await self._require_bot().unban_chat_member(self.id, user_id)

    async def restrict_member(self, user_id: int, permissions: Union["ChatPermissions", Dict[str, bool]], **options: Any) -> bool:
        return await self._require_bot().restrict_chat_member(self.id, user_id, permissions, **options)

    async def promote_member(self, user_id: int, **options: Any) -> bool:
        return await self._require_bot().promote_chat_member(self.id, user_id, **options)

    async def set_administrator_custom_title(self, user_id: int, custom_title: str) -> bool:
        return await self._require_bot().set_chat_administrator_custom_title(self.id, user_id, custom_title)

    async def set_permissions(self, permissions: Union["ChatPermissions", Dict[str, bool]]) -> bool:
        return await self._require_bot().set_chat_permissions(self.id, permissions)

    async def export_invite_link(self) -> str:
        return await self._require_bot().export_chat_invite_link(self.id)

    async def set_photo(self, photo: Any) -> bool:
        return await self._require_bot().set_chat_photo(self.id, photo)

    async def delete_photo(self) -> bool:
        return await self._require_bot().delete_chat_photo(self.id)

    async def set_title(self, title: str) -> bool:
        return await self._require_bot().set_chat_title(self.id, title)

    async def set_description(self, description: Optional[str] = None) -> bool:
        return await self._require_bot().set_chat_description(self.id, description)

    async def pin_message(self, message_id: int, **options: Any) -> bool:
        return await self._require_bot().pin_chat_message(self.id, message_id, **options)

    async def unpin_message(self, **options: Any) -> bool:
        return await self._require_bot().unpin_chat_message(self.id, **options)

    async def leave(self) -> bool:
        return await self._require_bot().leave_chat(self.id)

    async def get_administrators(self) -> List["ChatMember"]:
        return await self._require_bot().get_chat_administrators(self.id)

    async def get_members_count(self) -> int:
        return await self._require_bot().get_chat_members_count(self.id)

    async def get_member(self, user_id: int) -> "ChatMember":
        return await self._require_bot().get_chat_member(self.id, user_id)

    async def set_sticker_set(self, sticker_set_name: str) -> bool:
        return await self._require_bot().set_chat_sticker_set(self.id, sticker_set_name)

    async def delete_sticker_set(self) -> bool:
        return await self._require_bot().delete_chat_sticker_set(self.id)


class ChatMember(TelekitModel):
    """A member of a chat together with its status and privileges."""

    user: User
    status: str
    custom_title: Optional[str] = None
    is_anonymous: Optional[bool] = None
    until_date: Optional[int] = None
    can_be_edited: Optional[bool] = None
    can_post_messages: Optional[bool] = None
    can_edit_messages: Optional[bool] = None
    can_delete_messages: Optional[bool] = None
    can_restrict_members: Optional[bool] = None
    can_promote_members: Optional[bool] = None
    can_change_info: Optional[bool] = None
    can_invite_users: Optional[bool] = None
    can_pin_messages: Optional[bool] = None
    is_member: Optional[bool] = None
    can_send_messages: Optional[bool] = None
    can_send_media_messages: Optional[bool] = None
    can_send_polls: Optional[bool] = None
    can_send_other_messages: Optional[bool] = None
    can_add_web_page_previews: Optional[bool] = None


# ── Media ────────────────────────────────────────────────────────────────────


class PhotoSize(_Downloadable):
    file_id: str
    file_unique_id: str
    width: int
    height: int
    file_size: Optional[int] = None


class Animation(_Downloadable):
    file_id: str
    file_unique_id: str
    width: int
    height: int
    duration: int
    thumb: Optional[PhotoSize] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class Audio(_Downloadable):
    file_id: str
    file_unique_id: str
    duration: int
    performer: Optional[str] = None
    title: Optional[str] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None
    thumb: Optional[PhotoSize] = None


class Document(_Downloadable):
    file_id: str
    file_unique_id: str
    thumb: Optional[PhotoSize] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class Video(_Downloadable):
    file_id: str
    file_unique_id: str
    width: int
    height: int
    duration: int
    thumb: Optional[PhotoSize] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class VideoNote(_Downloadable):
    file_id: str
    file_unique_id: str
    length: int
    duration: int
    thumb: Optional[PhotoSize] = None
    file_size: Optional[int] = None


class Voice(_Downloadable):
    file_id: str
    file_unique_id: str
    duration: int
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class File(TelekitModel):
    """A file ready to be downloaded via ``/file/bot<token>/<file_path>``."""

    file_id: str
    file_unique_id: str
    file_size: Optional[int] = None
    file_path: Optional[str] = None


class UserProfilePhotos(TelekitModel):
    total_count: int
    photos: List[List[PhotoSize]]


class FileLink(TelekitModel):
    """Direct download link for a file, plus its extension."""

    link: str
    file_extension: str


class DownloadedFile(TelekitModel):
    """Raw bytes of a downloaded file, plus its extension."""

    data: bytes
    file_extension: str


# ── Stickers ─────────────────────────────────────────────────────────────────


class MaskPosition(TelekitModel):
    """Where a mask sticker is placed on a face."""

    point: str
    x_shift: float
    y_shift: float
    scale: float


class Sticker(_Downloadable):
    file_id: str
    file_unique_id: str
    width: int
    height: int
    is_animated: bool
    thumb: Optional[PhotoSize] = None
    emoji: Optional[str] = None
    set_name: Optional[str] = None
    mask_position: Optional[MaskPosition] = None
    file_size: Optional[int] = None


class StickerSet(TelekitModel):
    name: str
    title: str
    is_animated: bool
    contains_masks: bool
    stickers: List[Sticker]
    thumb: Optional[PhotoSize] = None


# ── Message content ──────────────────────────────────────────────────────────


class MessageEntity(TelekitModel):
    """A special entity (hashtag, mention, URL, command…) inside a text."""

    type: str
    offset: int
    length: int
    url: Optional[str] = None
    user: Optional[User] = None
    language: Optional[str] = None


class Contact(TelekitModel):
    phone_number: str
    first_name: str
    last_name: Optional[str] = None
    user_id: Optional[int] = None
    vcard: Optional[str] = None


class Location(TelekitModel):
    longitude: float
    latitude: float
    horizontal_accuracy: Optional[float] = None
    live_period: Optional[int] = None
    heading: Optional[int] = None
    proximity_alert_radius: Optional[int] = None


class Venue(TelekitModel):
    location: Location
    title: str
    address: str
    foursquare_id: Optional[str] = None
    foursquare_type: Optional[str] = None


class Dice(TelekitModel):
    emoji: str
    value: int


class PollOption(TelekitModel):
    text: str
    voter_count: int


class Poll(TelekitModel):
    """A native poll, as attached to a message or pushed as an update."""

    id: str
    question: str
    options: List[PollOption]
    total_voter_count: int
    is_closed: bool
    is_anonymous: bool
    type: str
    allows_multiple_answers: bool
    correct_option_id: Optional[int] = None
    explanation: Optional[str] = None
    explanation_entities: Optional[List[MessageEntity]] = None
    open_period: Optional[int] = None
    close_date: Optional[int] = None


class PollAnswer(TelekitModel):
    """A vote in a non-anonymous poll.

    Votes cast on behalf of an anonymous channel carry ``voter_chat``
    instead of ``user``.
    """

    poll_id: str
    option_ids: List[int]
    user: Optional[User] = None
    voter_chat: Optional[Chat] = None


class Game(TelekitModel):
    title: str
    description: str
    photo: List[PhotoSize]
    text: Optional[str] = None
    text_entities: Optional[List[MessageEntity]] = None
    animation: Optional[Animation] = None


class Invoice(TelekitModel):
    title: str
    description: str
    start_parameter: str
    currency: str
    total_amount: int


class ShippingAddress(TelekitModel):
    country_code: str
    state: str
    city: str
    street_line1: str
    street_line2: str
    post_code: str


class OrderInfo(TelekitModel):
    name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    shipping_address: Optional[ShippingAddress] = None


class SuccessfulPayment(TelekitModel):
    currency: str
    total_amount: int
    invoice_payload: str
    telegram_payment_charge_id: str
    provider_payment_charge_id: str
    shipping_option_id: Optional[str] = None
    order_info: Optional[OrderInfo] = None


# ── Keyboards ────────────────────────────────────────────────────────────────


class LoginUrl(TelekitModel):
    url: str
    forward_text: Optional[str] = None
    bot_username: Optional[str] = None
    request_write_access: Optional[bool] = None


class InlineKeyboardButton(TelekitModel):
    """One button of an inline keyboard; exactly one optional field is used."""

    text: str
    url: Optional[str] = None
    login_url: Optional[LoginUrl] = None
    callback_data: Optional[str] = None
    switch_inline_query: Optional[str] = None
    switch_inline_query_current_chat: Optional[str] = None
    pay: Optional[bool] = None


class InlineKeyboardMarkup(TelekitModel):
    inline_keyboard: List[List[InlineKeyboardButton]]


class KeyboardButtonPollType(TelekitModel):
    type: Optional[str] = None


class KeyboardButton(TelekitModel):
    text: str
    request_contact: Optional[bool] = None
    request_location: Optional[bool] = None
    request_poll: Optional[KeyboardButtonPollType] = None


class ReplyKeyboardMarkup(TelekitModel):
    keyboard: List[List[KeyboardButton]]
    resize_keyboard: Optional[bool] = None
    one_time_keyboard: Optional[bool] = None
    selective: Optional[bool] = None


class ReplyKeyboardRemove(TelekitModel):
    remove_keyboard: bool = True
    selective: Optional[bool] = None


class ForceReply(TelekitModel):
    force_reply: bool = True
    selective: Optional[bool] = None


ReplyMarkup = Union[InlineKeyboardMarkup, ReplyKeyboardMarkup, ReplyKeyboardRemove, ForceReply, Dict[str, Any]]


# ── Message ──────────────────────────────────────────────────────────────────


class Message(TelekitModel):
    """A message in a chat.

    ``from`` is a Python keyword, so the sender lives in :attr:`from_user`
    (the wire alias is still ``from``).
    """

    message_id: int
    date: int
    chat: Chat
    from_user: Optional[User] = Field(None, alias="from")
    sender_chat: Optional[Chat] = None
    forward_from: Optional[User] = None
    forward_from_chat: Optional[Chat] = None
    forward_from_message_id: Optional[int] = None
    forward_signature: Optional[str] = None
    forward_sender_name: Optional[str] = None
    forward_date: Optional[int] = None
    reply_to_message: Optional["Message"] = None
    via_bot: Optional[User] = None
    edit_date: Optional[int] = None
    media_group_id: Optional[str] = None
    author_signature: Optional[str] = None
    text: Optional[str] = None
    entities: Optional[List[MessageEntity]] = None
    animation: Optional[Animation] = None
    audio: Optional[Audio] = None
    document: Optional[Document] = None
    photo: Optional[List[PhotoSize]] = None
    sticker: Optional[Sticker] = None
    video: Optional[Video] = None
    video_note: Optional[VideoNote] = None
    voice: Optional[Voice] = None
    caption: Optional[str] = None
    caption_entities: Optional[List[MessageEntity]] = None
    contact: Optional[Contact] = None
    dice: Optional[Dice] = None
    game: Optional[Game] = None
    poll: Optional[Poll] = None
    venue: Optional[Venue] = None
    location: Optional[Location] = None
    new_chat_members: Optional[List[User]] = None
    left_chat_member: Optional[User] = None
    new_chat_title: Optional[str] = None
    new_chat_photo: Optional[List[PhotoSize]] = None
    delete_chat_photo: Optional[bool] = None
    group_chat_created: Optional[bool] = None
    supergroup_chat_created: Optional[bool] = None
    channel_chat_created: Optional[bool] = None
    migrate_to_chat_id: Optional[int] = None
    migrate_from_chat_id: Optional[int] = None
    pinned_message: Optional["Message"] = None
    invoice: Optional[Invoice] = None
    successful_payment: Optional[SuccessfulPayment] = None
    connected_website: Optional[str] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None

    # ------------------------------------------------------------------
    #  Replies: send into this chat, quoting this message
    # ------------------------------------------------------------------

    async def _reply(self, method: str, *args: Any, **options: Any) -> Any:
        options.setdefault("reply_to_message_id", self.message_id)
        return await getattr(self._require_bot(), method)(self.chat.id, *args, **options)

    async def reply_with_text(self, text: str, **options: Any) -> "Message":
        return await self._reply("send_message", text, **options)

    async def reply_with_poll(self, question: str, answer_options: Sequence[str], **options: Any) -> "Message":
        return await self._reply("send_poll", question, answer_options, **options)

    async def reply_with_photo(self, photo: Any, **options: Any) -> "Message":
        return await self._reply("send_photo", photo, **options)

    async def reply_with_animation(self, animation: Any, **options: Any) -> "Message":
        return await self._reply("send_animation", animation, **options)

    async def reply_with_video(self, video: Any, **options: Any) -> "Message":
        return await self._reply("send_video", video, **options)

    async def reply_with_video_note(self, video_note: Any, **options: Any) -> "Message":
        return await self._reply("send_video_note", video_note, **options)

    async def reply_with_audio(self, audio: Any, **options: Any) -> "Message":
        return await self._reply("send_audio", audio, **options)

    async def reply_with_voice(self, voice: Any, **options: Any) -> "Message":
        return await self._reply("send_voice", voice, **options)

    async def reply_with_document(self, document: Any, **options: Any) -> "Message":
        return await self._reply("send_document", document, **options)

    async def reply_with_location(self, latitude: float, longitude: float, **options: Any) -> "Message":
        return await self._reply("send_location", latitude, longitude, **options)

    async def reply_with_venue(self, latitude: float, longitude: float, title: str, address: str, **options: Any) -> "Message":
        return await self._reply("send_venue", latitude, longitude, title, address, **options)

    async def reply_with_media_group(self, media: Sequence[Any], **options: Any) -> List["Message"]:
        return await self._reply("send_media_group", media, **options)

    async def reply_with_contact(self, phone_number: str, first_name: str, **options: Any) -> "Message":
        return await self._reply("send_contact", phone_number, first_name, **options)

    async def reply_with_sticker(self, sticker: Any, **options: Any) -> "Message":
        return await self._reply("send_sticker", sticker, **options)

    async def reply_with_dice(self, **options: Any) -> "Message":
        return await self._reply("send_dice", **options)

    # ------------------------------------------------------------------
    #  Acting on this message
    # ------------------------------------------------------------------

    async def edit_text(self, text: str, **options: Any) -> Union["Message", bool]:
        return await self._require_bot().edit_message_text(text, chat_id=self.chat.id, message_id=self.message_id, **options)

    async def edit_caption(self, caption: Optional[str] = None, **options: Any) -> Union["Message", bool]:
        return await self._require_bot().edit_message_caption(caption, chat_id=self.chat.id, message_id=self.message_id, **options)

    async def edit_reply_markup(self, reply_markup: Optional[ReplyMarkup] = None) -> Union["Message", bool]:
        return await self._require_bot().edit_message_reply_markup(reply_markup, chat_id=self.chat.id, message_id=self.message_id)

    async def edit_media(self, media: Any, **options: Any) -> Union["Message", bool]:
        return await self._require_bot().edit_message_media(media, chat_id=self.chat.id, message_id=self.message_id, **options)

    async def forward_to(self, chat_id: Union[int, str], **options: Any) -> "Message":
        return await self._require_bot().forward_message(chat_id, self.chat.id, self.message_id, **options)

    async def delete(self) -> bool:
        return await self._require_bot().delete_message(self.chat.id, self.message_id)

    async def pin(self, **options: Any) -> bool:
        """Pin this message in its chat.

        Raises:
            ValueError: In private chats, where bots cannot pin.
        """
        if self.chat.type == "private":
            raise ValueError("Messages can not be pinned in a private chat")
        return await self._require_bot().pin_chat_message(self.chat.id, self.message_id, **options)


# ── Queries ──────────────────────────────────────────────────────────────────


class CallbackQuery(TelekitModel):
    """A press on an inline keyboard button."""

    id: str
    from_user: User = Field(alias="from")
    chat_instance: str
    message: Optional[Message] = None
    inline_message_id: Optional[str] = None
    data: Optional[str] = None
    game_short_name: Optional[str] = None

    async def answer(self, **options: Any) -> bool:
        """Acknowledge the press; *options* go to :meth:`Bot.answer_callback_query`."""
        return await self._require_bot().answer_callback_query(self.id, **options)


class InlineQuery(TelekitModel):
    id: str
    from_user: User = Field(alias="from")
    query: str
    offset: str
    location: Optional[Location] = None

    async def answer(self, results: Sequence[Any], **options: Any) -> bool:
        return await self._require_bot().answer_inline_query(self.id, list(results), **options)


class ChosenInlineResult(TelekitModel):
    result_id: str
    from_user: User = Field(alias="from")
    query: str
    location: Optional[Location] = None
    inline_message_id: Optional[str] = None


class ShippingQuery(TelekitModel):
    id: str
    from_user: User = Field(alias="from")
    invoice_payload: str
    shipping_address: ShippingAddress


class PreCheckoutQuery(TelekitModel):
    id: str
    from_user: User = Field(alias="from")
    currency: str
    total_amount: int
    invoice_payload: str
    shipping_option_id: Optional[str] = None
    order_info: Optional[OrderInfo] = None


# ── Commands & input media ───────────────────────────────────────────────────


class BotCommand(TelekitModel):
    command: str
    description: str


class InputMedia(TelekitModel):
    """Content of a media message to be sent or edited.

    ``media`` is a file_id / URL string or a binary file object to upload;
    ``thumb`` accepts the same.  Uploads are attached by
    :func:`telekit.files.pack_media`.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", arbitrary_types_allowed=True)

    type: str
    media: Any
    thumb: Any = None
    caption: Optional[str] = None
    parse_mode: Optional[str] = None
    caption_entities: Optional[List[MessageEntity]] = None


class InputMediaPhoto(InputMedia):
    type: str = "photo"


class InputMediaVideo(InputMedia):
    type: str = "video"
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    supports_streaming: Optional[bool] = None


class InputMediaAnimation(InputMedia):
    type: str = "animation"
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None


class InputMediaAudio(InputMedia):
    type: str = "audio"
    duration: Optional[int] = None
    performer: Optional[str] = None
    title: Optional[str] = None


class InputMediaDocument(InputMedia):
    type: str = "document"
    disable_content_type_detection: Optional[bool] = None


# ── Update ───────────────────────────────────────────────────────────────────


class Update(TelekitModel):
    """An incoming update.  At most **one** optional payload is present."""

    update_id: int
    message: Optional[Message] = None
    edited_message: Optional[Message] = None
    channel_post: Optional[Message] = None
    edited_channel_post: Optional[Message] = None
    inline_query: Optional[InlineQuery] = None
    chosen_inline_result: Optional[ChosenInlineResult] = None
    callback_query: Optional[CallbackQuery] = None
    shipping_query: Optional[ShippingQuery] = None
    pre_checkout_query: Optional[PreCheckoutQuery] = None
    poll: Optional[Poll] = None
    poll_answer: Optional[PollAnswer] = None


Chat.model_rebuild()
Message.model_rebuild()
