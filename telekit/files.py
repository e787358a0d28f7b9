"""Upload helpers: deciding what is a file, naming it, and packing input media.

A media argument is either a ``str`` (a file_id already on Telegram's
servers, or an HTTP URL Telegram should fetch) or something to upload: a
binary file object (anything with ``read()``) or raw ``bytes``.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Sequence, Union

from telekit.models import InputMedia, to_payload


def is_upload(value: Any) -> bool:
    """Return ``True`` if *value* must be sent as a multipart file part."""
    if isinstance(value, (str, dict)):
        return False
    return isinstance(value, (bytes, bytearray)) or callable(getattr(value, "read", None))


def attach_name(value: Any, index: int = 0) -> str:
    """Name an upload after its file's basename, or ``file<index>`` if it has none."""
    name = getattr(value, "name", None)
    if isinstance(name, str) and name:
        base = os.path.basename(name)
        if base:
            return base
    return f"file{index}"


def _attach(value: Any, body: Dict[str, Any], index: int) -> str:
    """Store *value* in *body* under a free attachment name; return its reference."""
    name = attach_name(value, index)
    if name in body:
        stem, ext = os.path.splitext(name)
        name = f"{stem}_{index}{ext}"
    body[name] = value
    return f"attach://{name}"


def pack_media(media: Union[InputMedia, Dict[str, Any]], body: Dict[str, Any], index: int = 0) -> Dict[str, Any]:
    """Return the JSON form of one input media item.

    Uploaded ``media``/``thumb`` objects are moved into *body* as separate
    multipart parts and replaced by ``attach://<name>`` references.
    """
    if isinstance(media, InputMedia):
        item = dict(media)
        item["caption_entities"] = to_payload(media.caption_entities)
    else:
        item = dict(media)

    for key in ("media", "thumb"):
        value = item.get(key)
        if value is not None and is_upload(value):
            item[key] = _attach(value, body, index)

    return {key: to_payload(value) for key, value in item.items() if value is not None}


def pack_media_group(media: Sequence[Union[InputMedia, Dict[str, Any]]], body: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Pack every item of a media group; uploads land in *body*."""
    return [pack_media(item, body, index) for index, item in enumerate(media)]
