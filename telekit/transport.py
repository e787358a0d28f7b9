"""Bot API transport: one RPC call in, one parsed response envelope out.

Two encodings target the same ``https://<host>/bot<token>/<endpoint>`` URL:

* :func:`call_json` for ordinary calls (``application/json`` body);
* :func:`call_multipart` for calls that may carry file uploads
  (``multipart/form-data``).

Neither function interprets the envelope: ``{"ok": false, ...}`` is returned
as data.  Network faults surface as :class:`requests.RequestException` and a
non-JSON body as :class:`ValueError`.  HTTP calls use ``requests``; the
async layer offloads them through :func:`make_request`.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

import requests

from telekit.config import API_HOST, REQUEST_TIMEOUT
from telekit.files import attach_name, is_upload
from telekit.models import to_payload

T = TypeVar("T")

Envelope = Dict[str, Any]


def endpoint_url(token: str, endpoint: str, api_host: str = API_HOST) -> str:
    """Return the RPC URL for *endpoint* on behalf of the bot *token*."""
    return f"https://{api_host}/bot{token}/{endpoint.lstrip('/')}"


def file_url(token: str, file_path: str, api_host: str = API_HOST) -> str:
    """Return the static download URL for a server-relative *file_path*."""
    return f"https://{api_host}/file/bot{token}/{file_path.lstrip('/')}"


def _parse_envelope(response: requests.Response) -> Envelope:
    """Decode the JSON envelope; raise :class:`ValueError` for anything else."""
    body = response.json()
    if not isinstance(body, dict):
        raise ValueError(f"Unexpected response body from Bot API: {body!r}")
    return body


def call_json(token: str, endpoint: str, body: Optional[Dict[str, Any]] = None, *, timeout: Optional[float] = REQUEST_TIMEOUT, api_host: str = API_HOST) -> Envelope:
    """POST *body* as JSON and return the response envelope.

    ``None`` values are dropped and Pydantic models are dumped to plain
    JSON first.

    Raises:
        requests.RequestException: On DNS/connect/read failures.
        ValueError: If the response body is not a JSON object.
    """
    payload = to_payload(body or {})
    response = requests.post(
        endpoint_url(token, endpoint, api_host),
        json=payload,
        headers={"Accept": "application/json"},
        timeout=timeout,
    )
    return _parse_envelope(response)


def _form_value(value: Any) -> str:
    """Render a non-file multipart value as text."""
    if isinstance(value, str):
        return value
    return json.dumps(to_payload(value), ensure_ascii=False)


def encode_multipart(body: Dict[str, Any]) -> Dict[str, Tuple[Optional[str], Any]]:
    """Turn *body* into the ``files=`` mapping ``requests`` streams as multipart.

    Absent (``None``) values are skipped.  Uploads keep their file name so
    Telegram can infer the type; everything else becomes a plain form field.
    """
    fields: Dict[str, Tuple[Optional[str], Any]] = {}
    for index, (key, value) in enumerate(body.items()):
        if value is None:
            continue
        if is_upload(value):
            fields[key] = (attach_name(value, index), value)
        else:
            fields[key] = (None, _form_value(value))
    return fields


def call_multipart(token: str, endpoint: str, body: Optional[Dict[str, Any]] = None, *, timeout: Optional[float] = REQUEST_TIMEOUT, api_host: str = API_HOST) -> Envelope:
    """POST *body* as ``multipart/form-data`` and return the response envelope.

    Raises:
        requests.RequestException: On DNS/connect/read failures.
        ValueError: If the response body is not a JSON object.
    """
    response = requests.post(
        endpoint_url(token, endpoint, api_host),
        files=encode_multipart(body or {}),
        headers={"Accept": "application/json"},
        timeout=timeout,
    )
    return _parse_envelope(response)


def fetch_file(url: str, timeout: Optional[float] = None) -> bytes:
    """Download raw bytes from the Bot API file server.

    Raises:
        requests.HTTPError: If the HTTP response status is not 2xx.
        requests.RequestException: On transport-level failures.
    """
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.content


async def make_request(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking transport call inside a thread to keep the event loop free."""
    return await asyncio.to_thread(func, *args, **kwargs)
