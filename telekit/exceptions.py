"""Exception hierarchy for the telekit Telegram SDK."""

from typing import Any, Dict, Optional


class APIException(Exception):
    """Raised when the Bot API answers a call with ``ok: false``.

    Attributes:
        description: Human-readable reason reported by Telegram.
        error_code: Numeric error code from the envelope (usually mirrors
            the HTTP status, e.g. ``400`` or ``403``).
        response_body: The full response envelope, when available.
    """

    def __init__(self, description: Optional[str] = None, error_code: Optional[int] = None, response_body: Optional[Dict[str, Any]] = None) -> None:
        """Initialise with the server's description and error code."""
        self.response_body = response_body or {}
        self.description = description or self.response_body.get("description") or "Unknown error"
        self.error_code = error_code if error_code is not None else self.response_body.get("error_code")
        super().__init__(f"API error {self.error_code}: {self.description}")

    @classmethod
    def from_envelope(cls, envelope: Dict[str, Any]) -> "APIException":
        """Build the exception from an ``ok: false`` response envelope."""
        return cls(envelope.get("description"), envelope.get("error_code"), envelope)
