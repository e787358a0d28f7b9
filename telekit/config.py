"""SDK configuration: environment variables and derived constants.

Loads ``BOT_TOKEN`` and the polling/transport tunables from the environment
via ``python-dotenv``.  All values are resolved at import time so other
modules can ``from telekit.config import …`` without repeated lookups.
"""

# ── stdlib ───────────────────────────────────────────────────────────────────
import logging
import os

# ── third-party ──────────────────────────────────────────────────────────────
from dotenv import load_dotenv

# ── Environment bootstrap ────────────────────────────────────────────────────
load_dotenv()


# ── Helper functions (private) ───────────────────────────────────────────────


def _parse_int(raw: str | None, default: int) -> int:
    """Parse *raw* as a non-negative int, falling back to *default*.

    Empty values, non-numeric strings and negative numbers all resolve to
    *default*.
    """
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value >= 0 else default


def _parse_float(raw: str | None, default: float) -> float:
    """Parse *raw* as a non-negative float, falling back to *default*."""
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        return default
    return value if value >= 0 else default


def _parse_log_level(raw: str | None, default: int = logging.INFO) -> int:
    """Map a level name (``"DEBUG"``, ``"warning"``…) or number to a level."""
    if not raw:
        return default
    raw = raw.strip()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


# ── Public constants ─────────────────────────────────────────────────────────

BOT_TOKEN: str | None = os.environ.get("BOT_TOKEN") or None
API_HOST: str = os.environ.get("TELEKIT_API_HOST") or "api.telegram.org"

# getUpdates tuning
POLL_LIMIT: int = _parse_int(os.environ.get("TELEKIT_POLL_LIMIT"), 100)
LONG_POLL_TIMEOUT: int = _parse_int(os.environ.get("TELEKIT_LONG_POLL_TIMEOUT"), 60)
RETRY_POLL_TIMEOUT: int = _parse_int(os.environ.get("TELEKIT_RETRY_POLL_TIMEOUT"), 10)
RETRY_DELAY: float = _parse_float(os.environ.get("TELEKIT_RETRY_DELAY"), 0.0)

# Seconds added on top of the long-poll timeout for the HTTP read timeout,
# and the plain timeout for every other call.
REQUEST_TIMEOUT: int = _parse_int(os.environ.get("TELEKIT_REQUEST_TIMEOUT"), 10)

LOG_LEVEL: int = _parse_log_level(os.environ.get("TELEKIT_LOG_LEVEL"))
LOG_FILE: str | None = os.environ.get("TELEKIT_LOG_FILE") or None
