# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import hashlib
import re
import secrets
import string
import time
from typing import Any

# Suffix alphabet matches the base36 ids written by earlier versions
_BASE36 = string.digits + string.ascii_lowercase
ID_SUFFIX_LENGTH = 6

_WHITESPACE_RUN = re.compile(r"\s+")


# =============================================================================
# Time Utilities
# =============================================================================

def now_ms() -> int:
    """Current time in integer milliseconds since epoch."""
    return time.time_ns() // 1_000_000


# =============================================================================
# ID Utilities
# =============================================================================

def _to_base36(value: int, length: int) -> str:
    chars = []
    for _ in range(length):
        value, rem = divmod(value, 36)
        chars.append(_BASE36[rem])
    return "".join(reversed(chars))


def generate_review_id(timestamp_ms: int | None = None) -> str:
    """
    Generate a new review id: "<ms timestamp>-<6 random base36 chars>".

    Collisions are practically impossible (36^6 suffixes per millisecond)
    but not cryptographically excluded.

    Example:
        generate_review_id(1718000000000)  # "1718000000000-k3j9x2"
    """
    if timestamp_ms is None:
        timestamp_ms = now_ms()
    suffix = "".join(secrets.choice(_BASE36) for _ in range(ID_SUFFIX_LENGTH))
    return f"{timestamp_ms}-{suffix}"


def derive_legacy_id(record: dict[str, Any]) -> str:
    """
    Synthesize a stable id for a stored record that has none.

    The suffix is a digest of the record's content, so the same legacy
    record gets the same id on every load even though the backfill is
    never written back until the next save.
    """
    created_at = record.get("createdAt") or 0
    fingerprint = "\x1f".join(
        str(record.get(key, "")) for key in ("createdAt", "name", "text", "rating")
    )
    digest = hashlib.sha1(fingerprint.encode("utf-8")).digest()
    suffix = _to_base36(int.from_bytes(digest[:8], "big"), ID_SUFFIX_LENGTH)
    return f"{created_at}-{suffix}"


# =============================================================================
# Text Utilities
# =============================================================================

def normalize_text(raw: Any, max_len: int) -> str:
    """
    Normalize free text from a client.

    Non-string input becomes "". Leading/trailing whitespace is removed,
    internal runs collapse to one space, and the result is cut to max_len
    characters. Never raises.

    Example:
        normalize_text("  Ana   B ", 60)  # "Ana B"
    """
    if not isinstance(raw, str):
        return ""
    return _WHITESPACE_RUN.sub(" ", raw.strip())[:max_len]
