"""Cleanup of raw AppleScript output into usable filesystem paths."""

from __future__ import annotations

import re
from urllib.parse import unquote, urlsplit

MISSING_VALUE = "missing value"

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def strict_unquote(value: str) -> str:
    """Percent-decode ``value``, raising ``ValueError`` on malformed escapes or invalid UTF-8."""

    if _MALFORMED_ESCAPE.search(value):
        raise ValueError(f"Malformed percent-escape in {value!r}")
    return unquote(value, errors="strict")


def normalize_result(raw: str) -> str:
    """Turn raw script output into a path, or ``""`` when nothing usable came back.

    ``file://`` URLs are decoded to their filesystem path; anything else is
    returned trimmed but otherwise untouched.
    """

    trimmed = (raw or "").strip()
    if not trimmed or trimmed == MISSING_VALUE:
        return ""
    if trimmed.startswith("file://"):
        try:
            return strict_unquote(urlsplit(trimmed).path)
        except ValueError:
            return trimmed
    return trimmed


def is_probably_url(value: str) -> bool:
    lower = value.lower()
    return (
        lower.startswith("http://")
        or lower.startswith("https://")
        or "http:" in lower
        or "https:" in lower
    )
