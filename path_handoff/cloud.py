"""Map SharePoint/OneDrive sharing URLs back onto locally synced files."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Sequence
from urllib.parse import urlsplit

from .config import HandoffConfig
from .normalize import strict_unquote

logger = logging.getLogger(__name__)

_DATE_PATTERN = re.compile(r"\d{4}\.\d{2}\.\d{2}")
_DIGIT_PATTERN = re.compile(r"\d")
_MAX_DECODE_PASSES = 2


def decode_segment(value: str) -> str:
    """Decode one URL path segment, undoing at most two layers of percent-encoding."""

    decoded = value.replace("+", " ")
    for _ in range(_MAX_DECODE_PASSES):
        try:
            candidate = strict_unquote(decoded)
        except ValueError:
            break
        if candidate == decoded:
            break
        decoded = candidate
    return decoded


def relative_segments(url: str, *, host_marker: str = "sharepoint.com") -> Optional[List[str]]:
    """Return the path segments below the ``Documents`` library, or ``None``.

    ``None`` means the URL is not a cloud document URL this module understands.
    """

    try:
        parsed = urlsplit(url)
        hostname = parsed.hostname or ""
    except ValueError:
        return None
    if host_marker not in hostname:
        return None

    segments = [decode_segment(part) for part in parsed.path.split("/") if part]
    lowered = [segment.lower() for segment in segments]
    if "documents" not in lowered:
        return None
    relative = segments[lowered.index("documents") + 1 :]
    if relative and relative[0].lower() == "documents":
        relative = relative[1:]
    return relative


def _split_last(segments: Sequence[str], match: Optional[re.Match]) -> Optional[List[str]]:
    if match is None or match.start() <= 0:
        return None
    last = segments[-1]
    folder_part = last[: match.start()].strip()
    file_part = last[match.start() :].strip()
    if not folder_part or not file_part:
        return None
    return [*segments[:-1], folder_part, file_part]


def relative_variants(segments: Sequence[str]) -> List[List[str]]:
    """Candidate relative paths for ``segments``.

    Sharing URLs sometimes flatten ``Title/2024.03.15.docx`` into
    ``Title2024.03.15.docx``; when the last segment has a date (or failing
    that, any digit) after its first character, a split variant is added.
    """

    variants = [list(segments)]
    if not segments or not segments[-1]:
        return variants
    last = segments[-1]
    date_match = _DATE_PATTERN.search(last)
    if date_match is not None:
        split = _split_last(segments, date_match)
    else:
        split = _split_last(segments, _DIGIT_PATTERN.search(last))
    if split is not None:
        variants.append(split)
    return variants


def discover_sync_roots(config: HandoffConfig | None = None) -> List[Path]:
    """List the provider folders under the cloud storage container. Never raises."""

    config = config or HandoffConfig.from_env()
    container = Path(config.cloud_storage_dir).expanduser()
    try:
        with os.scandir(container) as entries:
            roots = [
                Path(entry.path)
                for entry in entries
                if entry.name.startswith(config.provider_prefix) and entry.is_dir()
            ]
    except OSError as exc:
        logger.debug("Cloud storage container %s is not readable: %s", container, exc)
        return []
    return sorted(roots)


def _is_file(candidate: Path) -> bool:
    try:
        return candidate.is_file()
    except (OSError, ValueError):
        return False


def map_to_local(url: str, config: HandoffConfig | None = None) -> Optional[Path]:
    """Find the locally synced file behind a cloud document URL.

    Returns ``None`` when the URL is not a recognised cloud URL or when no
    synced copy exists. This is a best-effort search; it never raises.
    """

    config = config or HandoffConfig.from_env()
    segments = relative_segments(url, host_marker=config.cloud_host_marker)
    if segments is None:
        logger.debug("Not a mappable cloud URL: %s", url)
        return None
    variants = relative_variants(segments)
    for root in discover_sync_roots(config):
        for variant in variants:
            for candidate in (root.joinpath("Documents", *variant), root.joinpath(*variant)):
                if _is_file(candidate):
                    logger.debug("Mapped %s to %s", url, candidate)
                    return candidate
    logger.debug("No local match for %s", url)
    return None
