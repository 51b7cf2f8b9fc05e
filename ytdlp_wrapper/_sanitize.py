"""YtDlpError, source URL and audio format validation."""

import logging
import re
import urllib.parse
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class YtDlpError(Exception):
    """Error from yt-dlp execution."""

    pass


def validate_source_url(url: Optional[str]) -> str:
    """Validate a stream source URL and return it unchanged.

    Raises:
        ValueError: with a short user-facing reason ("Missing url parameter",
            "Invalid url" or "Invalid protocol")
    """
    if not url:
        raise ValueError("Missing url parameter")

    # A leading '-' would be read as a flag by yt-dlp
    if url.startswith("-"):
        raise ValueError("Invalid url")

    try:
        parsed = urllib.parse.urlsplit(url)
        # Accessing port validates the netloc (e.g. "http://host:abc" raises)
        parsed.port
    except ValueError:
        raise ValueError("Invalid url")

    if not parsed.scheme or not parsed.netloc:
        raise ValueError("Invalid url")

    if parsed.scheme.lower() not in ("http", "https"):
        raise ValueError("Invalid protocol")

    return url


def is_valid_url(url: str) -> bool:
    """Validate URL for extraction (basic security check).

    Rejects:
    - Non http/https schemes
    - URLs without a host
    - URLs starting with '-' (command injection prevention)
    """
    try:
        validate_source_url(url)
    except ValueError:
        return False
    return True


def sanitize_audio_format(audio_format: str, allowed: Iterable[str]) -> str:
    """Check an audio format against an allow-list.

    Raises:
        ValueError: If the format is empty, malformed, or not allowed
    """
    if not audio_format:
        raise ValueError("Invalid format")

    if not re.match(r"^[a-zA-Z0-9]{1,10}$", audio_format):
        raise ValueError("Invalid format")

    if audio_format.lower() not in {a.lower() for a in allowed}:
        logger.warning(f"Rejected audio format outside allow-list: {audio_format}")
        raise ValueError("Invalid format")

    return audio_format
