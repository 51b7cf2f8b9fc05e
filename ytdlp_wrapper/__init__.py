"""Async wrapper for yt-dlp subprocess execution."""

from ytdlp_wrapper._core import (
    build_audio_stream_args,
    get_ytdlp_version,
    spawn_audio_stream,
)
from ytdlp_wrapper._sanitize import (
    YtDlpError,
    is_valid_url,
    sanitize_audio_format,
    validate_source_url,
)

__all__ = [
    # _sanitize
    "YtDlpError",
    "validate_source_url",
    "is_valid_url",
    "sanitize_audio_format",
    # _core
    "build_audio_stream_args",
    "spawn_audio_stream",
    "get_ytdlp_version",
]
