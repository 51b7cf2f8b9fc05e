"""Runtime settings management with environment overrides."""

import logging
import os
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_AUDIO_FORMATS = ["mp3", "aac", "m4a", "opus", "vorbis", "flac", "wav", "alac", "best"]


class Settings(BaseModel):
    """Runtime application settings."""

    # yt-dlp
    ytdlp_path: str = Field(default="yt-dlp")

    # Streaming
    default_audio_format: str = Field(default="mp3", min_length=1)
    stream_chunk_size: int = Field(default=64 * 1024, ge=1024, le=4 * 1024 * 1024)
    kill_on_disconnect: bool = Field(
        default=True,
        description="Kill the yt-dlp process when the client goes away before the stream ends.",
    )

    # Format passthrough
    restrict_audio_formats: bool = Field(
        default=False,
        description="Reject formats outside allowed_audio_formats. When disabled, format is passed to yt-dlp as-is.",
    )
    allowed_audio_formats: List[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_AUDIO_FORMATS))


# In-memory cached settings
_cached_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get current settings (cached in memory)."""
    global _cached_settings
    if _cached_settings is None:
        _cached_settings = load_settings()
    return _cached_settings


def _read_env_overrides() -> dict:
    """Collect settings overrides from environment variables (field name upper-cased)."""
    overrides = {}
    for name in Settings.model_fields:
        value = os.getenv(name.upper())
        if value is None or value == "":
            continue
        if name == "allowed_audio_formats":
            overrides[name] = [v.strip() for v in value.split(",") if v.strip()]
        else:
            overrides[name] = value
    return overrides


def load_settings() -> Settings:
    """Load settings from environment.

    Each override is validated on its own; an invalid variable is logged and
    falls back to its default without discarding the others.
    """
    valid = {}
    for name, value in _read_env_overrides().items():
        try:
            Settings(**{name: value})
        except ValidationError as e:
            logger.error(f"Ignoring invalid setting {name.upper()}={value!r}: {e.errors()[0]['msg']}")
            continue
        valid[name] = value
    return Settings(**valid)


def invalidate_cache() -> None:
    """Force reload settings on next access."""
    global _cached_settings
    _cached_settings = None
