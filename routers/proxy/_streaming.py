"""Audio stream endpoint: /stream relays yt-dlp stdout to the client."""

import logging
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, StreamingResponse

from routers.proxy._session import StreamSession
from settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["proxy"])


@router.get("/stream")
async def stream_audio(url: Optional[str] = None, format: Optional[str] = None):
    """
    Stream the best audio of a source URL, transcoded by yt-dlp.

    Args:
        url: Source page URL (http or https)
        format: Audio format passed to yt-dlp --audio-format (default mp3)
    """
    s = get_settings()
    session = StreamSession(
        url,
        format or s.default_audio_format,
        chunk_size=s.stream_chunk_size,
        kill_on_disconnect=s.kill_on_disconnect,
    )

    try:
        session.validate(s.allowed_audio_formats if s.restrict_audio_formats else None)
    except ValueError as e:
        logger.warning(f"[Stream] Rejected request: {e} (url={url!r}, format={format!r})")
        return PlainTextResponse(str(e), status_code=400)

    logger.info(f"[Stream] Request accepted: url={url}, format={session.audio_format}")

    # Headers are committed before yt-dlp starts, so a spawn failure still yields 200
    return StreamingResponse(
        session.relay(),
        media_type="audio/mpeg",
        headers={"Cache-Control": "no-cache"},
    )
