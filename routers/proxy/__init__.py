"""Stream proxy endpoints for audio playback."""

from routers.proxy._session import StreamSession, StreamState
from routers.proxy._streaming import router

__all__ = [
    "router",
    "StreamSession",
    "StreamState",
]
