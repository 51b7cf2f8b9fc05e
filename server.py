"""Wave Server - yt-dlp backed audio stream proxy for Wave Radio."""

import logging
import platform
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

import config
from routers import proxy
from settings import get_settings
from ytdlp_wrapper import YtDlpError, get_ytdlp_version

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    s = get_settings()
    logger.info(f"Wave Radio Proxy listening on port {config.PORT} (yt-dlp: {s.ytdlp_path})")
    yield


app = FastAPI(
    title="Wave Server",
    description="Audio stream proxy for Wave Radio, powered by yt-dlp",
    version=VERSION,
    lifespan=lifespan,
)


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware based on environment settings.

    Security rules:
    - If specific origins are configured, use them with optional credentials
    - If CORS_ALLOW_ALL is true, allow all origins but DISABLE credentials
    - If neither is set, CORS is effectively disabled (no origins allowed)
    """
    origins: list[str] = []
    allow_credentials = False

    if config.CORS_ORIGINS:
        origins = [o.strip() for o in config.CORS_ORIGINS.split(",") if o.strip()]
        allow_credentials = config.CORS_ALLOW_CREDENTIALS
        logger.info(f"CORS configured with specific origins: {origins}, credentials: {allow_credentials}")
    elif config.CORS_ALLOW_ALL:
        # Wildcard + credentials is invalid CORS
        origins = ["*"]
        allow_credentials = False
        logger.warning("CORS configured to allow ALL origins (development mode). Credentials are DISABLED.")
    else:
        logger.info("CORS not configured - cross-origin requests will be blocked")
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["GET"],
        allow_headers=["*"],
    )


configure_cors(app)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(SecurityHeadersMiddleware)

app.include_router(proxy.router)


@app.get("/", response_class=PlainTextResponse)
async def index():
    """Informational message; not part of the streaming contract."""
    return "Wave Radio Proxy is running. Use /stream?url=..."


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/info")
async def info():
    """Server info with dependency versions."""
    s = get_settings()

    try:
        ytdlp_version = await get_ytdlp_version()
    except YtDlpError as e:
        logger.warning(f"Could not determine yt-dlp version: {e}")
        ytdlp_version = "not available"

    return {
        "name": "Wave Server",
        "version": VERSION,
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "dependencies": {
            "yt-dlp": ytdlp_version,
        },
        "config": {
            "ytdlp_path": s.ytdlp_path,
            "default_audio_format": s.default_audio_format,
            "stream_chunk_size": s.stream_chunk_size,
            "kill_on_disconnect": s.kill_on_disconnect,
            "restrict_audio_formats": s.restrict_audio_formats,
        },
    }


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("server:app", host=config.HOST, port=config.PORT, reload=config.DEBUG)
