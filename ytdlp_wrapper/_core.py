"""Core yt-dlp execution: audio stream spawning and version probing."""

import asyncio
import logging
import shlex
from typing import List, Optional

from settings import get_settings
from ytdlp_wrapper._sanitize import YtDlpError, validate_source_url

logger = logging.getLogger(__name__)


def build_audio_stream_args(url: str, audio_format: str) -> List[str]:
    """Build yt-dlp arguments that write the best audio, transcoded, to stdout.

    Security: the URL is placed after '--' so it can never be parsed as a flag.
    """
    return [
        "-o",
        "-",
        "-f",
        "bestaudio",
        "--extract-audio",
        "--audio-format",
        audio_format,
        "--no-playlist",
        "--",
        url,
    ]


async def spawn_audio_stream(url: str, audio_format: str) -> asyncio.subprocess.Process:
    """Start yt-dlp for an audio stream with stdout and stderr piped.

    Raises:
        ValueError: If the URL is not an http/https URL
        OSError: If the executable cannot be started
    """
    validate_source_url(url)

    s = get_settings()
    cmd = [s.ytdlp_path, *build_audio_stream_args(url, audio_format)]
    logger.info(f"[Stream] Starting yt-dlp: {shlex.join(cmd)}")

    return await asyncio.create_subprocess_exec(
        *cmd, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE
    )


async def get_ytdlp_version(timeout: Optional[int] = 5) -> str:
    """Return the installed yt-dlp version string.

    Raises:
        YtDlpError: If yt-dlp cannot be run or exits with an error
    """
    s = get_settings()
    try:
        proc = await asyncio.create_subprocess_exec(
            s.ytdlp_path, "--version", stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE
        )
    except OSError as e:
        raise YtDlpError(f"yt-dlp not available: {e}")

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        raise YtDlpError(f"yt-dlp timed out after {timeout} seconds")

    if proc.returncode != 0:
        error_msg = stderr.decode().strip() if stderr else "Unknown error"
        raise YtDlpError(f"yt-dlp failed: {error_msg}")

    return stdout.decode().strip().split("\n")[0]
