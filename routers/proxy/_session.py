"""Per-request stream lifecycle: validate, spawn yt-dlp, relay stdout."""

import asyncio
import codecs
import logging
import re
from enum import Enum
from typing import AsyncIterator, Iterable, Optional

from ytdlp_wrapper import sanitize_audio_format, spawn_audio_stream, validate_source_url

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024
STDERR_READ_SIZE = 4096


class StreamState(str, Enum):
    """Lifecycle of a single stream request."""

    VALIDATING = "validating"
    STREAMING = "streaming"
    FINISHED = "finished"


class StreamSession:
    """One /stream request and the single yt-dlp process behind it.

    The session moves validating -> streaming -> finished. It is finished
    exactly once, by whichever comes first: rejected input, spawn failure,
    child exit, or the client going away. Later finish attempts are no-ops.
    """

    def __init__(
        self,
        source_url: Optional[str],
        audio_format: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        kill_on_disconnect: bool = True,
    ):
        self.source_url = source_url
        self.audio_format = audio_format
        self.chunk_size = chunk_size
        self.kill_on_disconnect = kill_on_disconnect

        self.state = StreamState.VALIDATING
        self.finish_reason: Optional[str] = None
        self.process: Optional[asyncio.subprocess.Process] = None
        self.exit_code: Optional[int] = None
        self.bytes_sent = 0
        self._stderr_task: Optional[asyncio.Task] = None

    def validate(self, allowed_formats: Optional[Iterable[str]] = None) -> None:
        """Check the request and move to streaming.

        Args:
            allowed_formats: When given, the audio format must be one of these.

        Raises:
            ValueError: With the reason to report to the client. The session
                is finished and no process will be started.
        """
        if self.state is not StreamState.VALIDATING:
            raise RuntimeError(f"Cannot validate a session in state {self.state.value}")

        try:
            validate_source_url(self.source_url)
            if allowed_formats is not None:
                sanitize_audio_format(self.audio_format, allowed_formats)
        except ValueError:
            self.finish("rejected")
            raise

        self.state = StreamState.STREAMING

    def finish(self, reason: str) -> bool:
        """Move to finished. Returns False if the session was already finished."""
        if self.state is StreamState.FINISHED:
            return False
        self.state = StreamState.FINISHED
        self.finish_reason = reason
        logger.info(f"[Stream] Finished ({reason}): {self.bytes_sent} bytes sent for {self.source_url}")
        return True

    async def relay(self) -> AsyncIterator[bytes]:
        """Spawn yt-dlp and yield its stdout as it arrives.

        Ends when stdout ends. A spawn failure ends the stream with no bytes.
        """
        if self.state is StreamState.FINISHED:
            return
        if self.state is not StreamState.STREAMING:
            raise RuntimeError("Session must be validated before relaying")

        try:
            self.process = await spawn_audio_stream(self.source_url, self.audio_format)
        except OSError as e:
            logger.error(f"[Stream] Failed to start yt-dlp: {e}")
            self.finish("spawn_error")
            return

        self._stderr_task = asyncio.create_task(self._log_stderr())
        try:
            while True:
                chunk = await self.process.stdout.read(self.chunk_size)
                if not chunk:
                    break
                self.bytes_sent += len(chunk)
                yield chunk

            self.exit_code = await self.process.wait()
            await self._stderr_task

            if self.exit_code == 0:
                logger.info(f"[Stream] yt-dlp exited with code 0 for {self.source_url}")
            else:
                logger.error(f"[Stream] yt-dlp exited with code {self.exit_code} for {self.source_url}")
            self.finish("exit")
        finally:
            # Only reached unfinished when the consumer stopped early
            if self.finish("disconnect"):
                await self._abort()

    async def _abort(self) -> None:
        """Stop the child process and stderr reader after an early disconnect."""
        if self._stderr_task is not None and not self._stderr_task.done():
            self._stderr_task.cancel()

        if self.process is None or self.process.returncode is not None:
            return

        if not self.kill_on_disconnect:
            logger.warning(f"[Stream] Client disconnected, leaving yt-dlp running for {self.source_url}")
            return

        try:
            self.process.kill()
        except ProcessLookupError:
            pass
        except OSError as e:
            logger.warning(f"[Stream] Failed to kill yt-dlp for {self.source_url}: {e}")
            return

        self.exit_code = await self.process.wait()
        logger.info(f"[Stream] Client disconnected, killed yt-dlp for {self.source_url}")

    async def _log_stderr(self) -> None:
        """Drain yt-dlp stderr into the server log, one line at a time.

        Progress output is terminated by carriage returns, so both CR and LF
        end a line. Partial lines and split UTF-8 sequences are carried
        over to the next read.
        """
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        pending = ""
        while True:
            data = await self.process.stderr.read(STDERR_READ_SIZE)
            if not data:
                break
            lines = re.split(r"[\r\n]", pending + decoder.decode(data))
            pending = lines.pop()
            for line in lines:
                self._log_stderr_line(line)

        self._log_stderr_line(pending + decoder.decode(b"", final=True))

    def _log_stderr_line(self, line: str) -> None:
        line = line.strip()
        if line:
            logger.info(f"[yt-dlp] {line}")
