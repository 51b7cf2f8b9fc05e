"""Shared test fixtures for Wave Server tests."""

import os

# Add project root to path
import sys
from typing import List, Optional, Union
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


# =============================================================================
# Mock yt-dlp Subprocess Fixtures
# =============================================================================


class MockStream:
    """Mock asyncio.StreamReader returning pre-set chunks."""

    def __init__(self, chunks: Optional[List[bytes]] = None):
        self._chunks = list(chunks or [])

    async def read(self, n: int = -1) -> bytes:
        if not self._chunks:
            return b""
        chunk = self._chunks[0]
        if n < 0 or len(chunk) <= n:
            self._chunks.pop(0)
            return chunk
        self._chunks[0] = chunk[n:]
        return chunk[:n]


class MockProcess:
    """Mock asyncio subprocess for yt-dlp calls.

    ``returncode`` stays None until wait() is called, like a running process
    that has not been reaped yet. ``stderr`` may be a list of chunks to
    simulate output split across reads.
    """

    def __init__(
        self,
        stdout_chunks: Optional[List[bytes]] = None,
        stderr: Union[bytes, List[bytes]] = b"",
        returncode: int = 0,
    ):
        self.stdout = MockStream(stdout_chunks)
        if isinstance(stderr, bytes):
            stderr = [stderr] if stderr else []
        self.stderr = MockStream(stderr)
        self.returncode = None
        self._exit_code = returncode
        self.killed = False
        self.waited = False

    async def wait(self):
        self.waited = True
        self.returncode = self._exit_code
        return self.returncode

    async def communicate(self):
        stdout = b"".join(self.stdout._chunks)
        stderr = b"".join(self.stderr._chunks)
        self.returncode = self._exit_code
        return stdout, stderr

    def kill(self):
        self.killed = True
        self._exit_code = -9


@pytest.fixture
def mock_ytdlp_stream():
    """Patch create_subprocess_exec with a configurable MockProcess.

    Yields a helper with ``process`` (the MockProcess returned) and ``calls``
    (argument tuples of each spawn).
    """

    class Spawner:
        def __init__(self):
            self.process = MockProcess()
            self.calls = []

    spawner = Spawner()

    async def mock_subprocess(*args, **kwargs):
        spawner.calls.append(args)
        return spawner.process

    with patch("asyncio.create_subprocess_exec", side_effect=mock_subprocess):
        yield spawner


@pytest.fixture
def mock_ytdlp_missing():
    """Mock yt-dlp executable that cannot be started."""

    async def mock_subprocess(*args, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", args[0])

    with patch("asyncio.create_subprocess_exec", side_effect=mock_subprocess) as mock:
        yield mock


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def test_settings():
    """Override settings for tests."""
    from settings import Settings

    test_settings = Settings(
        ytdlp_path="yt-dlp",
        default_audio_format="mp3",
        stream_chunk_size=1024,
    )

    with patch("settings._cached_settings", test_settings):
        yield test_settings


# =============================================================================
# FastAPI TestClient Fixtures
# =============================================================================


@pytest.fixture
def test_client(test_settings):
    """Client for the real app."""
    from server import app

    with TestClient(app) as client:
        yield client


# =============================================================================
# HUD Fixtures
# =============================================================================


class RecordingBridge:
    """Host bridge double that records emits and lets tests push events."""

    def __init__(self):
        self.handlers = {}
        self.emitted = []

    def on_event(self, name, handler):
        self.handlers.setdefault(name, []).append(handler)

    def emit(self, name, payload=None):
        self.emitted.append((name, payload))

    def trigger(self, name, payload):
        for handler in self.handlers.get(name, []):
            handler(payload)

    def count(self, name):
        return sum(1 for emitted_name, _ in self.emitted if emitted_name == name)


@pytest.fixture
def recording_bridge():
    return RecordingBridge()


@pytest.fixture
def element_target():
    from hud import ElementRenderTarget

    return ElementRenderTarget()
