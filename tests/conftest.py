"""
Pytest configuration and shared fixtures for test suite.

This module provides:
- A fake ExternalRunner that records calls instead of spawning processes
- Sample WebVTT content in the shape yt-dlp writes for auto captions
- Environment isolation for pydantic-settings
"""

import os
import pytest
from unittest.mock import patch

from tuber.config import get_settings
from tuber.exceptions import ExternalToolError
from tuber.models.schemas import Artifact
from tuber.services.runner import ExternalRunner


AUTO_CAPTIONS_VTT = """WEBVTT
Kind: captions
Language: en

00:00:00.000 --> 00:00:02.000 align:start position:0%

<00:00:00.400><c> we're</c><00:00:00.800><c> going</c><00:00:01.000><c> to</c><00:00:01.200><c> talk</c>

00:00:02.000 --> 00:00:02.010 align:start position:0%
we're going to talk


00:00:02.010 --> 00:00:04.000 align:start position:0%
we're going to talk
about<00:00:02.500><c> captions</c><00:00:03.000><c> today</c>

00:00:04.000 --> 00:00:04.010 align:start position:0%
about captions today

"""


class FakeRunner(ExternalRunner):
    """
    Records every call. Subtitle fetches write a .vtt where yt-dlp would.

    fail maps an artifact (or "title") to the exception it should raise.
    """

    def __init__(self, title="Test Video Title", vtt_content=AUTO_CAPTIONS_VTT,
                 summarizer=True, fail=None, summarize_error=None, lang="en"):
        self.title = title
        self.vtt_content = vtt_content
        self.summarizer = summarizer
        self.fail = fail or {}
        self.summarize_error = summarize_error
        self.lang = lang
        self.calls = []
        self.summaries = []

    def fetch_title(self, url):
        self.calls.append(("title", url))
        if "title" in self.fail:
            raise self.fail["title"]
        return self.title

    def fetch_artifact(self, artifact, url, output_pattern, quiet=True):
        self.calls.append((artifact, url, output_pattern))
        if artifact in self.fail:
            raise self.fail[artifact]
        if artifact is Artifact.SUBTITLES and self.vtt_content is not None:
            path = output_pattern.replace("%(title)s", self.title).replace("%(ext)s", f"{self.lang}.vtt")
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.vtt_content)

    def summarize(self, text, prompt):
        self.calls.append(("summarize", prompt))
        if self.summarize_error:
            raise self.summarize_error
        self.summaries.append((text, prompt))

    def summarizer_available(self):
        return self.summarizer

    @property
    def fetched(self):
        return [c[0] for c in self.calls if isinstance(c[0], Artifact)]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are lru_cached; reset around each test so env patches apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing."""
    with patch.dict(os.environ, {
        "YTDLP_BINARY": "yt-dlp-test",
        "SUMMARIZER_BINARY": "summarizer-test",
        "SUBTITLE_LANG": "en",
        "TUBER_LOG_LEVEL": "DEBUG",
    }):
        yield


@pytest.fixture
def auto_captions_vtt():
    return AUTO_CAPTIONS_VTT


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def make_runner():
    """Factory for FakeRunner with custom behaviour."""
    return FakeRunner


@pytest.fixture
def tool_error():
    """Build an ExternalToolError as yt-dlp would report it."""
    def _make(stderr="ERROR: [youtube] abc: Video unavailable", returncode=1):
        return ExternalToolError("yt-dlp", returncode, stderr)
    return _make


@pytest.fixture
def youtube_url():
    """Sample YouTube URL for testing."""
    return "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
