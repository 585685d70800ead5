"""
External runner interface.

The orchestration and summary code only talk to yt-dlp and the summarizer
through ExternalRunner, so tests can inject a fake runner instead of spawning
processes.
"""

from abc import ABC, abstractmethod
from typing import Optional

from tuber.config import Settings, get_settings
from tuber.models.schemas import Artifact
from tuber.services import summarizer_service, ytdlp_service


class ExternalRunner(ABC):
    """Narrow contract over the fetch tool and the summarization tool."""

    @abstractmethod
    def fetch_title(self, url: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def fetch_artifact(
        self,
        artifact: Artifact,
        url: str,
        output_pattern: str,
        quiet: bool = True,
    ) -> None:
        """Download one artifact; raise ExternalToolError on failure."""
        raise NotImplementedError

    @abstractmethod
    def summarize(self, text: str, prompt: str) -> None:
        """Pipe text to the summarizer; the summary goes to stdout."""
        raise NotImplementedError

    @abstractmethod
    def summarizer_available(self) -> bool:
        raise NotImplementedError


class SubprocessRunner(ExternalRunner):
    """ExternalRunner backed by the yt-dlp and summarizer executables."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    def fetch_title(self, url: str) -> str:
        return ytdlp_service.get_video_title(
            url,
            binary=self.settings.ytdlp_binary,
            timeout=self.settings.ytdlp_timeout,
        )

    def fetch_artifact(
        self,
        artifact: Artifact,
        url: str,
        output_pattern: str,
        quiet: bool = True,
    ) -> None:
        ytdlp_service.download_artifact(
            artifact,
            output_pattern,
            url,
            lang=self.settings.subtitle_lang,
            quiet=quiet,
            binary=self.settings.ytdlp_binary,
            timeout=self.settings.ytdlp_timeout,
        )

    def summarize(self, text: str, prompt: str) -> None:
        summarizer_service.run_summarizer(text, prompt, binary=self.settings.summarizer_binary)

    def summarizer_available(self) -> bool:
        return summarizer_service.is_summarizer_available(self.settings.summarizer_binary)
