"""
Pydantic models for download requests and run state.

This module contains the value types passed between the CLI, the interactive
selector and the download services. Request and target models are frozen:
they are built once per invocation and never mutated afterwards.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


FORBIDDEN_FILENAME_CHARS = '/\\:*?"<>|'


class Artifact(str, Enum):
    """One kind of deliverable produced per run."""
    VIDEO = "video"
    AUDIO = "audio"
    SUBTITLES = "subtitles"
    SUMMARY = "summary"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def extension(self) -> str:
        """File extension of the artifact on disk ('' for summary, which goes to stdout)."""
        return ARTIFACT_EXTENSIONS[self]

    @property
    def is_file(self) -> bool:
        return self is not Artifact.SUMMARY


ARTIFACT_EXTENSIONS = {
    Artifact.VIDEO: ".mp4",
    Artifact.AUDIO: ".mp3",
    Artifact.SUBTITLES: ".txt",
    Artifact.SUMMARY: "",
}

# Fixed execution order, independent of selection order
FILE_ARTIFACT_ORDER = (Artifact.VIDEO, Artifact.AUDIO, Artifact.SUBTITLES)


class ArtifactRequest(BaseModel):
    """Set of requested artifacts plus an optional custom summary prompt."""
    model_config = ConfigDict(frozen=True)

    video: bool = Field(False, description="Download best-quality video merged to mp4")
    audio: bool = Field(False, description="Extract audio to mp3")
    subtitles: bool = Field(False, description="Download captions as a deduplicated .txt transcript")
    summary: bool = Field(False, description="Pipe the transcript to the summarizer")
    prompt: Optional[str] = Field(None, description="Custom summary prompt")

    @classmethod
    def from_artifacts(cls, artifacts, prompt: Optional[str] = None) -> "ArtifactRequest":
        selected = {Artifact(a) for a in artifacts}
        return cls(
            video=Artifact.VIDEO in selected,
            audio=Artifact.AUDIO in selected,
            subtitles=Artifact.SUBTITLES in selected,
            summary=Artifact.SUMMARY in selected,
            prompt=prompt,
        )

    def is_requested(self, artifact: Artifact) -> bool:
        return getattr(self, artifact.value)

    @property
    def any_selected(self) -> bool:
        return self.video or self.audio or self.subtitles or self.summary

    def file_artifacts(self) -> List[Artifact]:
        """Requested file artifacts in execution order (video, audio, subtitles)."""
        return [a for a in FILE_ARTIFACT_ORDER if self.is_requested(a)]

    def describe(self) -> str:
        parts = [a.label for a in Artifact if self.is_requested(a)]
        return " + ".join(parts) if parts else "Nothing"

    def effective_prompt(self, default: str) -> str:
        return self.prompt or default


class OutputTarget(BaseModel):
    """
    Where artifacts are written: a directory plus an optional stem.

    Without a stem the fetch tool names files after the video title.
    """
    model_config = ConfigDict(frozen=True)

    directory: str = Field(".", description="Output directory")
    stem: Optional[str] = Field(None, description="Sanitized file name without extension")

    @field_validator("stem")
    @classmethod
    def _stem_is_single_segment(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not value.strip():
            raise ValueError("stem must not be empty")
        bad = sorted({ch for ch in value if ch in FORBIDDEN_FILENAME_CHARS})
        if bad:
            raise ValueError(f"stem contains forbidden characters: {''.join(bad)}")
        return value


class DownloadStep(BaseModel):
    """One ordered unit of work; position and total exist for status display only."""
    model_config = ConfigDict(frozen=True)

    artifact: Artifact
    position: int = Field(..., ge=1)
    total: int = Field(..., ge=1)

    @property
    def status_text(self) -> str:
        desc = f"Downloading {self.artifact.value}"
        if self.total > 1:
            return f"{desc} ({self.position}/{self.total})..."
        return f"{desc}..."


class OrchestratorState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (OrchestratorState.COMPLETED, OrchestratorState.FAILED)
