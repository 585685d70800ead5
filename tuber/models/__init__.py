"""
Models package for download requests and run state.

This package contains the Pydantic models shared by the CLI, the
interactive selector and the download services.
"""

from .schemas import (
    Artifact,
    ArtifactRequest,
    OutputTarget,
    DownloadStep,
    OrchestratorState,
    FILE_ARTIFACT_ORDER,
    FORBIDDEN_FILENAME_CHARS,
)

__all__ = [
    "Artifact",
    "ArtifactRequest",
    "OutputTarget",
    "DownloadStep",
    "OrchestratorState",
    "FILE_ARTIFACT_ORDER",
    "FORBIDDEN_FILENAME_CHARS",
]
