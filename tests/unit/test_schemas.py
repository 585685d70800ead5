"""
Unit tests for request and step models.

This module tests:
- ArtifactRequest ordering, description and prompt handling
- DownloadStep status text
"""

import pytest

from tuber.models.schemas import Artifact, ArtifactRequest, DownloadStep, OrchestratorState


class TestArtifactRequest:
    """Test the artifact set."""

    def test_file_artifacts_fixed_order(self):
        """Test selection order never changes execution order."""
        request = ArtifactRequest.from_artifacts([Artifact.SUBTITLES, Artifact.VIDEO])
        assert request.file_artifacts() == [Artifact.VIDEO, Artifact.SUBTITLES]

    def test_summary_is_not_a_file_step(self):
        """Test the summary never appears among file steps."""
        request = ArtifactRequest(audio=True, summary=True)
        assert request.file_artifacts() == [Artifact.AUDIO]

    def test_any_selected(self):
        assert not ArtifactRequest().any_selected
        assert ArtifactRequest(summary=True).any_selected

    def test_describe(self):
        """Test the human readable selection."""
        assert ArtifactRequest().describe() == "Nothing"
        assert ArtifactRequest(video=True, audio=True).describe() == "Video + Audio"
        assert ArtifactRequest(subtitles=True, summary=True).describe() == "Subtitles + Summary"

    def test_effective_prompt(self):
        """Test the default prompt applies only without a custom one."""
        assert ArtifactRequest(summary=True).effective_prompt("default") == "default"
        assert ArtifactRequest(summary=True, prompt="custom").effective_prompt("default") == "custom"
        assert ArtifactRequest(summary=True, prompt="").effective_prompt("default") == "default"

    def test_from_artifacts_accepts_values(self):
        """Test plain strings are accepted."""
        request = ArtifactRequest.from_artifacts(["audio", "summary"], prompt="p")
        assert request.audio and request.summary and request.prompt == "p"

    def test_request_is_frozen(self):
        request = ArtifactRequest(video=True)
        with pytest.raises(Exception):
            request.video = False


class TestDownloadStep:
    """Test status text derivation."""

    def test_status_with_counter(self):
        step = DownloadStep(artifact=Artifact.AUDIO, position=2, total=3)
        assert step.status_text == "Downloading audio (2/3)..."

    def test_status_single_step(self):
        step = DownloadStep(artifact=Artifact.SUBTITLES, position=1, total=1)
        assert step.status_text == "Downloading subtitles..."

    def test_extensions(self):
        assert Artifact.VIDEO.extension == ".mp4"
        assert Artifact.AUDIO.extension == ".mp3"
        assert Artifact.SUBTITLES.extension == ".txt"
        assert Artifact.SUMMARY.extension == ""

    def test_terminal_states(self):
        assert OrchestratorState.COMPLETED.is_terminal
        assert OrchestratorState.FAILED.is_terminal
        assert not OrchestratorState.RUNNING.is_terminal
        assert not OrchestratorState.IDLE.is_terminal
