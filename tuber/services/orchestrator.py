"""
Step orchestrator for file downloads.

Runs the requested file artifacts one at a time in the fixed order
video -> audio -> subtitles, exposing the current status text so any display
loop (a spinner, a log line, a test) can follow along. The first failing step
ends the run; files written by earlier steps are left in place.

States: idle -> running(i) -> running(i+1) | completed | failed.
"""

import logging
from typing import Callable, List, Optional, Union

from tuber.exceptions import StepExecutionError
from tuber.models.schemas import (
    Artifact,
    ArtifactRequest,
    DownloadStep,
    OrchestratorState,
    OutputTarget,
)
from tuber.services.runner import ExternalRunner
from tuber.utils.filename_utils import build_output_pattern
from tuber.utils.subtitle_utils import convert_subtitles_in_dir


DONE_STATUS = "Done!"


class StepOrchestrator:
    def __init__(
        self,
        url: str,
        request: ArtifactRequest,
        target: OutputTarget,
        runner: ExternalRunner,
        subtitle_lang: Optional[str] = "en",
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ) -> None:
        self.url = url
        self.target = target
        self.runner = runner
        self.subtitle_lang = subtitle_lang
        self.logger = logger or logging.getLogger("tuber")

        artifacts = request.file_artifacts()
        self.steps: List[DownloadStep] = [
            DownloadStep(artifact=artifact, position=i, total=len(artifacts))
            for i, artifact in enumerate(artifacts, start=1)
        ]
        self.step_index = 0
        self.state = OrchestratorState.IDLE
        self.error: Optional[StepExecutionError] = None
        self.transcripts: List[str] = []

    @property
    def current_step(self) -> Optional[DownloadStep]:
        if self.step_index >= len(self.steps):
            return None
        return self.steps[self.step_index]

    @property
    def finished(self) -> bool:
        return self.state.is_terminal

    @property
    def status_text(self) -> str:
        step = self.current_step
        if self.state is OrchestratorState.COMPLETED or step is None:
            return DONE_STATUS
        return step.status_text

    def run_next_step(self) -> OrchestratorState:
        """Execute the current step and advance. No-op once terminal."""
        if self.finished:
            return self.state

        step = self.current_step
        if step is None:
            self.state = OrchestratorState.COMPLETED
            return self.state

        self.state = OrchestratorState.RUNNING
        self.logger.info(step.status_text)
        try:
            self._execute(step.artifact)
        except Exception as e:
            self.error = StepExecutionError(step.artifact, e)
            self.state = OrchestratorState.FAILED
            self.logger.error(str(self.error))
            return self.state

        self.logger.info(f"{step.artifact.label} finished")
        self.step_index += 1
        if self.step_index >= len(self.steps):
            self.state = OrchestratorState.COMPLETED
        return self.state

    def run(self, on_status: Optional[Callable[[str], None]] = None) -> None:
        """
        Run every step to completion.

        on_status receives the status text before each step starts.
        Raises the StepExecutionError of the failing step.
        """
        while not self.finished:
            if on_status and self.current_step is not None:
                on_status(self.status_text)
            self.run_next_step()

        if self.error is not None:
            raise self.error

    def _execute(self, artifact: Artifact) -> None:
        self.runner.fetch_artifact(artifact, self.url, build_output_pattern(self.target))
        if artifact is not Artifact.SUBTITLES:
            return
        try:
            self.transcripts = convert_subtitles_in_dir(
                self.target.directory,
                lang=self.subtitle_lang,
                logger=self.logger,
            )
        except OSError as e:
            self.logger.warning(f"Could not scan {self.target.directory} for subtitles: {e}")
