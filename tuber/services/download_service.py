"""
Download service module.

Entry point for one run: validates the request, drives the step orchestrator
for file artifacts and then the summary flow.
"""

import logging
from typing import Callable, Optional, Union

from tuber.config import DEFAULT_SUMMARY_PROMPT
from tuber.exceptions import ConfigurationError, InvalidRequestError
from tuber.models.schemas import ArtifactRequest, OutputTarget
from tuber.services.orchestrator import StepOrchestrator
from tuber.services.runner import ExternalRunner
from tuber.services.summary_service import summarize_video


def validate_request(request: ArtifactRequest, runner: ExternalRunner) -> None:
    """Reject a request before any external tool is invoked."""
    if not request.any_selected:
        raise InvalidRequestError("select at least one of video, audio, subtitles or summary")
    if request.summary and not runner.summarizer_available():
        raise ConfigurationError("summary requires the summarizer CLI, which was not found in PATH")


def run_download(
    url: str,
    request: ArtifactRequest,
    target: OutputTarget,
    runner: ExternalRunner,
    default_prompt: str = DEFAULT_SUMMARY_PROMPT,
    subtitle_lang: Optional[str] = "en",
    run_steps: Optional[Callable[[StepOrchestrator], None]] = None,
    logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    on_status: Optional[Callable[[str], None]] = None,
) -> StepOrchestrator:
    """
    Run every requested artifact for url.

    Args:
        url: Video URL
        request: Requested artifacts
        target: Output directory and stem
        runner: External tool runner
        default_prompt: Summary prompt when the request carries none
        subtitle_lang: Caption language suffix stripped from transcript names
        run_steps: Drives the orchestrator, e.g. under a spinner.
                   Defaults to StepOrchestrator.run with no display.
        logger: Logger or run logger adapter
        on_status: Receives summary progress messages

    Returns:
        The orchestrator after it reached a terminal state

    Raises:
        InvalidRequestError: nothing was requested
        ConfigurationError: summary requested without a summarizer
        StepExecutionError: a file download failed
        SummaryError: the summary flow failed
    """
    logger = logger or logging.getLogger("tuber")
    validate_request(request, runner)

    orchestrator = StepOrchestrator(
        url,
        request,
        target,
        runner,
        subtitle_lang=subtitle_lang,
        logger=logger,
    )
    if orchestrator.steps:
        logger.info(f"Downloading {request.describe()} from {url}")
        if run_steps is not None:
            run_steps(orchestrator)
        else:
            orchestrator.run()
        if orchestrator.error is not None:
            raise orchestrator.error

    if request.summary:
        summarize_video(
            url,
            request.effective_prompt(default_prompt),
            runner,
            logger,
            on_status=on_status,
        )

    return orchestrator
