"""
Summary flow.

Fetches captions into a scratch directory, normalizes them and pipes the
transcript to the summarizer. Independent of the step orchestrator: a failure
here never touches file artifacts that were already written.
"""

import logging
import os
import tempfile
from typing import Callable, Optional, Union

from tuber.exceptions import SummaryError
from tuber.models.schemas import Artifact
from tuber.services.runner import ExternalRunner
from tuber.utils.filename_utils import EXT_PLACEHOLDER, TITLE_PLACEHOLDER
from tuber.utils.subtitle_utils import find_subtitle_files, normalize_vtt_file


SCRATCH_PREFIX = "tuber-summary-"


def fetch_transcript(
    url: str,
    runner: ExternalRunner,
    logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
) -> str:
    """Download captions to a fresh scratch directory and return the transcript."""
    logger = logger or logging.getLogger("tuber")

    # Removed on exit, success or failure
    with tempfile.TemporaryDirectory(prefix=SCRATCH_PREFIX) as tmp_dir:
        pattern = os.path.join(tmp_dir, f"{TITLE_PLACEHOLDER}.{EXT_PLACEHOLDER}")
        logger.info(f"Fetching subtitles for summary into {tmp_dir}")
        try:
            runner.fetch_artifact(Artifact.SUBTITLES, url, pattern, quiet=False)
        except Exception as e:
            raise SummaryError(f"failed to download subtitles: {e}") from e

        vtt_files = find_subtitle_files(tmp_dir)
        if not vtt_files:
            raise SummaryError("no subtitles found for this video")

        try:
            transcript = normalize_vtt_file(vtt_files[0])
        except OSError as e:
            raise SummaryError(f"failed to extract text: {e}") from e

    if not transcript:
        raise SummaryError("no subtitles found for this video")
    return transcript


def summarize_video(
    url: str,
    prompt: str,
    runner: ExternalRunner,
    logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    on_status: Optional[Callable[[str], None]] = None,
) -> None:
    """
    Summarize the captions of url with prompt.

    The summary is written to stdout by the summarizer itself; on_status gets
    progress messages meant for stderr.

    Raises:
        SummaryError: no captions, fetch failure or summarizer failure
    """
    logger = logger or logging.getLogger("tuber")
    if on_status:
        on_status("Fetching subtitles for summary...")
    transcript = fetch_transcript(url, runner, logger)

    logger.info(f"Generating summary from {len(transcript.splitlines())} transcript lines")
    if on_status:
        on_status("Generating summary...")
    try:
        runner.summarize(transcript, prompt)
    except Exception as e:
        raise SummaryError(f"summarizer failed: {e}") from e
