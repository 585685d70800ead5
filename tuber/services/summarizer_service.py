"""
Summarizer service module.

Runs the summarization CLI as `<binary> -p <prompt>` with the transcript on
standard input. The summary is written straight to the program's stdout so the
operator can capture or pipe it.
"""

import shutil
import subprocess
from typing import IO, Optional

from tuber.config import get_settings
from tuber.exceptions import ExternalToolError


def is_summarizer_available(binary: Optional[str] = None) -> bool:
    """Check whether the summarization CLI can be found."""
    return shutil.which(binary or get_settings().summarizer_binary) is not None


def run_summarizer(
    text: str,
    prompt: str,
    binary: Optional[str] = None,
    stdout: Optional[IO] = None,
) -> None:
    """
    Summarize text with the configured CLI.

    Args:
        text: Transcript piped to the summarizer's stdin
        prompt: Prompt passed with -p
        binary: Executable to run. Defaults to the configured SUMMARIZER_BINARY.
        stdout: Where the summary goes. None inherits the program's stdout.

    Raises:
        ExternalToolError: the summarizer could not be started or exited non-zero
    """
    binary = binary or get_settings().summarizer_binary
    try:
        result = subprocess.run(
            [binary, "-p", prompt],
            input=text,
            text=True,
            encoding="utf-8",
            errors="replace",
            stdout=stdout,
        )
    except OSError as e:
        raise ExternalToolError(binary, 1, str(e)) from e

    if result.returncode != 0:
        raise ExternalToolError(binary, result.returncode)
