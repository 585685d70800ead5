"""
Error taxonomy for tuber.

Every error that should end a run with a readable message derives from
TuberError. The CLI prints the message and exits non-zero; nothing is retried.
Post-processing problems (a caption file that cannot be converted) are logged
as warnings instead and never raised.
"""

from typing import Optional


class TuberError(RuntimeError):
    """Base class for errors surfaced to the operator."""


class ConfigurationError(TuberError):
    """A required external tool is missing or misconfigured."""


class InvalidRequestError(TuberError):
    """The requested artifact set cannot be acted on."""


class ExternalToolError(TuberError):
    """An external tool exited non-zero or could not be executed."""

    def __init__(self, tool: str, returncode: int, stderr: Optional[str] = None):
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr or ""
        message = f"{tool} exited with status {returncode}"
        detail = self.stderr.strip()
        if detail:
            # Last line is usually the actual yt-dlp "ERROR: ..." message
            message += f": {detail.splitlines()[-1][:300]}"
        super().__init__(message)


class StepExecutionError(TuberError):
    """A download step failed; no later step of the same run is executed."""

    def __init__(self, artifact, cause: Exception):
        self.artifact = artifact
        self.cause = cause
        super().__init__(f"{artifact.value} download failed: {cause}")


class SummaryError(TuberError):
    """The summary flow failed. File artifacts already written are unaffected."""
