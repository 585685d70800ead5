"""
YT-DLP service module.

Handles yt-dlp binary execution and the argument sets for each download mode.
Every invocation is blocking; there is no retry and no cancellation mid-step.
"""

import shutil
import subprocess
from typing import List, Optional, Tuple

from tuber.config import get_settings
from tuber.exceptions import ExternalToolError
from tuber.models.schemas import Artifact


VIDEO_FORMAT = "bestvideo[ext=mp4]+bestaudio[ext=m4a]/best[ext=mp4]/best"
QUIET_ARGS = ["-q", "--no-warnings"]


def is_ytdlp_available(binary: Optional[str] = None) -> bool:
    """Check whether the yt-dlp executable can be found."""
    return shutil.which(binary or get_settings().ytdlp_binary) is not None


def run_ytdlp_binary(
    args: List[str],
    binary: Optional[str] = None,
    timeout: Optional[int] = None,
) -> Tuple[str, str, int]:
    """
    Run yt-dlp with given arguments.

    Args:
        args: List of yt-dlp command arguments
        binary: Executable to run. Defaults to the configured YTDLP_BINARY.
        timeout: Command timeout in seconds (None waits indefinitely)

    Returns:
        Tuple of (stdout, stderr, return_code). A timeout or an executable
        that cannot be started is reported as return code 1.
    """
    cmd = [binary or get_settings().ytdlp_binary] + args

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout
        )
        return result.stdout, result.stderr, result.returncode

    except subprocess.TimeoutExpired:
        return "", "Command timed out", 1
    except OSError as e:
        return "", str(e), 1


def build_video_args(output_pattern: str, url: str, quiet: bool = True) -> List[str]:
    """Best mp4 video plus m4a audio, merged into a single mp4."""
    args = [
        "-f", VIDEO_FORMAT,
        "--merge-output-format", "mp4",
    ]
    if quiet:
        args += QUIET_ARGS
    return args + ["-o", output_pattern, url]


def build_audio_args(output_pattern: str, url: str, quiet: bool = True) -> List[str]:
    """Audio track extracted and converted to best-quality mp3."""
    args = [
        "-x",
        "--audio-format", "mp3",
        "--audio-quality", "0",
    ]
    if quiet:
        args += QUIET_ARGS
    return args + ["-o", output_pattern, url]


def build_subtitle_args(
    output_pattern: str,
    url: str,
    lang: str = "en",
    quiet: bool = True,
) -> List[str]:
    """Manual and auto-generated captions as VTT, no media download."""
    args = [
        "--write-subs",
        "--write-auto-subs",
        "--sub-lang", lang,
        "--sub-format", "vtt",
        "--skip-download",
    ]
    if quiet:
        args += QUIET_ARGS
    return args + ["-o", output_pattern, url]


def build_download_args(
    artifact: Artifact,
    output_pattern: str,
    url: str,
    lang: str = "en",
    quiet: bool = True,
) -> List[str]:
    if artifact is Artifact.VIDEO:
        return build_video_args(output_pattern, url, quiet)
    if artifact is Artifact.AUDIO:
        return build_audio_args(output_pattern, url, quiet)
    if artifact is Artifact.SUBTITLES:
        return build_subtitle_args(output_pattern, url, lang, quiet)
    raise ValueError(f"yt-dlp has no download mode for {artifact.value}")


def download_artifact(
    artifact: Artifact,
    output_pattern: str,
    url: str,
    lang: str = "en",
    quiet: bool = True,
    binary: Optional[str] = None,
    timeout: Optional[int] = None,
) -> str:
    """Run one yt-dlp download. Raises ExternalToolError on non-zero exit."""
    args = build_download_args(artifact, output_pattern, url, lang, quiet)
    stdout, stderr, returncode = run_ytdlp_binary(args, binary=binary, timeout=timeout)
    if returncode != 0:
        raise ExternalToolError("yt-dlp", returncode, stderr)
    return stdout


def get_video_title(
    url: str,
    binary: Optional[str] = None,
    timeout: Optional[int] = None,
) -> str:
    """Return the plain video title as printed by `yt-dlp --get-title`."""
    stdout, stderr, returncode = run_ytdlp_binary(["--get-title", url], binary=binary, timeout=timeout)
    if returncode != 0:
        raise ExternalToolError("yt-dlp", returncode, stderr)
    return stdout.strip()
