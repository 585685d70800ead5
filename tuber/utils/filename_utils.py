"""
Filename utility functions for output naming.

This module provides utilities for:
- Sanitizing video titles into filesystem-safe stems
- Resolving an OutputTarget from an output directory, a title or a custom path
- Building the yt-dlp output template for a target
- Computing final artifact paths and the preview shown before downloading
"""

import os
from typing import Optional, Tuple

from tuber.models.schemas import Artifact, ArtifactRequest, OutputTarget


FALLBACK_STEM = "video"
TITLE_PLACEHOLDER = "%(title)s"
EXT_PLACEHOLDER = "%(ext)s"

# Path separators become hyphens, the rest of the reserved set is dropped
_FILENAME_TRANSLATION = str.maketrans({
    '/': '-',
    '\\': '-',
    ':': '-',
    '*': None,
    '?': None,
    '"': None,
    '<': None,
    '>': None,
    '|': None,
})


def sanitize_filename(filename: str) -> str:
    """Sanitize a title so it is usable as a single path segment."""
    filename = filename.translate(_FILENAME_TRANSLATION)
    if not filename.strip():
        return FALLBACK_STEM
    return filename


def _last_separator(path: str) -> int:
    seps = {'/', os.sep}
    if os.altsep:
        seps.add(os.altsep)
    return max(path.rfind(sep) for sep in seps)


def split_custom_path(custom_path: str, default_dir: str = ".") -> Tuple[str, str]:
    """
    Split an operator-edited output path into (directory, raw stem).

    The directory is everything before the last separator; without a separator
    the configured output directory is used.
    """
    idx = _last_separator(custom_path)
    if idx < 0:
        return default_dir or ".", custom_path
    return custom_path[:idx] or os.sep, custom_path[idx + 1:]


def resolve_output_target(
    directory: Optional[str] = None,
    title: Optional[str] = None,
    custom_path: Optional[str] = None,
) -> OutputTarget:
    """
    Build the OutputTarget for one run.

    A custom path wins over the title. With neither, no stem is set and yt-dlp
    names the files after the video title itself.
    """
    directory = directory or "."
    if custom_path:
        directory, raw_stem = split_custom_path(custom_path, directory)
        return OutputTarget(directory=directory, stem=sanitize_filename(raw_stem))
    if title:
        return OutputTarget(directory=directory, stem=sanitize_filename(title))
    return OutputTarget(directory=directory)


def base_path(target: OutputTarget) -> str:
    """Directory plus stem, without extension (title placeholder when no stem)."""
    return os.path.join(target.directory, target.stem or TITLE_PLACEHOLDER)


def build_output_pattern(target: OutputTarget) -> str:
    """yt-dlp -o template: '<dir>/<stem>.%(ext)s' or '<dir>/%(title)s.%(ext)s'."""
    return f"{base_path(target)}.{EXT_PLACEHOLDER}"


def artifact_path(target: OutputTarget, artifact: Artifact) -> str:
    """Final path of a file artifact, e.g. './My Video.mp3'."""
    if not artifact.is_file:
        raise ValueError(f"{artifact.value} is not written to a file")
    if not target.stem:
        raise ValueError("artifact path is only known once a stem is resolved")
    return base_path(target) + artifact.extension


def describe_outputs(target: OutputTarget, request: ArtifactRequest) -> str:
    """Human readable preview of what a run will write."""
    if not request.any_selected:
        return "(select at least one option)"

    extensions = [a.extension.lstrip('.') for a in request.file_artifacts()]
    if not extensions:
        return "(summary to stdout)"

    path = base_path(target)
    if len(extensions) == 1:
        result = f"{path}.{extensions[0]}"
    else:
        result = f"{path}.{{{','.join(extensions)}}}"

    if request.summary:
        result += " + summary"
    return result
