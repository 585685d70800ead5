"""Subtitle parsing utilities: WebVTT captions to deduplicated plain text."""

import os
import logging
from typing import List, Optional, Union


VTT_EXTENSION = ".vtt"
TXT_EXTENSION = ".txt"

_HEADER_LINES = ("WEBVTT", "Kind: captions")
_HEADER_PREFIXES = ("Language:", "NOTE")


def is_timestamp_line(line: str) -> bool:
    """
    Loose timing/position heuristic: a colon, a period or comma, under 30 chars.

    Catches "00:00:01.000" style lines and cue settings without a VTT grammar.
    Short spoken lines such as "4:30, right?" are dropped as well.
    """
    return ':' in line and ('.' in line or ',' in line) and len(line) < 30


def is_metadata_line(line: str) -> bool:
    """Empty, header, NOTE or cue timing line (input already trimmed)."""
    if not line or line in _HEADER_LINES:
        return True
    return line.startswith(_HEADER_PREFIXES) or '-->' in line


def should_skip_line(line: str) -> bool:
    """Return True for anything that is not spoken text."""
    return is_metadata_line(line) or is_timestamp_line(line)


def strip_tags(line: str) -> str:
    """Remove everything from '<' to the next '>' inclusive. No nesting."""
    result = []
    in_tag = False
    for ch in line:
        if ch == '<':
            in_tag = True
            continue
        if ch == '>':
            in_tag = False
            continue
        if not in_tag:
            result.append(ch)
    return ''.join(result)


def extract_transcript_lines(content: Union[str, bytes]) -> List[str]:
    """
    Parse VTT content into clean transcript lines.

    Auto-generated captions repeat each phrase across overlapping cues, so only
    the first occurrence of an exact line is kept, in original order. The
    timestamp heuristic runs on the tag-stripped text: inline word timings
    like "<00:00:01.000><c> hello</c>" would otherwise look like timing lines.
    """
    if isinstance(content, bytes):
        content = content.decode('utf-8', errors='replace')

    seen = set()
    text_lines = []
    for line in content.split('\n'):
        line = line.strip()
        if is_metadata_line(line):
            continue

        line = strip_tags(line).strip()
        if should_skip_line(line) or line in seen:
            continue

        seen.add(line)
        text_lines.append(line)

    return text_lines


def normalize_vtt(content: Union[str, bytes]) -> str:
    """Parse VTT content and return the deduplicated transcript, newline-joined."""
    return '\n'.join(extract_transcript_lines(content))


def normalize_vtt_file(vtt_path: str) -> str:
    """Read a VTT file and return its transcript. I/O errors propagate to the caller."""
    with open(vtt_path, 'rb') as f:
        return normalize_vtt(f.read())


def convert_vtt_to_txt(vtt_path: str, txt_path: str) -> str:
    """Write the transcript of vtt_path to txt_path and return txt_path."""
    transcript = normalize_vtt_file(vtt_path)
    with open(txt_path, 'w', encoding='utf-8') as f:
        f.write(transcript)
    return txt_path


def transcript_path_for(vtt_path: str, lang: Optional[str] = None) -> str:
    """
    Map a yt-dlp caption file to its transcript path.

    yt-dlp writes "<stem>.<lang>.vtt"; the language suffix is dropped so the
    transcript lands next to the other artifacts as "<stem>.txt".
    """
    base = vtt_path[:-len(VTT_EXTENSION)] if vtt_path.endswith(VTT_EXTENSION) else vtt_path
    if lang and base.endswith(f".{lang}"):
        base = base[:-(len(lang) + 1)]
    return base + TXT_EXTENSION


def find_subtitle_files(directory: str) -> List[str]:
    """Return the .vtt files directly inside directory, sorted by name."""
    return [
        os.path.join(directory, name)
        for name in sorted(os.listdir(directory))
        if name.endswith(VTT_EXTENSION)
    ]


def convert_subtitles_in_dir(
    directory: str,
    lang: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> List[str]:
    """
    Convert every .vtt in directory to a .txt transcript and delete the .vtt.

    A file that cannot be converted is logged as a warning and left in place;
    the remaining files are still processed. Returns the transcripts written.
    """
    logger = logger or logging.getLogger("tuber")
    written = []
    for vtt_path in find_subtitle_files(directory):
        txt_path = transcript_path_for(vtt_path, lang)
        try:
            convert_vtt_to_txt(vtt_path, txt_path)
            os.remove(vtt_path)
        except OSError as e:
            logger.warning(f"Could not convert subtitles {vtt_path}: {e}")
            continue
        logger.info(f"Transcript saved: {txt_path}")
        written.append(txt_path)
    return written
