"""
tuber command-line entry point - Orchestration Layer

Parses flags, checks for the external tools, optionally runs the interactive
selector, and hands the run to the download service. No business logic here.

Progress goes to stderr; stdout only carries the summary text.
"""
import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console

from tuber.config import SUMMARIZER_INSTALL_URL, YTDLP_INSTALL_URL, get_settings
from tuber.exceptions import TuberError
from tuber.models.schemas import ArtifactRequest, OutputTarget
from tuber.services.download_service import run_download
from tuber.services.orchestrator import StepOrchestrator
from tuber.services.runner import SubprocessRunner
from tuber.services.ytdlp_service import is_ytdlp_available
from tuber.ui.selector import InteractiveSelector
from tuber.utils.filename_utils import artifact_path, resolve_output_target
from tuber.utils.logging_utils import get_run_logger, setup_logger


SPINNER_STYLE = "color(212)"

USAGE = """Usage: tuber [flags] <url>

Flags (can be combined):
  -v             Download video
  -a             Download audio (mp3)
  -s             Download subtitles (text)
  --sum          Summarize video using AI
  -p <prompt>    Custom prompt for summary
  -o <dir>       Output directory

Examples:
  tuber -a -s <url>                      Download audio and subtitles
  tuber --sum -p "List key points" <url>  Summarize with custom prompt

Without flags, opens interactive menu."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tuber",
        description="Download video, audio, subtitles or an AI summary for a video URL.",
        epilog="Without flags, opens interactive menu.",
    )
    parser.add_argument("url", nargs="?", help="Video URL")
    parser.add_argument("-v", dest="video", action="store_true", help="Download video")
    parser.add_argument("-a", dest="audio", action="store_true", help="Download audio (mp3)")
    parser.add_argument("-s", dest="subtitles", action="store_true", help="Download subtitles (text)")
    parser.add_argument("--sum", "--summary", dest="summary", action="store_true",
                        help="Summarize video using AI")
    parser.add_argument("-p", "--prompt", help="Custom prompt for summary")
    parser.add_argument("-o", "--output-dir", dest="output_dir",
                        help="Output directory (default: current directory)")
    parser.add_argument("--verbose", action="store_true", help="Log diagnostic output to stderr")
    return parser


def run_with_spinner(orchestrator: StepOrchestrator, console: Console) -> None:
    """Drive the orchestrator while a spinner ticks on its own refresh thread."""
    with console.status(
        orchestrator.status_text,
        spinner="dots",
        spinner_style=SPINNER_STYLE,
    ) as status:
        orchestrator.run(on_status=status.update)


def report_outputs(console: Console, target: OutputTarget, request: ArtifactRequest) -> None:
    """List the written files. Skipped when yt-dlp picks the name from the title."""
    if not target.stem:
        return
    for artifact in request.file_artifacts():
        console.print(f"  {artifact_path(target, artifact)}", markup=False, highlight=False, soft_wrap=True)


def main(argv: Optional[List[str]] = None) -> int:
    # Load environment variables from .env file
    load_dotenv()

    args = build_parser().parse_args(argv)
    settings = get_settings()

    setup_logger("DEBUG" if args.verbose else settings.log_level)
    logger = get_run_logger()
    console = Console(stderr=True)

    if not is_ytdlp_available(settings.ytdlp_binary):
        console.print(f"Error: {settings.ytdlp_binary} not found in PATH", markup=False)
        console.print(f"Install it from: {YTDLP_INSTALL_URL}", markup=False)
        return 1

    runner = SubprocessRunner(settings)
    output_dir = args.output_dir or settings.output_dir
    request = ArtifactRequest(
        video=args.video,
        audio=args.audio,
        subtitles=args.subtitles,
        summary=args.summary,
        prompt=args.prompt or settings.summary_prompt,
    )

    if request.summary and not runner.summarizer_available():
        console.print(f"Error: --sum requires {settings.summarizer_binary} cli", markup=False)
        console.print(f"Install it from: {SUMMARIZER_INSTALL_URL}", markup=False)
        return 1

    url = args.url
    if request.any_selected and not url:
        print(USAGE)
        return 1

    if request.any_selected:
        target = resolve_output_target(output_dir)
    else:
        selector = InteractiveSelector(
            runner,
            console=console,
            output_dir=output_dir,
            prompt=request.prompt,
        )
        selection = selector.run(url)
        if selection is None:
            return 0
        url, request, target = selection

    console.print(f"\nDownloading {request.describe()} from:\n{url}\n", markup=False, highlight=False)

    try:
        run_download(
            url,
            request,
            target,
            runner,
            default_prompt=settings.summary_prompt,
            subtitle_lang=settings.subtitle_lang,
            run_steps=lambda orchestrator: run_with_spinner(orchestrator, console),
            logger=logger,
            on_status=lambda message: console.print(f"\n{message}\n", markup=False),
        )
    except TuberError as e:
        console.print(f"Error: {e}", markup=False, highlight=False)
        return 1
    except KeyboardInterrupt:
        return 130

    console.print("\n✓ Done!")
    report_outputs(console, target, request)
    return 0


if __name__ == "__main__":
    sys.exit(main())
