"""
Interactive selector.

SelectorState holds the menu state and reacts to discrete commands; it has no
terminal dependency so it can be driven by tests or any other front end.
InteractiveSelector renders that state with rich and feeds it operator input
one line at a time.
"""

import logging
import os
from enum import Enum
from typing import List, NamedTuple, Optional

from rich.console import Console
from rich.prompt import Prompt
from rich.text import Text

from tuber.config import DEFAULT_SUMMARY_PROMPT
from tuber.models.schemas import Artifact, ArtifactRequest, OutputTarget
from tuber.services.runner import ExternalRunner
from tuber.utils.filename_utils import (
    FALLBACK_STEM,
    describe_outputs,
    resolve_output_target,
    sanitize_filename,
)


CHOICES = (Artifact.VIDEO, Artifact.AUDIO, Artifact.SUBTITLES, Artifact.SUMMARY)
SUMMARY_INDEX = CHOICES.index(Artifact.SUMMARY)
PROMPT_PREVIEW_LENGTH = 50

TITLE_STYLE = "bold color(212)"
SELECTED_STYLE = "bold color(212)"
NORMAL_STYLE = "color(252)"
DIM_STYLE = "color(241)"
FILENAME_STYLE = "cyan"
EDIT_STYLE = "bold yellow"


class SelectorAction(str, Enum):
    NONE = "none"
    SUBMIT = "submit"
    QUIT = "quit"
    EDIT_PATH = "edit_path"
    EDIT_PROMPT = "edit_prompt"


class Selection(NamedTuple):
    url: str
    request: ArtifactRequest
    target: OutputTarget


class SelectorState:
    def __init__(
        self,
        url: str = "",
        output_dir: str = ".",
        prompt: str = DEFAULT_SUMMARY_PROMPT,
        summary_available: bool = True,
    ) -> None:
        self.url = url
        self.output_dir = output_dir or "."
        self.title: Optional[str] = None
        self.out_path = os.path.join(self.output_dir, FALLBACK_STEM)
        self.prompt = prompt
        self.summary_available = summary_available
        self.checked = [False] * len(CHOICES)
        self.cursor = 0

    @property
    def labels(self) -> List[str]:
        labels = [a.label for a in CHOICES]
        if not self.summary_available:
            labels[SUMMARY_INDEX] = "Summary (install claude cli)"
        return labels

    def set_title(self, title: str) -> None:
        self.title = title
        self.out_path = os.path.join(self.output_dir, sanitize_filename(title))

    def toggle(self, index: int) -> bool:
        """Flip a checkbox. Summary stays off without a summarizer."""
        if not 0 <= index < len(CHOICES):
            return False
        if index == SUMMARY_INDEX and not self.summary_available:
            return False
        self.checked[index] = not self.checked[index]
        return True

    def set_out_path(self, value: str) -> None:
        if value.strip():
            self.out_path = value.strip()

    def set_prompt(self, value: str) -> None:
        if value.strip():
            self.prompt = value.strip()

    def handle(self, command: str) -> SelectorAction:
        """
        Apply one line of operator input.

        '' submits, q quits, e/p edit path/prompt, k/j or up/down move,
        x toggles at the cursor, digits 1-4 toggle that entry.
        """
        command = command.strip().lower()
        if command == "":
            return SelectorAction.SUBMIT if self.can_submit else SelectorAction.NONE
        if command in ("q", "quit", "ctrl+c"):
            return SelectorAction.QUIT
        if command == "e":
            return SelectorAction.EDIT_PATH
        if command == "p":
            return SelectorAction.EDIT_PROMPT if self.summary_available else SelectorAction.NONE

        for token in command.split():
            if token in ("k", "up"):
                self.cursor = max(self.cursor - 1, 0)
            elif token in ("j", "down"):
                self.cursor = min(self.cursor + 1, len(CHOICES) - 1)
            elif token in ("x", "space"):
                self.toggle(self.cursor)
            elif token.isdigit():
                self.cursor = min(max(int(token) - 1, 0), len(CHOICES) - 1)
                self.toggle(int(token) - 1)
        return SelectorAction.NONE

    @property
    def can_submit(self) -> bool:
        return self.request().any_selected

    def request(self) -> ArtifactRequest:
        selected = [a for a, checked in zip(CHOICES, self.checked) if checked]
        return ArtifactRequest.from_artifacts(selected, prompt=self.prompt)

    def target(self) -> OutputTarget:
        return resolve_output_target(self.output_dir, custom_path=self.out_path)

    def filenames_preview(self) -> str:
        return describe_outputs(self.target(), self.request())

    def prompt_preview(self) -> str:
        if len(self.prompt) > PROMPT_PREVIEW_LENGTH:
            return self.prompt[:PROMPT_PREVIEW_LENGTH - 3] + "..."
        return self.prompt

    def selection(self) -> Selection:
        return Selection(self.url, self.request(), self.target())


class InteractiveSelector:
    """Collects a URL and an artifact selection from the operator."""

    def __init__(
        self,
        runner: ExternalRunner,
        console: Optional[Console] = None,
        output_dir: str = ".",
        prompt: str = DEFAULT_SUMMARY_PROMPT,
    ) -> None:
        self.runner = runner
        self.console = console or Console(stderr=True)
        self.output_dir = output_dir
        self.prompt = prompt

    def run(self, url: Optional[str] = None) -> Optional[Selection]:
        """Return the operator's selection, or None when they quit."""
        state = SelectorState(
            url=url or "",
            output_dir=self.output_dir,
            prompt=self.prompt,
            summary_available=self.runner.summarizer_available(),
        )
        try:
            if not state.url:
                state.url = self._ask_url()
            self._load_title(state)

            while True:
                self.console.print(self.render(state))
                action = state.handle(self._ask("", default=""))
                if action is SelectorAction.QUIT:
                    return None
                if action is SelectorAction.SUBMIT:
                    return state.selection()
                if action is SelectorAction.EDIT_PATH:
                    state.set_out_path(self._ask(Text("Output", style=EDIT_STYLE), default=state.out_path))
                elif action is SelectorAction.EDIT_PROMPT:
                    state.set_prompt(self._ask(Text("Prompt", style=EDIT_STYLE), default=state.prompt))
        except (KeyboardInterrupt, EOFError):
            return None

    def _ask(self, label, default: str) -> str:
        return Prompt.ask(label, console=self.console, default=default, show_default=False)

    def _ask_url(self) -> str:
        url = ""
        while not url:
            url = Prompt.ask(Text("Enter YouTube URL", style=TITLE_STYLE), console=self.console).strip()
        return url

    def _load_title(self, state: SelectorState) -> None:
        with self.console.status(Text("Fetching video info...", style=DIM_STYLE)):
            try:
                state.set_title(self.runner.fetch_title(state.url))
            except Exception as e:
                # Keep the fallback output path
                logging.getLogger("tuber").warning(f"Could not fetch video title: {e}")

    def render(self, state: SelectorState) -> Text:
        text = Text()
        text.append("What would you like to download?\n\n", style=TITLE_STYLE)
        if state.title:
            text.append(f"{state.title}\n\n", style=DIM_STYLE)

        for i, label in enumerate(state.labels):
            selected = i == state.cursor
            cursor = "▸ " if selected else "  "
            checkbox = "[x]" if state.checked[i] else "[ ]"
            text.append(f"{cursor}{checkbox} {i + 1} ")
            text.append(label, style=SELECTED_STYLE if selected else NORMAL_STYLE)
            text.append("\n")

        text.append("\nOutput: ", style=DIM_STYLE)
        text.append(state.filenames_preview(), style=FILENAME_STYLE)
        text.append("\n")
        if state.summary_available and state.checked[SUMMARY_INDEX]:
            text.append("Prompt: ", style=DIM_STYLE)
            text.append(state.prompt_preview() + "\n")

        hints = "1-4 toggle • j/k move • x toggle • enter download • e edit path"
        if state.summary_available:
            hints += " • p edit prompt"
        hints += " • q quit"
        text.append("\n" + hints, style=DIM_STYLE)
        return text
