"""Let the user pick a generated snippet and put it into the buffer."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Sequence

from ..config import WindowConfig
from ..errors import ArtifactIOError, ClaudeCodeError, TargetExistsError
from ..host import EditorHost, FloatHandle, Severity
from ..parsers import patterns
from .renderer import compute_geometry

logger = logging.getLogger(__name__)

PREVIEW_LABEL_LIMIT = 50


class InsertionState(str, Enum):
    IDLE = "idle"
    AWAITING_CHOICE = "awaiting_choice"
    PREVIEWING = "previewing"
    INSERTED = "inserted"
    CANCELLED = "cancelled"


@dataclass
class PanelAction:
    """A single-key action offered by the preview panel."""

    keys: tuple[str, ...]
    label: str
    effect: Callable[[], str] | None
    outcome: InsertionState


def preview_label(code: str, limit: int = PREVIEW_LABEL_LIMIT) -> str:
    """One-line preview of a snippet for the choice list."""
    flat = patterns.WHITESPACE_RUN.sub(" ", code).strip()
    if len(flat) > limit:
        return flat[:limit] + "..."
    return flat


def insert_at_cursor(host: EditorHost, code: str) -> str:
    """Insert lines starting at the cursor line; cursor ends on the last one."""
    lines = code.split("\n")
    row, _ = host.get_cursor()
    index = row - 1
    host.set_lines(index, index, lines)
    host.set_cursor(row + len(lines) - 1, 0)
    return f"Inserted {len(lines)} line(s) at line {row}"


def insert_at_end(host: EditorHost, code: str) -> str:
    """Append after the last line, with a blank separator if needed."""
    lines = code.split("\n")
    count = host.line_count()
    last = host.get_lines(count - 1, count) if count else []
    prefix = [""] if last and last[0].strip() else []
    host.set_lines(count, count, prefix + lines)
    first_inserted = count + len(prefix) + 1
    host.set_cursor(first_inserted, 0)
    return f"Appended {len(lines)} line(s) at end of file"


class InsertionCoordinator:
    """
    Choose -> preview -> insert, driven through the host.

    States go IDLE -> AWAITING_CHOICE -> PREVIEWING -> INSERTED or CANCELLED.
    A single candidate skips AWAITING_CHOICE.
    """

    title = "Claude Code: Insert Code"
    choice_prompt = "Select code block to insert:"

    def __init__(
        self,
        host: EditorHost,
        window: WindowConfig,
        prompt: str,
        candidates: Sequence[str],
    ):
        self.host = host
        self.window = window
        self.prompt = prompt
        self.candidates = list(candidates)
        self.state = InsertionState.IDLE
        self.chosen: str | None = None

    def run(self) -> InsertionState:
        code = self.choose()
        if code is None:
            self.state = InsertionState.CANCELLED
            self.host.notify("Code insertion cancelled", Severity.INFO)
            return self.state
        self.chosen = code
        self.preview(code)
        return self.state

    def choose(self) -> str | None:
        if not self.candidates:
            return None
        if len(self.candidates) == 1:
            return self.candidates[0]

        self.state = InsertionState.AWAITING_CHOICE
        labels = [preview_label(c) for c in self.candidates]
        index = self.host.select(labels, self.choice_prompt)
        if index is None or not 0 <= index < len(self.candidates):
            return None
        return self.candidates[index]

    def actions(self, code: str) -> list[PanelAction]:
        return [
            PanelAction(("i",), "Insert at cursor",
                        lambda: insert_at_cursor(self.host, code), InsertionState.INSERTED),
            PanelAction(("a",), "Append to end of file",
                        lambda: insert_at_end(self.host, code), InsertionState.INSERTED),
            PanelAction(("q", "<Esc>"), "Cancel", None, InsertionState.CANCELLED),
        ]

    def panel_lines(self, code: str, actions: list[PanelAction]) -> list[str]:
        legend = "  ".join(f"[{a.keys[0]}] {a.label}" for a in actions)
        return [
            f"Prompt: {self.prompt}",
            "",
            "```",
            *code.split("\n"),
            "```",
            "",
            legend,
        ]

    def preview(self, code: str) -> FloatHandle:
        self.state = InsertionState.PREVIEWING
        actions = self.actions(code)
        keymaps = {}
        for action in actions:
            for key in action.keys:
                keymaps[key] = self._handler(action)

        columns, lines = self.host.screen_size()
        geometry = compute_geometry(self.window, columns, lines)
        return self.host.open_float(
            self.panel_lines(code, actions),
            geometry,
            f" {self.title} ",
            filetype="markdown",
            keymaps=keymaps,
        )

    def _handler(self, action: PanelAction) -> Callable[[FloatHandle], None]:
        def fire(handle: FloatHandle) -> None:
            # One action per panel instance
            if self.state is not InsertionState.PREVIEWING:
                return
            self.host.close_float(handle)
            if action.effect is None:
                self.state = InsertionState.CANCELLED
                self.host.notify("Code insertion cancelled", Severity.INFO)
                return
            try:
                message = action.effect()
            except ClaudeCodeError as e:
                self.state = InsertionState.CANCELLED
                logger.warning("Panel action failed: %s", e)
                self.host.notify(str(e), e.level)
                return
            self.state = action.outcome
            self.host.notify(message, Severity.INFO)

        return fire


def write_new_file(path: Path, code: str) -> str:
    """Create ``path`` with ``code``; never overwrites."""
    try:
        with open(path, "x", encoding="utf-8") as f:
            f.write(code if code.endswith("\n") else code + "\n")
    except FileExistsError as e:
        raise TargetExistsError(f"Test file already exists: {path}") from e
    except OSError as e:
        raise ArtifactIOError(f"Failed to write test file {path}: {e}") from e
    return f"Created test file {path}"


class TestFileOffer(InsertionCoordinator):
    """Offer generated tests as a new test file next to the source."""

    __test__ = False  # not a pytest class

    title = "Claude Code: Generated Tests"
    choice_prompt = "Select test code block:"

    def __init__(
        self,
        host: EditorHost,
        window: WindowConfig,
        prompt: str,
        candidates: Sequence[str],
        test_path: Path,
    ):
        super().__init__(host, window, prompt, candidates)
        self.test_path = test_path

    def actions(self, code: str) -> list[PanelAction]:
        return [
            PanelAction(("w",), f"Write to {self.test_path.name}",
                        lambda: write_new_file(self.test_path, code), InsertionState.INSERTED),
            PanelAction(("i",), "Insert at cursor",
                        lambda: insert_at_cursor(self.host, code), InsertionState.INSERTED),
            PanelAction(("q", "<Esc>"), "Cancel", None, InsertionState.CANCELLED),
        ]
