"""Editor host backed by a file on disk and a rich terminal console."""

import logging
import threading
from pathlib import Path
from typing import Callable, Sequence

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.syntax import Syntax
from tree_sitter_language_pack import Error as LanguagePackError
from tree_sitter_language_pack import get_parser

from ..host import (
    EditorHost,
    FloatAction,
    FloatGeometry,
    FloatHandle,
    Severity,
    SyntaxNode,
    VisualRange,
)

logger = logging.getLogger(__name__)

BORDER_BOXES = {
    "rounded": box.ROUNDED,
    "single": box.SQUARE,
    "double": box.DOUBLE,
    "solid": box.HEAVY,
    "shadow": box.ROUNDED,
    "none": box.SIMPLE,
}

NOTIFY_STYLES = {
    Severity.DEBUG: ("dim", "Debug"),
    Severity.INFO: ("cyan", "Info"),
    Severity.WARN: ("yellow", "Warning"),
    Severity.ERROR: ("red", "Error"),
}


class TerminalHost(EditorHost):
    """
    A one-buffer editor for the command line.

    The buffer is the file's lines; popups are rich panels followed by a key
    prompt, and changes are written back only by ``save()``.
    """

    def __init__(
        self,
        path: Path,
        filetype: str = "",
        cursor: tuple[int, int] = (1, 0),
        selection: tuple[int, int] | None = None,
        console: Console | None = None,
    ):
        self.path = path
        text = path.read_text(encoding="utf-8") if path.exists() else ""
        self._trailing_newline = text.endswith("\n")
        self.lines = text.splitlines() or [""]
        self.modified = False
        self._filetype = filetype
        self.console = console or Console()
        self.cursor = (1, 0)
        self.set_cursor(*cursor)
        self.selection = selection
        self.keymaps: dict[tuple[str, str], Callable[[], None]] = {}
        self.commands: dict[str, Callable[[], None]] = {}
        self._next_float_id = 1
        self._timers: list[tuple[threading.Timer, Callable[[], None]]] = []

    # Buffer

    def get_lines(self, start: int = 0, end: int | None = None) -> list[str]:
        return list(self.lines[start:end])

    def set_lines(self, start: int, end: int, lines: Sequence[str]) -> None:
        self.lines[start:end] = list(lines)
        self.modified = True

    def buffer_name(self) -> str:
        return str(self.path.resolve())

    def filetype(self) -> str:
        return self._filetype

    def is_modified(self) -> bool:
        return self.modified

    def save(self) -> bool:
        """Write the buffer back to its file if it changed."""
        if not self.modified:
            return False
        text = "\n".join(self.lines)
        if self._trailing_newline or text:
            text += "\n"
        self.path.write_text(text, encoding="utf-8")
        self.modified = False
        return True

    # Cursor and mode

    def get_cursor(self) -> tuple[int, int]:
        return self.cursor

    def set_cursor(self, line: int, col: int = 0) -> None:
        line = min(max(line, 1), len(self.lines))
        self.cursor = (line, max(col, 0))

    def mode(self) -> str:
        return "V" if self.selection else "n"

    def visual_range(self) -> VisualRange | None:
        if not self.selection:
            return None
        start, end = self.selection
        return VisualRange(start_line=start, start_col=0, end_line=end, end_col=0, linewise=True)

    def node_at_cursor(self) -> SyntaxNode | None:
        if not self._filetype:
            return None
        try:
            parser = get_parser(self._filetype)
        except (LanguagePackError, LookupError) as e:
            logger.debug("No tree-sitter grammar for %s: %s", self._filetype, e)
            return None

        tree = parser.parse("\n".join(self.lines).encode("utf-8"))
        line, col = self.cursor
        point = (line - 1, col)
        return tree.root_node.descendant_for_point_range(point, point)

    # UI

    def screen_size(self) -> tuple[int, int]:
        size = self.console.size
        return size.width, size.height

    def open_float(
        self,
        lines: Sequence[str],
        geometry: FloatGeometry,
        title: str,
        filetype: str = "markdown",
        keymaps: dict[str, FloatAction] | None = None,
    ) -> FloatHandle:
        handle = FloatHandle(id=self._next_float_id, title=title.strip())
        self._next_float_id += 1

        text = "\n".join(lines)
        body = Markdown(text) if filetype == "markdown" else Syntax(text, filetype or "text")
        self.console.print(Panel(
            body,
            title=escape(handle.title),
            box=BORDER_BOXES.get(geometry.border, box.ROUNDED),
            width=geometry.width,
        ))

        # Only single printable keys can be typed at the prompt
        keys = [key for key in (keymaps or {}) if len(key) == 1]
        ask_kwargs = {"default": "q"} if "q" in keys else {}
        while keys and not handle.closed:
            try:
                key = Prompt.ask("Action", choices=keys, console=self.console, **ask_kwargs)
            except (EOFError, KeyboardInterrupt):
                self.close_float(handle)
                break
            keymaps[key](handle)
        handle.closed = True
        return handle

    def close_float(self, handle: FloatHandle) -> None:
        handle.closed = True

    def notify(self, message: str, level: Severity = Severity.INFO) -> None:
        style, label = NOTIFY_STYLES.get(level, NOTIFY_STYLES[Severity.INFO])
        self.console.print(f"[{style}]{label}:[/{style}] {escape(message)}")

    def input(self, prompt: str) -> str:
        try:
            answer = Prompt.ask(
                escape(prompt.rstrip().rstrip(":")),
                default="",
                show_default=False,
                console=self.console,
            )
        except (EOFError, KeyboardInterrupt):
            return ""
        return answer.strip()

    def select(
        self,
        items: Sequence[str],
        prompt: str,
        format_item: Callable[[str], str] | None = None,
    ) -> int | None:
        if not items:
            return None
        self.console.print(f"[bold]{escape(prompt)}[/bold]")
        for number, item in enumerate(items, 1):
            label = format_item(item) if format_item else item
            self.console.print(f"  [cyan]{number}[/cyan] {escape(label)}")

        choices = [str(n) for n in range(1, len(items) + 1)] + ["q"]
        try:
            answer = Prompt.ask("Choice", choices=choices, default="q", console=self.console)
        except (EOFError, KeyboardInterrupt):
            return None
        if answer == "q":
            return None
        return int(answer) - 1

    # Scheduling and registration

    def defer(self, callback: Callable[[], None], delay_ms: int) -> None:
        timer = threading.Timer(delay_ms / 1000, callback)
        timer.daemon = True
        self._timers.append((timer, callback))
        timer.start()

    def flush_deferred(self) -> None:
        """Run callbacks whose timers have not fired yet (used at exit)."""
        pending, self._timers = self._timers, []
        for timer, callback in pending:
            if timer.is_alive():
                timer.cancel()
                callback()

    def set_keymap(
        self,
        modes: Sequence[str],
        lhs: str,
        callback: Callable[[], None],
        desc: str = "",
    ) -> None:
        for mode in modes:
            self.keymaps[(mode, lhs)] = callback

    def create_command(self, name: str, callback: Callable[[], None]) -> None:
        self.commands[name] = callback

    def run_command(self, name: str) -> None:
        self.commands[name]()
