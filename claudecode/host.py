"""Editor host interface.

Every component talks to the editor through an ``EditorHost``. Lines are
1-indexed where they describe a cursor or a range the user sees, and the
buffer accessors follow Python slice semantics (0-indexed, end exclusive).
Columns are byte offsets, the same unit editors and tree-sitter report.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Protocol, Sequence


class Severity(IntEnum):
    """Notification levels (mirror the usual editor log levels)."""

    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


@dataclass
class VisualRange:
    """An active visual selection.

    start_col/end_col are 0-indexed byte columns, end_col inclusive.
    A linewise selection ignores the columns.
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    linewise: bool = False


@dataclass
class FloatGeometry:
    """Size and placement of a floating panel, in screen cells."""

    width: int
    height: int
    row: int
    col: int
    border: str = "rounded"


@dataclass
class FloatHandle:
    """A floating panel opened by the host."""

    id: int
    title: str
    closed: bool = False


class SyntaxNode(Protocol):
    """The subset of a tree-sitter node the context extractor needs."""

    @property
    def type(self) -> str: ...

    @property
    def parent(self) -> "SyntaxNode | None": ...

    @property
    def start_point(self) -> tuple[int, int]: ...

    @property
    def end_point(self) -> tuple[int, int]: ...


FloatAction = Callable[[FloatHandle], None]


class EditorHost(ABC):
    """Operations consumed from the embedding editor."""

    # Buffer

    @abstractmethod
    def get_lines(self, start: int = 0, end: int | None = None) -> list[str]:
        """Return buffer lines [start, end)."""

    @abstractmethod
    def set_lines(self, start: int, end: int, lines: Sequence[str]) -> None:
        """Replace buffer lines [start, end) with ``lines``."""

    def line_count(self) -> int:
        return len(self.get_lines())

    @abstractmethod
    def buffer_name(self) -> str:
        """Path of the current buffer, empty string when it has none."""

    @abstractmethod
    def filetype(self) -> str:
        ...

    @abstractmethod
    def is_modified(self) -> bool:
        ...

    # Cursor and mode

    @abstractmethod
    def get_cursor(self) -> tuple[int, int]:
        """(line, col): 1-indexed line, 0-indexed byte column."""

    @abstractmethod
    def set_cursor(self, line: int, col: int = 0) -> None:
        ...

    @abstractmethod
    def mode(self) -> str:
        """Editor mode string; visual modes start with ``v`` or ``V``."""

    @abstractmethod
    def visual_range(self) -> VisualRange | None:
        ...

    def node_at_cursor(self) -> SyntaxNode | None:
        """Syntax node under the cursor, None when no tree is available."""
        return None

    # UI

    @abstractmethod
    def screen_size(self) -> tuple[int, int]:
        """(columns, lines) of the editor screen."""

    @abstractmethod
    def open_float(
        self,
        lines: Sequence[str],
        geometry: FloatGeometry,
        title: str,
        filetype: str = "markdown",
        keymaps: dict[str, FloatAction] | None = None,
    ) -> FloatHandle:
        """Open a modal panel; each keymap is scoped to the panel's buffer."""

    @abstractmethod
    def close_float(self, handle: FloatHandle) -> None:
        ...

    @abstractmethod
    def notify(self, message: str, level: Severity = Severity.INFO) -> None:
        ...

    @abstractmethod
    def input(self, prompt: str) -> str:
        """Single-line input; empty string when the user gives nothing."""

    @abstractmethod
    def select(
        self,
        items: Sequence[str],
        prompt: str,
        format_item: Callable[[str], str] | None = None,
    ) -> int | None:
        """Single-choice list prompt; index of the chosen item or None."""

    # Scheduling and registration

    @abstractmethod
    def defer(self, callback: Callable[[], None], delay_ms: int) -> None:
        """Run ``callback`` once after ``delay_ms``."""

    @abstractmethod
    def set_keymap(
        self,
        modes: Sequence[str],
        lhs: str,
        callback: Callable[[], None],
        desc: str = "",
    ) -> None:
        ...

    @abstractmethod
    def create_command(self, name: str, callback: Callable[[], None]) -> None:
        ...


def is_visual_mode(mode: str) -> bool:
    return mode[:1] in ("v", "V")
