"""Shared test doubles for claudecode tests."""

from typing import Callable

import pytest

from claudecode.config import PluginConfig
from claudecode.host import EditorHost, FloatHandle, Severity, VisualRange
from claudecode.invoker import CommandInvoker, InvocationResult


class FakeNode:
    """Minimal syntax node: type, parent, start/end points."""

    def __init__(self, type, start_point, end_point, parent=None):
        self.type = type
        self.start_point = start_point
        self.end_point = end_point
        self.parent = parent


class FakeHost(EditorHost):
    """Records everything the plugin asks the editor to do."""

    def __init__(
        self,
        lines: list[str] | None = None,
        name: str = "/project/example.py",
        filetype: str = "python",
        cursor: tuple[int, int] = (1, 0),
        mode: str = "n",
        visual: VisualRange | None = None,
        node: FakeNode | None = None,
        inputs: list[str] | None = None,
        selections: list[int | None] | None = None,
        modified: bool = False,
        size: tuple[int, int] = (100, 40),
    ):
        self.lines = list(lines) if lines is not None else [""]
        self.name = name
        self._filetype = filetype
        self.cursor = cursor
        self._mode = mode
        self.visual = visual
        self.node = node
        self.inputs = list(inputs or [])
        self.selections = list(selections or [])
        self.modified = modified
        self.size = size

        self.notifications: list[tuple[str, Severity]] = []
        self.floats: list[dict] = []
        self.select_calls: list[dict] = []
        self.input_prompts: list[str] = []
        self.deferred: list[tuple[Callable[[], None], int]] = []
        self.keymaps: dict[tuple[str, str], tuple[Callable[[], None], str]] = {}
        self.commands: dict[str, Callable[[], None]] = {}

    def get_lines(self, start=0, end=None):
        return list(self.lines[start:end])

    def set_lines(self, start, end, lines):
        self.lines[start:end] = list(lines)
        self.modified = True

    def buffer_name(self):
        return self.name

    def filetype(self):
        return self._filetype

    def is_modified(self):
        return self.modified

    def get_cursor(self):
        return self.cursor

    def set_cursor(self, line, col=0):
        self.cursor = (line, col)

    def mode(self):
        return self._mode

    def visual_range(self):
        return self.visual

    def node_at_cursor(self):
        return self.node

    def screen_size(self):
        return self.size

    def open_float(self, lines, geometry, title, filetype="markdown", keymaps=None):
        handle = FloatHandle(id=len(self.floats) + 1, title=title)
        self.floats.append({
            "lines": list(lines),
            "geometry": geometry,
            "title": title,
            "filetype": filetype,
            "keymaps": dict(keymaps or {}),
            "handle": handle,
        })
        return handle

    def close_float(self, handle):
        handle.closed = True

    def notify(self, message, level=Severity.INFO):
        self.notifications.append((message, level))

    def input(self, prompt):
        self.input_prompts.append(prompt)
        return self.inputs.pop(0) if self.inputs else ""

    def select(self, items, prompt, format_item=None):
        self.select_calls.append({"items": list(items), "prompt": prompt, "format_item": format_item})
        return self.selections.pop(0) if self.selections else None

    def defer(self, callback, delay_ms):
        self.deferred.append((callback, delay_ms))

    def set_keymap(self, modes, lhs, callback, desc=""):
        for mode in modes:
            self.keymaps[(mode, lhs)] = (callback, desc)

    def create_command(self, name, callback):
        self.commands[name] = callback

    # Test helpers

    def press(self, key: str, index: int = -1) -> None:
        """Press a key in a floating panel (the latest by default)."""
        panel = self.floats[index]
        panel["keymaps"][key](panel["handle"])

    def run_deferred(self) -> None:
        pending, self.deferred = self.deferred, []
        for callback, _ in pending:
            callback()

    def messages(self, level: Severity | None = None) -> list[str]:
        return [m for m, lvl in self.notifications if level is None or lvl == level]


class StubInvoker(CommandInvoker):
    """Returns a canned result instead of spawning a process."""

    def __init__(self, output: str = "", returncode: int = 0, config: PluginConfig | None = None):
        super().__init__(config or PluginConfig())
        self.result = InvocationResult(output=output, returncode=returncode)
        self.calls: list[dict] = []

    def run(self, prompt, content=None, cwd=None):
        self.calls.append({
            "prompt": prompt,
            "content": content,
            "cwd": cwd,
            "argv": self.build_argv(prompt, content),
        })
        return self.result


@pytest.fixture
def config():
    return PluginConfig()
