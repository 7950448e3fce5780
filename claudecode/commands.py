"""User-facing flows, keymaps and commands."""

import functools
import logging
from dataclasses import dataclass
from pathlib import Path

from .config import PluginConfig
from .context import ContextMode, ContextRequest, build_request, infer_extension
from .errors import ClaudeCodeError, NoContextError
from .host import EditorHost, Severity, is_visual_mode
from .invoker import CommandInvoker
from .output import InsertionCoordinator, TestFileOffer, show_result
from .parsers import extract_code_blocks
from .prompts import (
    EXPLAIN_FUNCTION_PROMPT,
    EXPLAIN_SELECTION_PROMPT,
    build_docs_prompt,
    build_generate_prompt,
    build_test_prompt,
    get_test_framework,
    suggest_test_path,
)
from .utils import temp_artifact

logger = logging.getLogger(__name__)

# Choice label -> context mode, in menu order
CONTEXT_OPTIONS = {
    "Selected Code": ContextMode.SELECTION,
    "Current Function": ContextMode.FUNCTION,
    "Entire File": ContextMode.FILE,
    "Custom Range": ContextMode.RANGE,
}


@dataclass
class Binding:
    """A flow exposed as a keychord and a user command."""

    method: str
    modes: tuple[str, ...]
    lhs: str
    command: str
    desc: str


BINDINGS = [
    Binding("interactive", ("n", "v"), "<leader>cc", "ClaudeCode", "Claude Code with context"),
    Binding("explain_selection", ("v",), "<leader>ce", "ClaudeExplainSelection",
            "Claude Code explain selection"),
    Binding("explain_function", ("n",), "<leader>cf", "ClaudeExplain", "Claude Code explain function"),
    Binding("generate_function", ("n",), "<leader>cg", "ClaudeGenerate", "Claude Code generate function"),
    Binding("generate_tests", ("n",), "<leader>ct", "ClaudeTest", "Claude Code generate tests"),
    Binding("generate_docs", ("n", "v"), "<leader>cd", "ClaudeDocs", "Claude Code generate documentation"),
]


def reports_errors(method):
    """Turn ClaudeCodeError into a host notification; the flow just stops."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ClaudeCodeError as e:
            log_level = logging.WARNING if e.level <= Severity.WARN else logging.ERROR
            logger.log(log_level, "%s aborted: %s", method.__name__, e)
            self.host.notify(str(e), e.level)
            return None

    return wrapper


class ClaudeCode:
    """Wires editor commands to context extraction, the CLI, and the UI."""

    def __init__(
        self,
        host: EditorHost,
        config: PluginConfig | None = None,
        invoker: CommandInvoker | None = None,
    ):
        self.host = host
        self.config = config or PluginConfig()
        self.invoker = invoker or CommandInvoker(self.config)

    def setup(self) -> None:
        """Register every flow as a keymap and a user command."""
        for binding in BINDINGS:
            callback = getattr(self, binding.method)
            self.host.set_keymap(binding.modes, binding.lhs, callback, binding.desc)
            self.host.create_command(binding.command, callback)

    # Plumbing

    def _file_dir(self) -> Path | None:
        name = self.host.buffer_name()
        return Path(name).parent if name else None

    def _ask(
        self,
        prompt: str,
        content: str | None = None,
        cwd: Path | None = None,
        notice: str = "Claude Code is thinking...",
    ) -> str:
        self.host.notify(notice, Severity.INFO)
        return self.invoker.run(prompt, content, cwd=cwd).raise_for_status().output

    def _ask_with_snippet(self, prompt: str, text: str, filetype: str) -> str:
        """Send ``text`` through a scoped temp artifact."""
        extension = infer_extension(filetype, self.config)
        with temp_artifact(
            text,
            extension,
            host=self.host,
            timeout_ms=self.config.temp_cleanup_delay_ms,
        ) as artifact:
            return self._ask(prompt, artifact.read(), cwd=self._file_dir())

    def _ask_about(self, request: ContextRequest, prompt: str) -> str:
        if request.needs_artifact:
            return self._ask_with_snippet(prompt, request.text, request.filetype)
        return self._ask(prompt, cwd=self._file_dir())

    def _show(self, text: str, description: str) -> None:
        show_result(self.host, text, self.config.window, f"Claude Code: {description}")

    def _offer_code(self, output: str, prompt: str, description: str) -> None:
        blocks = extract_code_blocks(output)
        if not blocks:
            self._show(output, description)
            return
        InsertionCoordinator(self.host, self.config.window, prompt, blocks).run()

    def _read_range(self) -> tuple[int, int]:
        start = self.host.input("Start line: ")
        end = self.host.input("End line: ")
        try:
            return int(start), int(end)
        except ValueError:
            raise NoContextError("Invalid line range") from None

    # Flows

    @reports_errors
    def interactive(self) -> None:
        """Ask about a selection, function, file, or line range."""
        options = list(CONTEXT_OPTIONS)
        if not is_visual_mode(self.host.mode()):
            options.remove("Selected Code")

        index = self.host.select(
            options,
            "What should Claude analyze?",
            format_item=lambda item: "  " + item,
        )
        if index is None:
            return
        mode = CONTEXT_OPTIONS[options[index]]

        prompt = self.host.input("Claude Code: ")
        if not prompt:
            return

        start = end = None
        if mode is ContextMode.RANGE:
            start, end = self._read_range()
        request = build_request(self.host, mode, start, end)

        output = self._ask_about(request, f"{prompt}\n\n{request.prompt_suffix}")
        self._show(output, request.description)

    @reports_errors
    def explain_selection(self) -> None:
        if not is_visual_mode(self.host.mode()):
            raise NoContextError("No text selected")
        request = build_request(self.host, ContextMode.SELECTION)
        output = self._ask_about(request, EXPLAIN_SELECTION_PROMPT)
        self._show(output, "Code Explanation")

    @reports_errors
    def explain_function(self) -> None:
        request = build_request(self.host, ContextMode.FUNCTION)
        output = self._ask_about(request, EXPLAIN_FUNCTION_PROMPT)
        self._show(output, "Function Explanation")

    @reports_errors
    def generate_function(self) -> None:
        """Generate a function from a description and offer to insert it."""
        description = self.host.input("Describe the function: ")
        if not description:
            return

        filetype = self.host.filetype()
        prompt = build_generate_prompt(description, filetype)
        buffer_text = "\n".join(self.host.get_lines())
        if buffer_text.strip():
            output = self._ask_with_snippet(prompt, buffer_text, filetype)
        else:
            output = self._ask(prompt, cwd=self._file_dir())
        self._offer_code(output, description, "Generated Function")

    @reports_errors
    def generate_tests(self) -> None:
        """Generate tests for the saved current file and offer a test file."""
        current_file = self.host.buffer_name()
        if not current_file:
            raise NoContextError("Please save the current buffer to a file first")
        if self.host.is_modified():
            raise NoContextError("Please save your changes first")

        source = Path(current_file)
        filetype = self.host.filetype()
        framework = get_test_framework(filetype)
        prompt = build_test_prompt(filetype, framework, source.name)

        output = self._ask(
            prompt,
            cwd=source.parent,
            notice="Claude Code is generating comprehensive tests...",
        )

        blocks = extract_code_blocks(output)
        if not blocks:
            self._show(output, "Test Generation")
            return
        test_path = suggest_test_path(source, filetype)
        TestFileOffer(
            self.host, self.config.window, f"Tests for {source.name} ({framework.name})",
            blocks, test_path,
        ).run()

    @reports_errors
    def generate_docs(self) -> None:
        """Document the selection (visual mode) or the current function."""
        if is_visual_mode(self.host.mode()):
            mode = ContextMode.SELECTION
        else:
            mode = ContextMode.FUNCTION
        request = build_request(self.host, mode)
        prompt = build_docs_prompt(request.filetype)
        output = self._ask_about(request, prompt)
        self._offer_code(output, f"Document {request.description.lower()}", "Documentation")
