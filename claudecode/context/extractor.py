"""Pick the source text to send to the assistant."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..config import PluginConfig
from ..errors import NoContextError
from ..host import EditorHost, SyntaxNode
from ..parsers import patterns

logger = logging.getLogger(__name__)


class ContextMode(str, Enum):
    SELECTION = "selection"
    FUNCTION = "function"
    FILE = "file"
    RANGE = "range"


@dataclass
class ContextRequest:
    """What the user asked to send, for a single invocation."""

    mode: ContextMode
    text: str
    filetype: str
    target_path: str
    description: str
    prompt_suffix: str

    @property
    def needs_artifact(self) -> bool:
        """Everything except the real file goes through a temp artifact."""
        return self.mode is not ContextMode.FILE


def _slice_bytes(line: str, start: int, end: int | None = None) -> str:
    """Slice a line by byte columns, as editors and tree-sitter report them."""
    data = line.encode("utf-8")
    return data[start:end].decode("utf-8", errors="ignore")


def _char_end(line: str, col: int) -> int:
    """Byte offset just past the UTF-8 character that starts at ``col``."""
    data = line.encode("utf-8")
    end = col + 1
    while end < len(data) and (data[end] & 0xC0) == 0x80:
        end += 1
    return end


def extract_selection(host: EditorHost) -> str:
    """Text of the current visual selection, empty string if there is none."""
    vrange = host.visual_range()
    if vrange is None:
        return ""

    lines = host.get_lines(vrange.start_line - 1, vrange.end_line)
    if not lines:
        return ""
    if vrange.linewise:
        return "\n".join(lines)

    if len(lines) == 1:
        lines[0] = _slice_bytes(lines[0], vrange.start_col, _char_end(lines[0], vrange.end_col))
    else:
        lines[0] = _slice_bytes(lines[0], vrange.start_col)
        lines[-1] = _slice_bytes(lines[-1], 0, _char_end(lines[-1], vrange.end_col))
    return "\n".join(lines)


def find_function_node(node: SyntaxNode | None) -> SyntaxNode | None:
    """Walk up from ``node`` to the nearest function-like ancestor (or itself)."""
    while node is not None:
        if patterns.FUNCTION_NODE_TYPE.search(node.type):
            return node
        node = node.parent
    return None


def node_text(lines: list[str], node: SyntaxNode) -> str:
    """Exact source text of a node's span."""
    start_row, start_col = node.start_point
    end_row, end_col = node.end_point
    span = lines[start_row:end_row + 1]
    if not span:
        return ""

    if len(span) == 1:
        span[0] = _slice_bytes(span[0], start_col, end_col)
    else:
        span[0] = _slice_bytes(span[0], start_col)
        span[-1] = _slice_bytes(span[-1], 0, end_col)
    return "\n".join(span)


def extract_function_fallback(lines: list[str], cursor_line: int) -> str:
    """
    Find the enclosing function by scanning lines.

    Scans upward from the cursor for a definition keyword, then downward
    until a word-leading line is indented less than the first body line.
    Over- and under-captures nested blocks; it is a heuristic.

    Args:
        lines: All buffer lines
        cursor_line: 1-indexed cursor line

    Returns:
        The detected function text (empty for an empty buffer)
    """
    if not lines:
        return ""
    cursor_line = min(max(cursor_line, 1), len(lines))

    function_start = cursor_line
    for i in range(cursor_line, 0, -1):
        if patterns.FUNCTION_DEF_LINE.match(lines[i - 1]):
            function_start = i
            break

    function_end = function_start
    body_indent = None
    for i in range(function_start + 1, len(lines) + 1):
        line = lines[i - 1]
        if line.strip():
            indent = len(patterns.LEADING_WHITESPACE.match(line).group(0))
            if body_indent is None:
                body_indent = indent
            elif indent < body_indent and patterns.WORD_LEADING.match(line):
                break
        function_end = i

    return "\n".join(lines[function_start - 1:function_end])


def extract_enclosing_function(host: EditorHost) -> str:
    """Text of the function around the cursor; syntax tree first, then lines."""
    lines = host.get_lines()
    function_node = find_function_node(host.node_at_cursor())
    if function_node is not None:
        return node_text(lines, function_node)

    logger.debug("No syntax tree function node, using line scan")
    cursor_line, _ = host.get_cursor()
    return extract_function_fallback(lines, cursor_line)


def extract_line_range(host: EditorHost, start: int, end: int) -> str:
    """Lines start..end (1-indexed, inclusive) joined with newlines."""
    if start < 1 or end < start:
        raise NoContextError("Invalid line range")
    return "\n".join(host.get_lines(start - 1, end))


def extract_entire_file(host: EditorHost) -> str:
    """Whole buffer text; the buffer must be backed by a file."""
    if not host.buffer_name():
        raise NoContextError("Buffer has no associated file")
    return "\n".join(host.get_lines())


def infer_extension(filetype: str, config: PluginConfig) -> str:
    """Map an editor filetype label to a temp file extension."""
    if not config.auto_detect_filetype:
        return config.temp_file_extension
    return config.extension_map.get(filetype, config.temp_file_extension)


def filetype_for_path(path: Path, config: PluginConfig) -> str:
    """Best-effort reverse lookup of a filetype label from a file suffix."""
    suffix = path.suffix.lower()
    if not suffix:
        return path.name.lower() if path.name.lower() in config.extension_map else ""
    for filetype, extension in config.extension_map.items():
        if extension == suffix:
            return filetype
    return ""


def build_request(
    host: EditorHost,
    mode: ContextMode,
    start: int | None = None,
    end: int | None = None,
) -> ContextRequest:
    """
    Collect the text for a context mode.

    Raises:
        NoContextError: When the mode has nothing to send
    """
    target = host.buffer_name()
    filetype = host.filetype()

    if mode is ContextMode.SELECTION:
        text = extract_selection(host)
        if not text:
            raise NoContextError("No text selected")
        return ContextRequest(mode, text, filetype, target,
                              "Selected Code", "Analyze this code snippet:")

    if mode is ContextMode.FUNCTION:
        text = extract_enclosing_function(host)
        if not text.strip():
            raise NoContextError("Could not detect current function")
        return ContextRequest(mode, text, filetype, target,
                              "Current Function", "Analyze this function:")

    if mode is ContextMode.FILE:
        text = extract_entire_file(host)
        return ContextRequest(mode, text, filetype, target,
                              "Entire File", f"Analyze this entire file: {target}")

    if start is None or end is None:
        raise NoContextError("Invalid line range")
    text = extract_line_range(host, start, end)
    return ContextRequest(mode, text, filetype, target,
                          f"Lines {start}-{end}", f"Analyze lines {start}-{end}:")
