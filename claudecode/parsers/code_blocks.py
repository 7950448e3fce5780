"""Extract code snippets from assistant replies."""

from dataclasses import dataclass
from typing import Iterator

from . import patterns


@dataclass
class CodeBlock:
    """A code snippet found in a reply."""

    text: str
    language: str = ""


def iter_fenced_blocks(text: str) -> Iterator[CodeBlock]:
    """Yield every fenced code region in order of appearance."""
    for match in patterns.FENCED_BLOCK.finditer(text):
        yield CodeBlock(text=match.group(2), language=match.group(1).strip())


def find_unfenced_code(text: str) -> CodeBlock | None:
    """
    Heuristically find code in a reply without fences.

    The region starts at the first line opening with a statement keyword.
    After that, blank lines and lines whose first non-blank character is a
    word character are kept; the first other line ends the region.
    """
    code_lines: list[str] = []
    in_code = False

    for line in text.splitlines():
        if not in_code:
            if patterns.CODE_START.match(line.lstrip()):
                in_code = True
                code_lines.append(line)
            continue

        if not line.strip() or patterns.WORD_LEADING.match(line):
            code_lines.append(line)
        else:
            break

    if not code_lines:
        return None
    return CodeBlock(text="\n".join(code_lines))


def iter_code_blocks(text: str) -> Iterator[CodeBlock]:
    """Yield fenced blocks, or the single heuristic block when there are none."""
    found = False
    for block in iter_fenced_blocks(text):
        found = True
        yield block

    if not found:
        block = find_unfenced_code(text)
        if block is not None:
            yield block


def extract_code_blocks(text: str) -> list[str]:
    """
    Extract candidate snippets from a reply.

    Args:
        text: Raw assistant output

    Returns:
        Snippet texts in order of appearance (possibly empty)
    """
    return [block.text for block in iter_code_blocks(text)]
