"""Parsers module for claudecode."""

from .code_blocks import (
    CodeBlock,
    extract_code_blocks,
    find_unfenced_code,
    iter_code_blocks,
    iter_fenced_blocks,
)

__all__ = [
    "CodeBlock",
    "extract_code_blocks",
    "find_unfenced_code",
    "iter_code_blocks",
    "iter_fenced_blocks",
]
