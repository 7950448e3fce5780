"""Compiled regex patterns for parsing."""

import re

# =============================================================================
# Assistant response patterns
# =============================================================================

# Fenced code region: ```lang\n ... \n```, each marker opening its own line
# group(1) = language tag (may be empty), group(2) = inner text
FENCED_BLOCK = re.compile(r"^[ \t]*```([^\n`]*)\n(.*?)\n?^[ \t]*```", re.DOTALL | re.MULTILINE)

# Statement-opening keywords that start a code region in unfenced replies.
# Matched against the line with leading whitespace removed.
CODE_START = re.compile(
    r"^(?:def|class|function|func|fn|public|private|protected|static|"
    r"const|let|var|if|for|while|switch|try|import|package|async|export|"
    r"struct|interface|type|impl|module)\b"
)

# A line that stays inside a code region: first non-blank char is a word char
WORD_LEADING = re.compile(r"^\s*\w")

# Any run of whitespace, newlines included
WHITESPACE_RUN = re.compile(r"\s+")

# =============================================================================
# Source buffer patterns
# =============================================================================

# Function definition at the start of a statement (fallback detection)
FUNCTION_DEF_LINE = re.compile(r"^\s*(?:async\s+def|def|function|func|fn)\s+")

# Syntax node types that count as a function
FUNCTION_NODE_TYPE = re.compile(r"function|method|def")

# Leading indentation of a line
LEADING_WHITESPACE = re.compile(r"^\s*")
