"""claudecode - send editor context to the Claude Code CLI and bring the reply back."""

__version__ = "0.1.0"
