"""Editor host implementations."""

from .terminal import TerminalHost

__all__ = ["TerminalHost"]
