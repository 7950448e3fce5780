"""Error taxonomy for claudecode.

Each error knows the severity it is reported with. Flows raise these and the
command surface turns them into host notifications; nothing is retried.
"""

from .host import Severity


class ClaudeCodeError(Exception):
    """Base class for errors reported to the user."""

    level = Severity.ERROR


class NoContextError(ClaudeCodeError):
    """Nothing to send: empty selection, unknown function, bad range, unsaved buffer."""

    level = Severity.WARN


class ArtifactIOError(ClaudeCodeError):
    """A scratch or output file could not be written or read."""


class TargetExistsError(ArtifactIOError):
    """Refusing to overwrite an existing file."""

    level = Severity.WARN


class InvocationError(ClaudeCodeError):
    """The external tool could not be started."""


class ToolFailedError(ClaudeCodeError):
    """The external tool exited with a non-zero status."""

    def __init__(self, output: str, returncode: int):
        super().__init__(f"Claude Code command failed:\n{output}")
        self.output = output
        self.returncode = returncode


class EmptyOutputError(ClaudeCodeError):
    """The external tool succeeded but printed nothing."""

    level = Severity.WARN

    def __init__(self, message: str = "Claude Code returned no output"):
        super().__init__(message)


class ConfigError(ClaudeCodeError):
    """Invalid or unreadable configuration."""
