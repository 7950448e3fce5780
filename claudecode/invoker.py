"""Run the Claude Code CLI and capture its reply."""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .config import PluginConfig
from .errors import EmptyOutputError, InvocationError, ToolFailedError

logger = logging.getLogger(__name__)

STDIN_NOTE = "The code is provided on standard input."


@dataclass
class InvocationResult:
    """Combined stdout/stderr of one tool run."""

    output: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def is_empty(self) -> bool:
        return self.output == ""

    def raise_for_status(self) -> "InvocationResult":
        """
        Classify the run.

        Raises:
            ToolFailedError: Non-zero exit, with the captured output attached
            EmptyOutputError: Zero exit but nothing printed
        """
        if not self.success:
            raise ToolFailedError(self.output, self.returncode)
        if self.is_empty:
            raise EmptyOutputError()
        return self


class CommandInvoker:
    """Builds and runs ``<claude_cmd> -p <prompt>`` without a shell."""

    def __init__(self, config: PluginConfig):
        self.config = config

    def build_prompt(self, prompt: str, content: str | None = None) -> str:
        """Prompt text, with ``content`` appended as a fenced block."""
        if content is None:
            return prompt
        if self.config.content_via_stdin:
            return f"{prompt}\n\n{STDIN_NOTE}"
        return f"{prompt}\n\nHere is the code:\n```\n{content}\n```"

    def build_argv(self, prompt: str, content: str | None = None) -> list[str]:
        return [*shlex.split(self.config.claude_cmd), "-p", self.build_prompt(prompt, content)]

    def run(
        self,
        prompt: str,
        content: str | None = None,
        cwd: Path | None = None,
    ) -> InvocationResult:
        """
        Run the tool synchronously.

        Args:
            prompt: Natural-language request
            content: Optional code to send along
            cwd: Working directory for the tool

        Returns:
            InvocationResult with stdout and stderr merged

        Raises:
            InvocationError: If the executable cannot be started
        """
        try:
            argv = self.build_argv(prompt, content)
        except ValueError as e:
            raise InvocationError(f"Invalid claude_cmd {self.config.claude_cmd!r}: {e}") from e
        if not argv or argv[0] == "-p":
            raise InvocationError("claude_cmd is empty")
        stdin_data = content if (content is not None and self.config.content_via_stdin) else None
        logger.debug("Running %s (cwd=%s)", shlex.join(argv), cwd)

        try:
            completed = subprocess.run(
                argv,
                input=stdin_data,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                cwd=cwd,
                check=False,
            )
        except OSError as e:
            raise InvocationError(f"Failed to execute Claude Code: {e}") from e

        logger.info("Claude Code exited with status %d", completed.returncode)
        return InvocationResult(output=completed.stdout or "", returncode=completed.returncode)
