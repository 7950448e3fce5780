"""CLI entry point for claudecode."""

import logging
import re
from pathlib import Path

import typer
from rich.console import Console

from . import __version__
from .commands import ClaudeCode
from .config import load_config
from .context.extractor import filetype_for_path
from .errors import ConfigError
from .hosts import TerminalHost
from .parsers import patterns

app = typer.Typer(
    name="claudecode",
    help="Send code context to Claude Code and bring the answer back into the file",
    no_args_is_help=True,
)
console = Console()

# --select START:END (or START-END)
SELECTION_ARG = re.compile(r"^\s*(\d+)\s*[:-]\s*(\d+)\s*$")


def version_callback(value: bool):
    if value:
        console.print(f"claudecode version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
    config: Path = typer.Option(
        None, "--config", "-c",
        help="Path to YAML config (default: $CLAUDECODE_CONFIG or ~/.config/claudecode/config.yaml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging"),
):
    """claudecode - Claude Code for a file, from the terminal."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = load_config(config)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _parse_selection(value: str | None) -> tuple[int, int] | None:
    """Parse START:END into a 1-indexed inclusive line pair."""
    if value is None:
        return None
    match = SELECTION_ARG.match(value)
    if not match:
        console.print(f"[red]Error:[/red] Invalid selection {value!r}, expected START:END")
        raise typer.Exit(1)
    start, end = int(match.group(1)), int(match.group(2))
    if start < 1 or end < start:
        console.print(f"[red]Error:[/red] Invalid selection {value!r}")
        raise typer.Exit(1)
    return start, end


def _run(
    ctx: typer.Context,
    file: Path,
    command: str,
    line: int = 1,
    select: str | None = None,
) -> None:
    """Open FILE in a terminal host, run one user command, save changes."""
    file = file.resolve()
    if not file.is_file():
        console.print(f"[red]Error:[/red] File does not exist: {file}")
        raise typer.Exit(1)

    config = ctx.obj
    selection = _parse_selection(select)
    host = TerminalHost(
        file,
        filetype=filetype_for_path(file, config),
        selection=selection,
        console=console,
    )
    # Put the cursor on the first non-blank character, like `^`
    host.set_cursor(line)
    cursor_line, _ = host.get_cursor()
    current = host.get_lines(cursor_line - 1, cursor_line)[0]
    host.set_cursor(cursor_line, len(patterns.LEADING_WHITESPACE.match(current).group(0).encode("utf-8")))

    plugin = ClaudeCode(host, config)
    plugin.setup()
    try:
        host.run_command(command)
    finally:
        host.flush_deferred()

    if host.save():
        console.print(f"[green]Saved[/green] {file}")


@app.command()
def ask(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Source file"),
    line: int = typer.Option(1, "--line", "-l", help="Cursor line (1-indexed)"),
    select: str = typer.Option(None, "--select", "-s", help="Selected lines, START:END"),
):
    """
    Ask a question about a selection, the current function, the file, or a line range.
    """
    _run(ctx, file, "ClaudeCode", line=line, select=select)


@app.command()
def explain(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Source file"),
    line: int = typer.Option(1, "--line", "-l", help="Cursor line (1-indexed)"),
    select: str = typer.Option(None, "--select", "-s", help="Selected lines, START:END"),
):
    """
    Explain the selected lines, or the function around --line.
    """
    command = "ClaudeExplainSelection" if select else "ClaudeExplain"
    _run(ctx, file, command, line=line, select=select)


@app.command()
def generate(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Source file"),
    line: int = typer.Option(1, "--line", "-l", help="Cursor line (1-indexed)"),
):
    """
    Generate a function from a description and insert it into FILE.
    """
    _run(ctx, file, "ClaudeGenerate", line=line)


@app.command()
def tests(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Source file (must be saved)"),
):
    """
    Generate unit tests for FILE and offer to write them to a new test file.
    """
    _run(ctx, file, "ClaudeTest")


@app.command()
def docs(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Source file"),
    line: int = typer.Option(1, "--line", "-l", help="Cursor line (1-indexed)"),
    select: str = typer.Option(None, "--select", "-s", help="Selected lines, START:END"),
):
    """
    Generate documentation for the selected lines or the function around --line.
    """
    _run(ctx, file, "ClaudeDocs", line=line, select=select)


if __name__ == "__main__":
    app()
