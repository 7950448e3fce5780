"""Scratch files holding snippets for the assistant."""

import logging
import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Generator

from ..config import TEMP_CLEANUP_DELAY_MS
from ..errors import ArtifactIOError
from ..host import EditorHost

logger = logging.getLogger(__name__)

TEMP_PREFIX = "claudecode-"


@dataclass
class TempArtifact:
    """A snippet materialized on disk."""

    path: Path
    extension: str
    content: str

    def read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ArtifactIOError(f"Failed to read temporary file: {e}") from e

    def delete(self) -> None:
        """Remove the file; a file that is already gone is fine."""
        remove_file(self.path)


def remove_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
        logger.debug("Removed temp file %s", path)
    except OSError as e:
        logger.warning("Could not remove temp file %s: %s", path, e)


def write_temp_artifact(content: str, extension: str) -> TempArtifact:
    """
    Write ``content`` to a uniquely named file ending in ``extension``.

    Raises:
        ArtifactIOError: If the file cannot be created or written
    """
    try:
        fd, name = tempfile.mkstemp(suffix=extension, prefix=TEMP_PREFIX)
    except OSError as e:
        raise ArtifactIOError(f"Failed to create temporary file: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
    except (OSError, UnicodeError) as e:
        remove_file(Path(name))
        raise ArtifactIOError(f"Failed to write temporary file: {e}") from e

    logger.debug("Wrote %d chars to %s", len(content), name)
    return TempArtifact(path=Path(name), extension=extension, content=content)


def schedule_delete(host: EditorHost, path: Path, delay_ms: int = TEMP_CLEANUP_DELAY_MS) -> None:
    """Delete ``path`` after ``delay_ms`` via the host's deferred callback."""
    host.defer(lambda: remove_file(path), delay_ms)


@contextmanager
def temp_artifact(
    content: str,
    extension: str,
    host: EditorHost | None = None,
    timeout_ms: int = TEMP_CLEANUP_DELAY_MS,
) -> Generator[TempArtifact, None, None]:
    """
    Scoped temp artifact.

    The file is deleted as soon as the block exits, success or not. With a
    host, a deferred delete after ``timeout_ms`` is also scheduled as a
    backstop for a block that never exits.
    """
    artifact = write_temp_artifact(content, extension)
    if host is not None:
        schedule_delete(host, artifact.path, timeout_ms)
    try:
        yield artifact
    finally:
        artifact.delete()
