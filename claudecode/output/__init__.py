"""Output module for claudecode."""

from .insertion import (
    InsertionCoordinator,
    InsertionState,
    TestFileOffer,
    insert_at_cursor,
    insert_at_end,
    preview_label,
)
from .renderer import compute_geometry, show_result

__all__ = [
    "InsertionCoordinator",
    "InsertionState",
    "TestFileOffer",
    "compute_geometry",
    "insert_at_cursor",
    "insert_at_end",
    "preview_label",
    "show_result",
]
