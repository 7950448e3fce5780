"""Context selection for claudecode."""

from .extractor import (
    ContextMode,
    ContextRequest,
    build_request,
    extract_enclosing_function,
    extract_entire_file,
    extract_function_fallback,
    extract_line_range,
    extract_selection,
    infer_extension,
)

__all__ = [
    "ContextMode",
    "ContextRequest",
    "build_request",
    "extract_enclosing_function",
    "extract_entire_file",
    "extract_function_fallback",
    "extract_line_range",
    "extract_selection",
    "infer_extension",
]
