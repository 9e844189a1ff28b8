"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .file_locking import locked_file, locked_read_lines, locked_write_lines
from .text import html_escape, js_string, latex_escape

__all__ = [
    # file_locking
    "locked_file",
    "locked_read_lines",
    "locked_write_lines",
    # text
    "html_escape",
    "js_string",
    "latex_escape",
]
