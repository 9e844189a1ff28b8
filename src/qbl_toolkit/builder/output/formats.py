"""
Module: builder.output.formats

Purpose:
    Enum of supported output formats and the output-file extension rules.

Key Classes:
    - OutputFormat: QBL / D2L / GRADESCOPE / LATEX / WEB / DEBUG

Used By:
    - builder.config: BuilderConfig.resolved_format
    - builder.controller: Renderer dispatch
    - cli: Format flags
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class OutputFormat(Enum):
    """
    Output document format.

    Attributes:
        QBL: Normalized bank text (re-parseable)
        D2L: D2L / Brightspace question upload CSV
        GRADESCOPE: LaTeX for the exam class, suitable for GradeScope
        LATEX: Plain LaTeX article with answer key
        WEB: HTML page with companion .js and .css files
        DEBUG: Settings and parsed question dump
    """

    QBL = "qbl"
    D2L = "d2l"
    GRADESCOPE = "gradescope"
    LATEX = "latex"
    WEB = "web"
    DEBUG = "debug"

    @classmethod
    def from_extension(cls, extension: str) -> Optional[OutputFormat]:
        """
        Infer a format from an output file extension.

        Args:
            extension: Suffix including the dot, e.g. ".tex"

        Returns:
            Matching format, or None if the extension is not recognised

        Example:
            >>> OutputFormat.from_extension(".csv")
            <OutputFormat.D2L: 'd2l'>
        """
        return _EXTENSIONS.get(extension.lower())

    @property
    def default_extension(self) -> str:
        """Extension used when writing this format to a file."""
        return _DEFAULT_EXTENSIONS[self]


_EXTENSIONS = {
    ".csv": OutputFormat.D2L,
    ".d2l": OutputFormat.D2L,
    ".gscope": OutputFormat.GRADESCOPE,
    ".html": OutputFormat.WEB,
    ".htm": OutputFormat.WEB,
    ".tex": OutputFormat.LATEX,
    ".qbl": OutputFormat.QBL,
}

_DEFAULT_EXTENSIONS = {
    OutputFormat.QBL: ".qbl",
    OutputFormat.D2L: ".csv",
    OutputFormat.GRADESCOPE: ".tex",
    OutputFormat.LATEX: ".tex",
    OutputFormat.WEB: ".html",
    OutputFormat.DEBUG: ".txt",
}
