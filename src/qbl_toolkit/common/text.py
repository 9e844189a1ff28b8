"""
Module: common.text

Purpose:
    Escaping helpers shared by the renderers. Question text in a bank is
    plain text; LaTeX and HTML outputs need their special characters
    neutralised.

Key Functions:
    - latex_escape(): Escape LaTeX special characters
    - html_escape(): Escape HTML special characters, keep line breaks
    - js_string(): Quote text as a JavaScript string literal

Used By:
    - builder.output.latex
    - builder.output.web
"""

from __future__ import annotations

import html
import json
import re

_LATEX_SPECIALS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}
_LATEX_RE = re.compile("|".join(re.escape(ch) for ch in _LATEX_SPECIALS))


def latex_escape(text: str) -> str:
    """
    Escape LaTeX special characters.

    Line breaks inside a stem or choice become forced line breaks.

    Example:
        >>> latex_escape("50% of $10")
        '50\\\\% of \\\\$10'
    """
    escaped = _LATEX_RE.sub(lambda m: _LATEX_SPECIALS[m.group(0)], text)
    return escaped.replace("\n", "\\\\\n")


def html_escape(text: str) -> str:
    """
    Escape HTML special characters; line breaks become <br>.

    Example:
        >>> html_escape("a < b\\nc")
        'a &lt; b<br>\\nc'
    """
    return html.escape(text).replace("\n", "<br>\n")


def js_string(text: str) -> str:
    """Quote text as a JavaScript string literal."""
    return json.dumps(text, ensure_ascii=False)
