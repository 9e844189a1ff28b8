"""
Module: builder.output.qbl

Purpose:
    Write questions back out as normalized QBL bank text. Every entry
    gets an explicit "#id" header, so parsing the output yields the same
    ids, stems, choices and tags.

Key Functions:
    - format_question(): Lines for one entry
    - render_qbl(): Write a whole bank

Dependencies:
    - builder.loading.parser: Marker constants (shared with the reader)

Used By:
    - builder.controller: QBL output format
"""

from __future__ import annotations

from typing import Iterable, List, TextIO

from qbl_toolkit.core.models import Question
from qbl_toolkit.builder.loading.parser import ESCAPE_MARK, HEADER_MARK, MARKER_CHARS, TAG_MARK

CONTINUATION_INDENT = "    "


def _stem_line(line: str) -> str:
    """Escape a stem line that would otherwise read as markup."""
    if not line.strip():
        # A blank line would end the entry
        return ESCAPE_MARK
    if line[0] in MARKER_CHARS:
        return ESCAPE_MARK + line
    return line


def format_question(question: Question) -> List[str]:
    """
    Format one question as QBL lines (no trailing blank line).

    Example:
        >>> format_question(q)
        ['#cap1 Capital of France?', '[*] Paris', '[ ] Lyon', '^ geo']
    """
    stem_lines = question.stem.split("\n")
    lines = [f"{HEADER_MARK}{question.id} {stem_lines[0]}".rstrip()]
    lines.extend(_stem_line(line) for line in stem_lines[1:])

    for choice in question.choices:
        marker = "[*]" if choice.is_correct else "[ ]"
        text_lines = [line for line in choice.text.split("\n") if line.strip()] or [""]
        lines.append(f"{marker} {text_lines[0].strip()}".rstrip())
        lines.extend(f"{CONTINUATION_INDENT}{line.strip()}" for line in text_lines[1:])

    if question.tags:
        lines.append(f"{TAG_MARK} " + ", ".join(sorted(question.tags)))
    return lines


def render_qbl(questions: Iterable[Question], out: TextIO) -> None:
    """
    Write questions as a normalized bank.

    Args:
        questions: Final question sequence (not modified)
        out: Text sink
    """
    first = True
    for question in questions:
        if not first:
            out.write("\n")
        first = False
        for line in format_question(question):
            out.write(f"{line}\n")
