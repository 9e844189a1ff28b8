"""
Module: builder.output.debug

Purpose:
    Plain-text dump of the build settings and every parsed question,
    for checking how a bank was read.

Used By:
    - builder.controller: DEBUG output format
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, TextIO

from qbl_toolkit.core.models import Question


def render_debug(
    questions: Iterable[Question],
    out: TextIO,
    *,
    settings: Optional[Mapping[str, object]] = None,
) -> None:
    """
    Write settings followed by each question's fields.

    Args:
        questions: Final question sequence (not modified)
        out: Text sink
        settings: Name → value pairs printed first
    """
    for name, value in (settings or {}).items():
        out.write(f"{name}: {value}\n")
    out.write("----------\n")

    for question in questions:
        out.write(f"id: {question.id}{'' if question.has_explicit_id else ' (derived)'}\n")
        out.write(f"from: {question.location}\n")
        out.write(f"stem: {question.stem!r}\n")
        for index, choice in enumerate(question.choices):
            mark = "*" if choice.is_correct else " "
            out.write(f"  [{mark}] {index}: {choice.text!r}\n")
        out.write(f"tags: {sorted(question.tags)}\n")
        out.write("\n")
