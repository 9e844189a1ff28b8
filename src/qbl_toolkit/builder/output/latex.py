"""
Module: builder.output.latex

Purpose:
    LaTeX renderers. GradeScope output uses the exam document class with
    checkbox choices and \\CorrectChoice; plain LaTeX output is an
    article with lettered choices and an answer key at the end.

Key Functions:
    - render_gradescope(): exam-class LaTeX for GradeScope
    - render_latex(): Plain article LaTeX

Dependencies:
    - qbl_toolkit.common.text: latex_escape

Used By:
    - builder.controller: GRADESCOPE and LATEX output formats
"""

from __future__ import annotations

from typing import Iterable, TextIO

from qbl_toolkit.common.text import latex_escape
from qbl_toolkit.core.models import Question


def choice_letter(index: int) -> str:
    """0 → "a", 1 → "b", ..."""
    return chr(ord("a") + index)


def render_gradescope(
    questions: Iterable[Question],
    out: TextIO,
    *,
    title: str,
    compressed: bool = False,
) -> None:
    """
    Write an exam-class document for GradeScope.

    Args:
        questions: Final question sequence (not modified)
        out: Text sink
        title: Exam title
        compressed: Lay choices out in one paragraph to save space
    """
    env = "oneparcheckboxes" if compressed else "checkboxes"

    out.write("\\documentclass[11pt]{exam}\n")
    out.write("\\usepackage[margin=1in]{geometry}\n")
    out.write("\\begin{document}\n\n")
    out.write("\\begin{center}\n")
    out.write(f"  {{\\Large\\textbf{{{latex_escape(title)}}}}}\n")
    out.write("\\end{center}\n\n")
    out.write("\\begin{questions}\n")

    for question in questions:
        out.write(f"\n\\question {latex_escape(question.stem)}\n")
        if not compressed:
            out.write("\n")
        out.write(f"\\begin{{{env}}}\n")
        for choice in question.choices:
            command = "\\CorrectChoice" if choice.is_correct else "\\choice"
            out.write(f"  {command} {latex_escape(choice.text)}\n")
        out.write(f"\\end{{{env}}}\n")

    out.write("\n\\end{questions}\n")
    out.write("\\end{document}\n")


def render_latex(
    questions: Iterable[Question],
    out: TextIO,
    *,
    title: str,
) -> None:
    """
    Write a plain LaTeX article with an answer key.

    Args:
        questions: Final question sequence (not modified)
        out: Text sink
        title: Document title
    """
    questions = list(questions)

    out.write("\\documentclass[11pt]{article}\n")
    out.write("\\usepackage[margin=1in]{geometry}\n")
    out.write("\\usepackage{enumitem}\n")
    out.write(f"\\title{{{latex_escape(title)}}}\n")
    out.write("\\date{}\n")
    out.write("\\begin{document}\n")
    out.write("\\maketitle\n\n")
    out.write("\\begin{enumerate}\n")

    for question in questions:
        out.write(f"\n\\item {latex_escape(question.stem)}\n")
        out.write("  \\begin{enumerate}[label=(\\alph*)]\n")
        for choice in question.choices:
            out.write(f"    \\item {latex_escape(choice.text)}\n")
        out.write("  \\end{enumerate}\n")

    out.write("\n\\end{enumerate}\n\n")
    out.write("\\newpage\n")
    out.write("\\section*{Answer Key}\n")
    out.write("\\begin{enumerate}\n")
    for question in questions:
        index = question.correct_index
        answer = f"({choice_letter(index)})" if index is not None else "--"
        out.write(f"  \\item {answer} % {question.id}\n")
    out.write("\\end{enumerate}\n")
    out.write("\\end{document}\n")
