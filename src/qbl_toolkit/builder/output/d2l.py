"""
Module: builder.output.d2l

Purpose:
    D2L / Brightspace question-library CSV. Each question becomes a block
    of rows (NewQuestion, ID, Title, QuestionText, Points, Difficulty,
    one Option row per choice) followed by an empty row.

Key Functions:
    - render_d2l(): Write questions as D2L CSV

Dependencies:
    - csv (std)

Used By:
    - builder.controller: D2L output format
"""

from __future__ import annotations

import csv
from typing import Iterable, TextIO

from qbl_toolkit.core.models import Question

TITLE_LENGTH = 60
CORRECT_WEIGHT = 100
INCORRECT_WEIGHT = 0


def _title(question: Question) -> str:
    first_line = question.stem.split("\n", 1)[0]
    if len(first_line) <= TITLE_LENGTH:
        return first_line
    return first_line[:TITLE_LENGTH - 3].rstrip() + "..."


def render_d2l(
    questions: Iterable[Question],
    out: TextIO,
    *,
    points: int = 1,
    difficulty: int = 1,
) -> None:
    """
    Write questions as D2L multiple-choice CSV.

    Args:
        questions: Final question sequence (not modified)
        out: Text sink (open with newline="" when it is a file)
        points: Points per question
        difficulty: D2L difficulty (1-10)
    """
    writer = csv.writer(out, lineterminator="\n")
    for question in questions:
        writer.writerow(["NewQuestion", "MC", "", "", ""])
        writer.writerow(["ID", question.id, "", "", ""])
        writer.writerow(["Title", _title(question), "", "", ""])
        writer.writerow(["QuestionText", question.stem, "", "", ""])
        writer.writerow(["Points", points, "", "", ""])
        writer.writerow(["Difficulty", difficulty, "", "", ""])
        for choice in question.choices:
            weight = CORRECT_WEIGHT if choice.is_correct else INCORRECT_WEIGHT
            writer.writerow(["Option", weight, choice.text, "", ""])
        writer.writerow([])
