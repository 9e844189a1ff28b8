"""
Question Validation

Checks the structural invariants of parsed questions before any selection
or rendering happens.

Every defect in the pool is collected rather than stopping at the first,
so a bank author can fix all problems in one iteration. The caller
(Bank.validate) turns a non-empty issue list into a ValidationError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List

from ..models.questions import Question

logger = logging.getLogger(__name__)

MIN_CHOICES = 2


@dataclass(frozen=True)
class ValidationIssue:
    """
    A single structural defect.

    Attributes:
        question_id: Id of the offending question
        location: "file:line" (or pool position) of the entry
        reason: What is wrong
    """

    question_id: str
    location: str
    reason: str

    def __str__(self) -> str:
        return f"{self.location}: question {self.question_id!r}: {self.reason}"


class ValidationError(Exception):
    """Raised when a bank fails validation."""

    def __init__(self, message: str, errors: list[ValidationIssue] | None = None):
        super().__init__(message)
        self.errors = errors or []


def validate_question(question: Question) -> List[ValidationIssue]:
    """
    Check a single question.

    Args:
        question: Question to check

    Returns:
        List of issues (empty if valid)
    """
    issues: List[ValidationIssue] = []

    def issue(reason: str) -> None:
        issues.append(ValidationIssue(question.id, question.location, reason))

    if not question.stem.strip():
        issue("question text is empty")

    if len(question.choices) < MIN_CHOICES:
        issue(
            f"needs at least {MIN_CHOICES} choices, found {len(question.choices)}"
        )

    correct = len(question.correct_choices)
    if correct == 0:
        issue("no choice is marked correct")
    elif correct > 1:
        issue(f"exactly one choice must be correct, found {correct}")

    for i, choice in enumerate(question.choices):
        if not choice.text.strip():
            issue(f"choice {i + 1} is empty")

    return issues


def validate_questions(questions: Iterable[Question]) -> List[ValidationIssue]:
    """
    Check every question and identifier uniqueness across the pool.

    Args:
        questions: Full loaded pool, in bank order

    Returns:
        All issues found, in pool order
    """
    issues: List[ValidationIssue] = []
    first_seen: Dict[str, Question] = {}

    for question in questions:
        issues.extend(validate_question(question))

        original = first_seen.get(question.id)
        if original is None:
            first_seen[question.id] = question
        else:
            issues.append(ValidationIssue(
                question.id,
                question.location,
                f"duplicate id (first defined at {original.location})",
            ))

    logger.debug(
        f"Validated {len(first_seen)} distinct ids, {len(issues)} issues"
    )
    return issues
