"""
Module: selection

Purpose:
    Provides SelectionResult and the non-fatal selection warnings
    (QuotaUnmet, InsufficientPool). The selector reports shortfalls
    through these records so the caller decides whether a smaller
    exam is acceptable.

Key Classes:
    - QuotaUnmet: A sample-tag quota could not be filled
    - InsufficientPool: Fewer eligible questions than requested
    - SelectionResult: Chosen questions plus warnings

Dependencies:
    - dataclasses (std)
    - functools (std)
    - .questions.Question

Used By:
    - builder.selection.selector
    - builder.controller
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Union

from .questions import Question


@dataclass(frozen=True)
class QuotaUnmet:
    """
    Fewer questions carrying a sample tag than its quota.

    Attributes:
        tag: Sample tag
        requested: Quota asked for
        available: Eligible questions carrying the tag (the selection may
            hold fewer when the quota is capped by the requested count)
    """

    tag: str
    requested: int
    available: int

    def __str__(self) -> str:
        return (
            f"Quota for tag '{self.tag}' unmet: requested {self.requested}, "
            f"only {self.available} available"
        )


@dataclass(frozen=True)
class InsufficientPool:
    """
    Eligible pool smaller than the requested exam size.

    Attributes:
        requested: Number of questions asked for
        available: Number of eligible questions
    """

    requested: int
    available: int

    def __str__(self) -> str:
        return (
            f"Requested {self.requested} questions but only "
            f"{self.available} are eligible"
        )


SelectionWarning = Union[QuotaUnmet, InsufficientPool]


@dataclass(frozen=True)
class SelectionResult:
    """
    Result of the selection algorithm.

    Attributes:
        questions: Chosen questions in draw order (quota draws, then fill)
        requested_count: Target exam size
        eligible_count: Size of the eligible set after filtering
        warnings: Shortfalls reported during selection

    Invariants:
        - len(questions) <= requested_count
        - No duplicate question ids

    Example:
        >>> result.question_count
        5
        >>> result.is_complete
        True
    """

    questions: tuple[Question, ...]
    requested_count: int
    eligible_count: int = 0
    warnings: tuple[SelectionWarning, ...] = ()

    def __post_init__(self) -> None:
        """Validate selection result on construction."""
        ids = [q.id for q in self.questions]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate questions in selection result")
        if len(ids) > self.requested_count:
            raise ValueError(
                f"Selected {len(ids)} questions, more than requested "
                f"({self.requested_count})"
            )

    @cached_property
    def question_ids(self) -> tuple[str, ...]:
        """Ids of the chosen questions, in order."""
        return tuple(q.id for q in self.questions)

    @property
    def question_count(self) -> int:
        """Number of questions in selection."""
        return len(self.questions)

    @property
    def shortfall(self) -> int:
        """How many questions short of the request."""
        return self.requested_count - self.question_count

    @property
    def is_complete(self) -> bool:
        """True if the requested number of questions was selected."""
        return self.shortfall == 0

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"SelectionResult(questions={self.question_count}/"
            f"{self.requested_count}, eligible={self.eligible_count}, "
            f"warnings={len(self.warnings)})"
        )
