"""
Module: bank

Purpose:
    Provides the Bank aggregate - the insertion-ordered pool of all
    questions loaded from one or more bank files, with an id index for
    avoid-list filtering and logging.

Key Classes:
    - Bank: Question pool with a parse → validate → generate → order lifecycle
    - BankState: OPEN while parsing, VALIDATED once checks pass
    - BankStateError: Mutation attempted in the wrong lifecycle state

Lifecycle:
    OPEN       add()/extend() append questions (one or more files)
    validate() OPEN → VALIDATED, or ValidationError with every issue
    generate() VALIDATED only, at most once; replaces pool with selection
    order()    VALIDATED only; permutes, never adds or removes

Dependencies:
    - dataclasses (std)
    - enum (std)
    - random (std)
    - .questions.Question
    - core.validation (validation)
    - builder.selection (imported lazily to avoid a package cycle)

Used By:
    - builder.loading.loader
    - builder.controller
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from enum import Enum, auto
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from .questions import Question
from .selection import SelectionResult

if TYPE_CHECKING:
    from qbl_toolkit.builder.selection.config import SelectionConfig
    from qbl_toolkit.builder.selection.ordering import QuestionOrder

logger = logging.getLogger(__name__)


class BankStateError(Exception):
    """Bank operation not allowed in its current lifecycle state."""
    pass


class BankState(Enum):
    """Lifecycle state of a Bank."""

    OPEN = auto()       # Accepting questions
    VALIDATED = auto()  # Frozen except for generate()/order()


class Bank:
    """
    Pool of parsed questions.

    Questions keep insertion order (file order, then order within the
    file). Duplicate ids are kept in the pool so validation can report
    them; the id index resolves to the first occurrence.

    Example:
        >>> bank = Bank()
        >>> bank.add(question)
        >>> bank.validate()
        >>> result = bank.generate(SelectionConfig(count=5), random.Random(42))
        >>> bank.order(QuestionOrder.RANDOM, rng)
    """

    def __init__(self) -> None:
        self._questions: List[Question] = []
        self._by_id: Dict[str, Question] = {}
        self._source_files: List[str] = []
        self._state = BankState.OPEN
        self._generated = False

    # ─────────────────────────────────────────────────────────────────────────
    # Parse Phase
    # ─────────────────────────────────────────────────────────────────────────

    def new_file(self, name: str) -> None:
        """
        Record that questions from a new source file follow.

        Args:
            name: Bank file name
        """
        self._require_state(BankState.OPEN, "start a new file")
        self._source_files.append(name)

    def add(self, question: Question) -> Question:
        """
        Append a question, assigning its pool position.

        Args:
            question: Parsed question

        Returns:
            The stored question (with raw_order_index set)
        """
        self._require_state(BankState.OPEN, "add questions")
        stored = replace(question, raw_order_index=len(self._questions))
        self._questions.append(stored)
        self._by_id.setdefault(stored.id, stored)
        return stored

    def extend(self, questions: List[Question]) -> None:
        """Append several questions in order."""
        for question in questions:
            self.add(question)

    # ─────────────────────────────────────────────────────────────────────────
    # Read Access
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def questions(self) -> tuple[Question, ...]:
        """Current pool as a read-only tuple."""
        return tuple(self._questions)

    @property
    def question_ids(self) -> tuple[str, ...]:
        """Ids of the current pool, in order."""
        return tuple(q.id for q in self._questions)

    @property
    def source_files(self) -> tuple[str, ...]:
        """Files that contributed to the pool."""
        return tuple(self._source_files)

    @property
    def state(self) -> BankState:
        return self._state

    @property
    def is_validated(self) -> bool:
        return self._state is BankState.VALIDATED

    def get(self, question_id: str) -> Optional[Question]:
        """
        Find a question by id.

        Args:
            question_id: Id to look up

        Returns:
            First question with that id, or None
        """
        return self._by_id.get(question_id)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._by_id

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(tuple(self._questions))

    # ─────────────────────────────────────────────────────────────────────────
    # Validate / Generate / Order
    # ─────────────────────────────────────────────────────────────────────────

    def validate(self) -> None:
        """
        Check every question and freeze the bank.

        Raises:
            ValidationError: With all issues found; bank stays OPEN
        """
        from qbl_toolkit.core.validation import ValidationError, validate_questions

        self._require_state(BankState.OPEN, "validate")
        issues = validate_questions(self._questions)
        if issues:
            raise ValidationError(
                f"{len(issues)} problem(s) found in question bank",
                errors=issues,
            )
        self._state = BankState.VALIDATED
        logger.info(f"Validated {len(self._questions)} questions")

    def generate(
        self,
        config: SelectionConfig,
        rng: random.Random,
    ) -> SelectionResult:
        """
        Replace the pool with a constrained random selection.

        Args:
            config: Selection constraints
            rng: Shared seeded random source (consumed before ordering)

        Returns:
            SelectionResult with the chosen questions and any warnings

        Raises:
            BankStateError: If not validated or already generated
        """
        from qbl_toolkit.builder.selection import select_questions

        self._require_state(BankState.VALIDATED, "generate")
        if self._generated:
            raise BankStateError("Questions have already been generated from this bank")

        result = select_questions(self._questions, config, rng)
        self._questions = list(result.questions)
        self._by_id = {q.id: q for q in self._questions}
        self._generated = True
        return result

    def order(self, order: QuestionOrder, rng: random.Random) -> None:
        """
        Re-sequence the pool in place.

        Args:
            order: Terminal ordering to apply
            rng: Shared seeded random source (used by RANDOM only)
        """
        from qbl_toolkit.builder.selection.ordering import order_questions

        self._require_state(BankState.VALIDATED, "reorder")
        self._questions = order_questions(self._questions, order, rng)

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _require_state(self, expected: BankState, action: str) -> None:
        if self._state is not expected:
            raise BankStateError(
                f"Cannot {action}: bank is {self._state.name}, "
                f"expected {expected.name}"
            )

    def __repr__(self) -> str:
        return (
            f"Bank(questions={len(self._questions)}, "
            f"files={len(self._source_files)}, state={self._state.name})"
        )
