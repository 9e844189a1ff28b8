"""
Module: questions

Purpose:
    Provides the Choice and Question dataclasses - the parsed representation
    of one multiple-choice entry from a bank file. Immutable once built;
    structural checks live in core.validation so that every defect in a
    bank can be reported in a single run.

Key Functions:
    - Question.correct_choices: Choices marked correct
    - Question.correct_index: Position of the single correct choice
    - Question.has_any_tag(tags): Tag intersection test used by selection
    - derive_question_id(stem): Stable content-derived identifier

Dependencies:
    - dataclasses (std)
    - functools (std)
    - hashlib (std)

Used By:
    - core.models.bank.Bank
    - builder.loading.parser
    - builder.selection
    - builder.output (all renderers)
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, Optional

# Hex digits kept from the stem digest for derived ids
DERIVED_ID_LENGTH = 10


def derive_question_id(stem: str) -> str:
    """
    Build a stable identifier from question text.

    Whitespace is normalised first so re-wrapping a stem does not
    change its id.

    Args:
        stem: Question text

    Returns:
        Identifier like "q3f2a9c01be"

    Example:
        >>> derive_question_id("What is  2+2?") == derive_question_id("What is 2+2?")
        True
    """
    normalised = " ".join(stem.split())
    digest = hashlib.sha1(normalised.encode("utf-8")).hexdigest()
    return f"q{digest[:DERIVED_ID_LENGTH]}"


@dataclass(frozen=True)
class Choice:
    """
    One answer option.

    Attributes:
        text: Option text (may span several lines)
        is_correct: Whether this option is the answer
    """

    text: str
    is_correct: bool = False


@dataclass(frozen=True)
class Question:
    """
    Parsed question record (immutable).

    Attributes:
        id: Identifier unique within a bank ("#id" header or derived from stem)
        stem: Question text, trimmed; lines joined with "\\n"
        choices: Ordered answer options
        tags: Free-form labels used for selection constraints
        source_file: Bank file the entry came from (diagnostics only)
        raw_order_index: Position in the loaded pool; default ordering key
        line_number: 1-based line where the entry starts in source_file
        has_explicit_id: True if id came from the markup

    Invariants (checked by core.validation, not here):
        - stem is non-empty
        - at least two choices, exactly one correct
        - id unique across the bank

    Example:
        >>> q = Question(
        ...     id="cap1",
        ...     stem="Capital of France?",
        ...     choices=(Choice("Paris", True), Choice("Lyon")),
        ...     tags=frozenset({"geo"}),
        ... )
        >>> q.correct_choice.text
        'Paris'
    """

    id: str
    stem: str
    choices: tuple[Choice, ...] = ()
    tags: frozenset[str] = frozenset()
    source_file: str = ""
    raw_order_index: int = 0
    line_number: int = 0
    has_explicit_id: bool = False

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @cached_property
    def correct_choices(self) -> tuple[Choice, ...]:
        """Choices marked correct (exactly one in a valid question)."""
        return tuple(c for c in self.choices if c.is_correct)

    @cached_property
    def correct_index(self) -> Optional[int]:
        """
        Index of the first correct choice.

        Returns:
            Position in choices, or None if no choice is marked correct
        """
        for i, choice in enumerate(self.choices):
            if choice.is_correct:
                return i
        return None

    @property
    def correct_choice(self) -> Optional[Choice]:
        """The correct choice, or None if none is marked."""
        index = self.correct_index
        return self.choices[index] if index is not None else None

    @property
    def location(self) -> str:
        """Human readable "file:line" for error messages."""
        if self.source_file and self.line_number:
            return f"{self.source_file}:{self.line_number}"
        return self.source_file or f"#{self.raw_order_index + 1}"

    # ─────────────────────────────────────────────────────────────────────────
    # Query Methods
    # ─────────────────────────────────────────────────────────────────────────

    def has_tag(self, tag: str) -> bool:
        """Check if the question carries a tag."""
        return tag in self.tags

    def has_any_tag(self, tags: Iterable[str]) -> bool:
        """
        Check if the question carries at least one of the given tags.

        Args:
            tags: Tags to test against

        Returns:
            True if any tag matches
        """
        return not self.tags.isdisjoint(tags)

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"Question({self.id!r}, choices={len(self.choices)}, "
            f"tags={sorted(self.tags)}, at={self.location})"
        )
