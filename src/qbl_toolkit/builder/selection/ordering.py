"""
Module: builder.selection.ordering

Purpose:
    Terminal re-sequencing of the final question list, applied once
    after selection.

Key Classes:
    - QuestionOrder: DEFAULT / RANDOM / ID / ALPHABETIC

Key Functions:
    - order_questions(): Apply an ordering
    - natural_id_key(): Sort key comparing digit runs numerically

Used By:
    - core.models.bank.Bank.order
    - builder.config: BuilderConfig.effective_order
"""

from __future__ import annotations

import random
import re
from enum import Enum, auto
from typing import Iterable, List, Tuple, Union

from qbl_toolkit.core.models import Question

_DIGITS_RE = re.compile(r"(\d+)")


class QuestionOrder(Enum):
    """
    How to sequence the final questions.

    Attributes:
        DEFAULT: Keep bank order (file order, then appearance)
        RANDOM: Shuffle with the shared seeded random source
        ID: Ascending by id, digit runs compared numerically
        ALPHABETIC: Ascending by stem text, stable for equal stems
    """

    DEFAULT = auto()
    RANDOM = auto()
    ID = auto()
    ALPHABETIC = auto()

    @classmethod
    def parse(cls, value: str) -> QuestionOrder:
        """
        Parse a command line order name.

        Args:
            value: "random", "id", "alpha" (or "alphabetic"), "default"

        Raises:
            ValueError: For an unknown name
        """
        names = {
            "default": cls.DEFAULT,
            "random": cls.RANDOM,
            "id": cls.ID,
            "alpha": cls.ALPHABETIC,
            "alphabetic": cls.ALPHABETIC,
        }
        try:
            return names[value.strip().lower()]
        except KeyError:
            raise ValueError(
                f"Unknown order {value!r} (expected one of: random, id, alpha)"
            ) from None


def natural_id_key(question_id: str) -> Tuple[Tuple[Union[int, str], ...], str]:
    """
    Sort key for ids: "q2" sorts before "q10".

    The raw id is the tie breaker, so "q01" and "q1" still order totally.
    """
    parts = tuple(
        int(chunk) if chunk.isdecimal() else chunk
        for chunk in _DIGITS_RE.split(question_id)
    )
    # Splitting on a capture group alternates text/number, so positions
    # of ints and strs line up between any two ids
    return parts, question_id


def order_questions(
    questions: Iterable[Question],
    order: QuestionOrder,
    rng: random.Random,
) -> List[Question]:
    """
    Return the questions in the requested order.

    Args:
        questions: Final question list
        order: Ordering to apply
        rng: Shared seeded random source; only RANDOM draws from it

    Returns:
        New list; the input is not modified
    """
    result = list(questions)
    if order is QuestionOrder.RANDOM:
        rng.shuffle(result)
    elif order is QuestionOrder.ID:
        result.sort(key=lambda q: natural_id_key(q.id))
    elif order is QuestionOrder.ALPHABETIC:
        result.sort(key=lambda q: q.stem)
    return result
