"""
Core Models Package

Question records and the Bank aggregate that owns them.

All question-level models are frozen dataclasses: once the parser has
built a Question its choices and tags never change. The Bank is the one
mutable object, and only along its parse → validate → generate → order
lifecycle.
"""

from .questions import Choice, Question, derive_question_id
from .bank import Bank, BankState, BankStateError
from .selection import (
    SelectionResult,
    SelectionWarning,
    QuotaUnmet,
    InsufficientPool,
)

__all__ = [
    "Choice",
    "Question",
    "derive_question_id",
    "Bank",
    "BankState",
    "BankStateError",
    "SelectionResult",
    "SelectionWarning",
    "QuotaUnmet",
    "InsufficientPool",
]
