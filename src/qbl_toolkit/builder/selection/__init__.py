"""
Module: builder.selection

Purpose:
    Question selection and ordering for generated exams. Chooses a
    constrained random subset of the bank, then re-sequences it.

Key Functions:
    - select_questions(): Main entry point for selection
    - order_questions(): Terminal ordering

Key Classes:
    - SelectionConfig: Configuration for selection algorithm
    - Selector: Main selection orchestrator
    - QuestionOrder: Ordering modes

Dependencies:
    - qbl_toolkit.core.models: Question, SelectionResult

Used By:
    - builder.controller: Main build controller
    - core.models.bank.Bank
"""

from .config import IncludePolicy, SelectionConfig
from .selector import select_questions, Selector
from .ordering import QuestionOrder, natural_id_key, order_questions

__all__ = [
    "IncludePolicy",
    "SelectionConfig",
    "select_questions",
    "Selector",
    "QuestionOrder",
    "natural_id_key",
    "order_questions",
]
