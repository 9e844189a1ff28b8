"""
Question validation.

Structural checks run once on the loaded pool, before selection.
"""

from .validator import (
    validate_question,
    validate_questions,
    ValidationError,
    ValidationIssue,
)

__all__ = [
    "validate_question",
    "validate_questions",
    "ValidationError",
    "ValidationIssue",
]
