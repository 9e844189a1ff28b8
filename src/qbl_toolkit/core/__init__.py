"""
QBL Toolkit Core Package

Shared data models and validation. These are the single source of truth
for every builder module and renderer.
"""

from .models import Bank, Choice, Question
from .models.selection import SelectionResult
from .validation import ValidationError, ValidationIssue

__all__ = [
    "Bank",
    "Choice",
    "Question",
    "SelectionResult",
    "ValidationError",
    "ValidationIssue",
]
