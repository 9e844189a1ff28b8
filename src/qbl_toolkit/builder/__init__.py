"""
Module: builder

Purpose:
    Quiz building pipeline: loads QBL bank files, validates them,
    optionally generates a tag-constrained random subset, orders it,
    logs the chosen ids and renders the result.

Key Functions:
    - load_bank(): Load bank files into a Bank
    - select_questions(): Tag-constrained random selection
    - build_quiz(): Main entry point for quiz generation

Key Classes:
    - BuilderConfig: Configuration for building
    - SelectionConfig: Configuration for selection algorithm

Dependencies:
    - qbl_toolkit.core.models: Question, Bank, SelectionResult
    - qbl_toolkit.core.validation: Structural checks
    - portalocker (via common.file_locking): ID log locking

Used By:
    - qbl_toolkit.cli: Command line front end
"""

from .config import BuilderConfig
from .loading import load_bank, LoaderError, BankLoadError, ParseError
from .selection import SelectionConfig, select_questions
from .controller import build_quiz, BuildResult, BuildError

__all__ = [
    # Config
    "BuilderConfig",
    "SelectionConfig",
    # Loading
    "load_bank",
    "LoaderError",
    "BankLoadError",
    "ParseError",
    # Selection
    "select_questions",
    # Controller
    "build_quiz",
    "BuildResult",
    "BuildError",
]
