"""
Module: builder.loading.loader

Purpose:
    Load bank files into a single Bank. Reads each file, strips comment
    lines and feeds the rest to the BankParser. Parse errors are
    collected per file so every broken file is reported in one run.

Key Functions:
    - load_bank(): Load several bank files into one pool
    - load_bank_file(): Load a single file

Key Classes:
    - LoaderError: A bank file is missing or unreadable
    - BankLoadError: One or more files had parse errors

Dependencies:
    - pathlib (std)
    - qbl_toolkit.core.models: Bank
    - builder.loading.parser: BankParser, strip_comments

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from qbl_toolkit.core.models import Bank, Question

from .parser import BankParser, ParseError, strip_comments

logger = logging.getLogger(__name__)


class LoaderError(Exception):
    """Error reading a bank file from disk."""
    pass


class BankLoadError(Exception):
    """One or more bank files failed to parse."""

    def __init__(self, errors: List[ParseError]):
        super().__init__(
            f"{len(errors)} bank file(s) failed to parse: "
            + "; ".join(str(e) for e in errors)
        )
        self.errors = errors


def _read_lines(path: Path) -> List[str]:
    """Read a bank file's lines, raising LoaderError on any I/O failure."""
    if not path.exists():
        raise LoaderError(f"Bank file not found: {path}")
    if not path.is_file():
        raise LoaderError(f"Bank path is not a file: {path}")
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise LoaderError(f"Cannot read bank file {path}: {e}") from e


def load_bank_file(path: Path, parser: BankParser) -> List[Question]:
    """
    Load one bank file through an existing parser.

    Args:
        path: Bank file
        parser: Parser bound to the target bank

    Returns:
        Questions added from this file

    Raises:
        LoaderError: If the file cannot be read
        ParseError: On the first malformed line (file is skipped)
    """
    lines = _read_lines(path)
    questions = parser.parse_lines(str(path), strip_comments(lines))
    logger.info(f"Loaded {len(questions)} questions from {path}")
    return questions


def load_bank(
    paths: Iterable[Path],
    *,
    bank: Optional[Bank] = None,
) -> Bank:
    """
    Load bank files, in order, into one pool.

    Process:
    1. For each file: read, strip comments, parse
    2. On a parse error, record it and continue with the next file
    3. After all files, raise BankLoadError if anything failed

    Args:
        paths: Bank files in load order
        bank: Bank to append to (default: a new one)

    Returns:
        Bank holding every question from every file

    Raises:
        LoaderError: Immediately, if a file is missing or unreadable
        BankLoadError: After all files, if any failed to parse

    Example:
        >>> bank = load_bank([Path("unit1.qbl"), Path("unit2.qbl")])
        >>> len(bank)
        42
    """
    bank = bank if bank is not None else Bank()
    parser = BankParser(bank)
    errors: List[ParseError] = []

    for path in paths:
        try:
            load_bank_file(Path(path), parser)
        except ParseError as e:
            logger.error(f"Parse error: {e}")
            errors.append(e)

    if errors:
        raise BankLoadError(errors)

    logger.info(
        f"Bank holds {len(bank)} questions from {len(bank.source_files)} file(s)"
    )
    return bank
