"""
Module: builder.loading.parser

Purpose:
    Line-driven parser for QBL bank files. Accumulates the lines of each
    blank-line separated entry into a draft, then finalizes the draft
    into an immutable Question.

Bank Format (markers must start in column 0):
    %...            comment (removed before parsing, see strip_comments)
    #id text        entry header: optional explicit id, optional stem text
    # text          header without an id (id derived from the stem)
    [*] text        correct choice ("[x]" also accepted)
    [ ] text        incorrect choice
    ^ tag1, tag2    tags (comma and/or whitespace separated)
    \\text           escaped line: backslash dropped, rest is plain text
        text        indented: continues the current choice, else stem text
    text            stem text (only before the first choice)
    <blank>         end of entry

Key Functions:
    - strip_comments(): Drop comment lines, keep original line numbers
    - parse_text(): Parse a whole bank held in memory

Key Classes:
    - BankParser: Per-file parser state with start/feed/finish lifecycle
    - ParseError: Malformed line (file, line_number, reason)

Dependencies:
    - re (std)
    - qbl_toolkit.core.models: Question, Choice, Bank

Used By:
    - builder.loading.loader: File loading
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Iterable, List, Optional, Tuple

from qbl_toolkit.core.models import Bank, Choice, Question, derive_question_id

logger = logging.getLogger(__name__)

COMMENT_MARK = "%"
HEADER_MARK = "#"
TAG_MARK = "^"
ESCAPE_MARK = "\\"
CHOICE_MARK = "["

CORRECT_MARKERS = frozenset({"*", "x", "X"})
INCORRECT_MARKERS = frozenset({" "})

_CHOICE_RE = re.compile(r"^\[(.)\](.*)$")
_TAG_SPLIT_RE = re.compile(r"[,\s]+")

# Characters that must be escaped at the start of a plain text line
MARKER_CHARS = frozenset({COMMENT_MARK, HEADER_MARK, TAG_MARK, ESCAPE_MARK, CHOICE_MARK})

NumberedLine = Tuple[int, str]


class ParseError(Exception):
    """Malformed line in a bank file."""

    def __init__(self, file: str, line_number: int, reason: str):
        super().__init__(f"{file}:{line_number}: {reason}")
        self.file = file
        self.line_number = line_number
        self.reason = reason


@dataclass
class _ChoiceDraft:
    is_correct: bool
    lines: List[str] = field(default_factory=list)


@dataclass
class _EntryDraft:
    """In-progress entry; mutable until finalized."""

    line_number: int
    explicit_id: Optional[str] = None
    stem_lines: List[str] = field(default_factory=list)
    choices: List[_ChoiceDraft] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    has_header: bool = False

    @property
    def is_empty(self) -> bool:
        return not (
            self.has_header or self.stem_lines or self.choices or self.tags
        )


def strip_comments(lines: Iterable[str]) -> List[NumberedLine]:
    """
    Remove comment lines, numbering the rest by their original position.

    Args:
        lines: Raw file lines

    Returns:
        (line_number, text) pairs for every non-comment line

    Example:
        >>> strip_comments(["% note", "# Q?"])
        [(2, '# Q?')]
    """
    return [
        (number, line)
        for number, line in enumerate(lines, 1)
        if not line.startswith(COMMENT_MARK)
    ]


class BankParser:
    """
    Parses bank lines into questions appended to a Bank.

    One instance can parse many files; start_file() resets the per-file
    state (line number, entry count, in-progress entry) but never the
    bank. Questions from a file are committed to the bank only when the
    whole file parsed cleanly.

    Example:
        >>> parser = BankParser(bank)
        >>> parser.start_file("unit1.qbl")
        >>> for number, line in strip_comments(text.splitlines()):
        ...     parser.feed(line, number)
        >>> parser.finish_file()
    """

    def __init__(self, bank: Bank):
        self.bank = bank
        self._source = ""
        self._line_number = 0
        self._entries_in_file = 0
        self._draft: Optional[_EntryDraft] = None
        self._file_questions: List[Question] = []
        self._in_file = False

    # ─────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def start_file(self, source: str) -> None:
        """
        Begin parsing a new source file.

        Args:
            source: File name recorded as question provenance
        """
        self._source = source
        self._line_number = 0
        self._entries_in_file = 0
        self._draft = None
        self._file_questions = []
        self._in_file = True

    def feed(self, line: str, line_number: Optional[int] = None) -> None:
        """
        Process one (comment-free) line.

        Args:
            line: Line text, with or without trailing newline
            line_number: Original 1-based line number (default: next line)

        Raises:
            ParseError: If the line fits no stem/choice/tag syntax
        """
        if not self._in_file:
            raise RuntimeError("feed() called before start_file()")

        self._line_number = line_number if line_number is not None else self._line_number + 1
        text = line.rstrip()

        if not text:
            self._finalize_entry()
            return

        if self._draft is None:
            self._draft = _EntryDraft(line_number=self._line_number)
            self._entries_in_file += 1

        first = text[0]
        if first == HEADER_MARK:
            self._read_header(text[1:])
        elif first == CHOICE_MARK:
            self._read_choice(text)
        elif first == TAG_MARK:
            self._read_tags(text[1:])
        elif first == ESCAPE_MARK:
            self._read_text(text[1:], indented=False)
        elif first.isspace():
            self._read_text(text, indented=True)
        else:
            self._read_text(text, indented=False)

    def finish_file(self) -> List[Question]:
        """
        Finalize any pending entry and commit the file's questions.

        Returns:
            Questions added to the bank from this file
        """
        self._finalize_entry()
        self.bank.new_file(self._source)
        committed = [self.bank.add(q) for q in self._file_questions]
        logger.debug(
            f"Parsed {len(committed)} questions from {self._source} "
            f"({self._line_number} lines)"
        )
        self._file_questions = []
        self._in_file = False
        return committed

    def abort_file(self) -> None:
        """Drop everything parsed from the current file."""
        self._draft = None
        self._file_questions = []
        self._in_file = False

    def parse_lines(self, source: str, lines: Iterable[NumberedLine]) -> List[Question]:
        """
        Parse a whole file's numbered lines.

        Fail-fast: the first malformed line aborts the file and nothing
        from it reaches the bank.

        Args:
            source: File name
            lines: (line_number, text) pairs with comments removed

        Returns:
            Questions added to the bank

        Raises:
            ParseError: On the first malformed line
        """
        self.start_file(source)
        try:
            for number, line in lines:
                self.feed(line, number)
        except ParseError:
            self.abort_file()
            raise
        return self.finish_file()

    # ─────────────────────────────────────────────────────────────────────────
    # Line Handlers
    # ─────────────────────────────────────────────────────────────────────────

    def _read_header(self, rest: str) -> None:
        draft = self._draft
        if not draft.is_empty:
            raise self._error(
                "question header must start a new entry (missing blank line?)"
            )
        draft.has_header = True

        if rest and not rest[0].isspace():
            parts = rest.split(None, 1)
            if parts[0].startswith(COMMENT_MARK):
                raise self._error(
                    f"question id {parts[0]!r} may not start with '{COMMENT_MARK}'"
                )
            draft.explicit_id = parts[0]
            rest = parts[1] if len(parts) > 1 else ""

        rest = rest.strip()
        if rest:
            draft.stem_lines.append(rest)

    def _read_choice(self, text: str) -> None:
        match = _CHOICE_RE.match(text)
        marker = match.group(1) if match else None
        if marker in CORRECT_MARKERS:
            is_correct = True
        elif marker in INCORRECT_MARKERS:
            is_correct = False
        else:
            raise self._error(
                f"unrecognised choice marker in {text[:8]!r} "
                f"(use '[*]' for the correct choice, '[ ]' otherwise)"
            )

        choice = _ChoiceDraft(is_correct=is_correct)
        content = match.group(2).strip()
        if content:
            choice.lines.append(content)
        self._draft.choices.append(choice)

    def _read_tags(self, rest: str) -> None:
        tags = [tag for tag in _TAG_SPLIT_RE.split(rest) if tag]
        if not tags:
            raise self._error("tag line declares no tags")
        self._draft.tags.extend(tags)

    def _read_text(self, text: str, *, indented: bool) -> None:
        draft = self._draft
        if draft.choices:
            if not indented:
                raise self._error(
                    "question text after choices (indent the line to continue a choice)"
                )
            draft.choices[-1].lines.append(text.strip())
        else:
            draft.stem_lines.append(text)

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _finalize_entry(self) -> None:
        draft = self._draft
        self._draft = None
        if draft is None or draft.is_empty:
            return

        stem = "\n".join(draft.stem_lines).strip()
        if draft.explicit_id:
            question_id = draft.explicit_id
        elif stem:
            question_id = derive_question_id(stem)
        else:
            # Nothing to hash; the validator will report the empty stem
            question_id = f"{PurePath(self._source).stem}-{self._entries_in_file}"

        question = Question(
            id=question_id,
            stem=stem,
            choices=tuple(
                Choice("\n".join(c.lines).strip(), c.is_correct)
                for c in draft.choices
            ),
            tags=frozenset(draft.tags),
            source_file=self._source,
            line_number=draft.line_number,
            has_explicit_id=draft.explicit_id is not None,
        )
        self._file_questions.append(question)

    def _error(self, reason: str) -> ParseError:
        return ParseError(self._source, self._line_number, reason)


def parse_text(text: str, source: str = "<string>", bank: Optional[Bank] = None) -> Bank:
    """
    Parse bank text held in memory.

    Args:
        text: Full bank text (comments allowed)
        source: Name recorded as provenance
        bank: Bank to append to (default: a new one)

    Returns:
        The bank with the parsed questions appended

    Raises:
        ParseError: On the first malformed line
    """
    bank = bank if bank is not None else Bank()
    BankParser(bank).parse_lines(source, strip_comments(text.splitlines()))
    return bank
