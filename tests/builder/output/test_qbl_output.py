"""
Unit tests for the normalized QBL writer.
"""

import io

import pytest

from qbl_toolkit.builder.loading import parse_text
from qbl_toolkit.builder.output import format_question, render_qbl
from qbl_toolkit.core.models import Choice, Question


def record(question: Question) -> tuple:
    """Fields that must survive a write → parse cycle."""
    return (question.id, question.stem, question.choices, question.tags)


def reparse(questions) -> list[Question]:
    out = io.StringIO()
    render_qbl(questions, out)
    return list(parse_text(out.getvalue()).questions)


class TestFormatQuestion:
    """Tests for format_question function."""

    def test_format_simple_question(self):
        # Arrange
        question = Question(
            id="cap1",
            stem="Capital of France?",
            choices=(Choice("Paris", True), Choice("Lyon")),
            tags=frozenset({"geo", "europe"}),
        )

        # Act
        lines = format_question(question)

        # Assert
        assert lines == [
            "#cap1 Capital of France?",
            "[*] Paris",
            "[ ] Lyon",
            "^ europe, geo",
        ]

    def test_format_escapes_marker_lines_in_stem(self):
        question = Question(
            id="m",
            stem="Look at this:\n[*] not a choice\n\n^ not a tag",
            choices=(Choice("a", True), Choice("b")),
        )

        lines = format_question(question)

        assert lines[:4] == ["#m Look at this:", "\\[*] not a choice", "\\", "\\^ not a tag"]

    def test_format_indents_choice_continuation(self):
        question = Question(
            id="c",
            stem="Q?",
            choices=(Choice("line one\nline two", True), Choice("b")),
        )

        assert format_question(question)[1:3] == ["[*] line one", "    line two"]

    def test_format_without_tags_has_no_tag_line(self):
        question = Question(id="n", stem="Q?", choices=(Choice("a", True), Choice("b")))
        assert not any(line.startswith("^") for line in format_question(question))


class TestRenderQblRoundTrip:
    """Parsing normalized output yields identical records."""

    def test_round_trip_sample_bank(self, sample_bank_text):
        # Arrange
        original = list(parse_text(sample_bank_text).questions)

        # Act
        again = reparse(original)

        # Assert
        assert [record(q) for q in again] == [record(q) for q in original]

    @pytest.mark.parametrize(
        "stem",
        [
            "Plain stem",
            "Two\nlines",
            "Starts fine\n#looks like a header",
            "Starts fine\n% looks like a comment",
            "Starts fine\n\\ starts with a backslash",
            "Gap\n\nbetween paragraphs",
            "Keep\n    indented code",
        ],
    )
    def test_round_trip_awkward_stems(self, stem):
        question = Question(
            id="x1",
            stem=stem,
            choices=(Choice("[*] literal marker in text", True), Choice("two\nlines")),
            tags=frozenset({"t"}),
        )

        assert [record(q) for q in reparse([question])] == [record(question)]

    def test_render_separates_entries_with_blank_line(self, sample_bank_text):
        out = io.StringIO()
        render_qbl(parse_text(sample_bank_text).questions, out)
        assert out.getvalue().count("\n\n") == 2
        assert out.getvalue().endswith("\n")
        assert not out.getvalue().endswith("\n\n")
