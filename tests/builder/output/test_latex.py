"""
Unit tests for the GradeScope and plain LaTeX renderers.
"""

import io

import pytest

from qbl_toolkit.builder.output import render_gradescope, render_latex
from qbl_toolkit.builder.output.latex import choice_letter
from qbl_toolkit.core.models import Choice, Question


@pytest.fixture
def questions() -> list[Question]:
    return [
        Question(
            id="cap1",
            stem="Capital of France?",
            choices=(Choice("Lyon"), Choice("Paris", True)),
        ),
        Question(
            id="pct",
            stem="What is 50% of $10?",
            choices=(Choice("$5", True), Choice("$2")),
        ),
    ]


class TestRenderGradescope:
    """Tests for render_gradescope function."""

    def test_render_uses_exam_class_and_correct_choice(self, questions):
        # Arrange
        out = io.StringIO()

        # Act
        render_gradescope(questions, out, title="Quiz 1")
        text = out.getvalue()

        # Assert
        assert text.startswith("\\documentclass[11pt]{exam}")
        assert "\\begin{checkboxes}" in text
        assert "\\CorrectChoice Paris" in text
        assert "\\choice Lyon" in text
        assert text.count("\\question ") == 2
        assert "50\\% of \\$10?" in text
        assert text.rstrip().endswith("\\end{document}")

    def test_render_compressed_uses_oneparcheckboxes(self, questions):
        out = io.StringIO()
        render_gradescope(questions, out, title="Quiz", compressed=True)
        assert "\\begin{oneparcheckboxes}" in out.getvalue()
        assert "\\begin{checkboxes}" not in out.getvalue()


class TestRenderLatex:
    """Tests for render_latex function."""

    def test_render_article_with_answer_key(self, questions):
        # Arrange
        out = io.StringIO()

        # Act
        render_latex(questions, out, title="Quiz & Test")
        text = out.getvalue()

        # Assert
        assert "\\documentclass[11pt]{article}" in text
        assert "\\title{Quiz \\& Test}" in text
        assert "\\section*{Answer Key}" in text
        assert "\\item (b) % cap1" in text
        assert "\\item (a) % pct" in text

    def test_choice_letters(self):
        assert [choice_letter(i) for i in range(4)] == ["a", "b", "c", "d"]
