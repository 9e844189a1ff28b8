"""
Unit Tests for Question Models

Tests for Choice, Question and derived identifiers.
"""

import pytest
from dataclasses import FrozenInstanceError

from qbl_toolkit.core.models import Choice, Question, derive_question_id


class TestDeriveQuestionId:
    """Tests for derive_question_id function."""

    def test_derive_id_when_same_stem_then_same_id(self):
        """Derived ids are stable across calls."""
        assert derive_question_id("What is 2+2?") == derive_question_id("What is 2+2?")

    def test_derive_id_when_whitespace_differs_then_same_id(self):
        """Re-wrapping a stem keeps its id."""
        # Arrange
        wrapped = "What is\n  2+2?"
        flat = "What is 2+2?"

        # Act / Assert
        assert derive_question_id(wrapped) == derive_question_id(flat)

    def test_derive_id_when_different_stem_then_different_id(self):
        assert derive_question_id("What is 2+2?") != derive_question_id("What is 3+3?")

    def test_derive_id_format(self):
        """Ids are 'q' followed by ten hex digits."""
        qid = derive_question_id("Any stem")
        assert qid.startswith("q")
        assert len(qid) == 11
        int(qid[1:], 16)


class TestQuestion:
    """Tests for Question dataclass."""

    @pytest.fixture
    def question(self) -> Question:
        return Question(
            id="cap1",
            stem="Capital of France?",
            choices=(Choice("Lyon"), Choice("Paris", True), Choice("Nice")),
            tags=frozenset({"geo", "europe"}),
            source_file="unit1.qbl",
            line_number=4,
        )

    def test_question_is_immutable(self, question):
        with pytest.raises(FrozenInstanceError):
            question.stem = "changed"

    def test_correct_choice_when_one_marked_then_returned(self, question):
        assert question.correct_index == 1
        assert question.correct_choice.text == "Paris"
        assert question.correct_choices == (Choice("Paris", True),)

    def test_correct_choice_when_none_marked_then_none(self):
        # Arrange
        question = Question(id="x", stem="?", choices=(Choice("a"), Choice("b")))

        # Act / Assert
        assert question.correct_index is None
        assert question.correct_choice is None
        assert question.correct_choices == ()

    def test_has_tag(self, question):
        assert question.has_tag("geo")
        assert not question.has_tag("asia")

    def test_has_any_tag(self, question):
        assert question.has_any_tag({"asia", "europe"})
        assert not question.has_any_tag({"asia", "maths"})
        assert not question.has_any_tag(set())

    def test_location_when_file_and_line_then_file_colon_line(self, question):
        assert question.location == "unit1.qbl:4"

    def test_location_when_no_source_then_pool_position(self):
        question = Question(id="x", stem="?", raw_order_index=4)
        assert question.location == "#5"
