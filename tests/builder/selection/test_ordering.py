"""
Unit tests for terminal question ordering.
"""

import random

import pytest

from qbl_toolkit.builder.selection import QuestionOrder, natural_id_key, order_questions


class TestQuestionOrderParse:
    """Tests for QuestionOrder.parse."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("random", QuestionOrder.RANDOM),
            ("id", QuestionOrder.ID),
            ("alpha", QuestionOrder.ALPHABETIC),
            ("ALPHA", QuestionOrder.ALPHABETIC),
            ("default", QuestionOrder.DEFAULT),
        ],
    )
    def test_parse_known_names(self, name, expected):
        assert QuestionOrder.parse(name) is expected

    def test_parse_unknown_name_then_raises(self):
        with pytest.raises(ValueError, match="Unknown order"):
            QuestionOrder.parse("sideways")


class TestOrderQuestions:
    """Tests for order_questions function."""

    def test_order_default_keeps_input_order(self, ten_question_pool):
        result = order_questions(ten_question_pool, QuestionOrder.DEFAULT, random.Random(0))
        assert result == ten_question_pool
        assert result is not ten_question_pool

    def test_order_by_id_uses_natural_sort(self, ten_question_pool):
        # Arrange
        shuffled = list(reversed(ten_question_pool))

        # Act
        result = order_questions(shuffled, QuestionOrder.ID, random.Random(0))

        # Assert
        assert [q.id for q in result] == [f"q{n}" for n in range(1, 11)]

    def test_order_alphabetic_sorts_by_stem_stably(self, make_question):
        # Arrange
        questions = [
            make_question("a", stem="Beta"),
            make_question("b", stem="Alpha"),
            make_question("c", stem="Beta"),
            make_question("d", stem="alpha"),
        ]

        # Act
        result = order_questions(questions, QuestionOrder.ALPHABETIC, random.Random(0))

        # Assert
        assert [q.id for q in result] == ["b", "a", "c", "d"]

    def test_order_random_is_seeded_permutation(self, ten_question_pool):
        first = order_questions(ten_question_pool, QuestionOrder.RANDOM, random.Random(8))
        second = order_questions(ten_question_pool, QuestionOrder.RANDOM, random.Random(8))

        assert [q.id for q in first] == [q.id for q in second]
        assert sorted(q.id for q in first) == sorted(q.id for q in ten_question_pool)

    def test_order_random_does_not_mutate_input(self, ten_question_pool):
        before = list(ten_question_pool)
        order_questions(ten_question_pool, QuestionOrder.RANDOM, random.Random(8))
        assert ten_question_pool == before


class TestNaturalIdKey:
    """Tests for natural_id_key function."""

    def test_natural_key_numeric_runs(self):
        ids = ["q10", "q2", "q1", "unit2-q3", "unit10-q1"]
        assert sorted(ids, key=natural_id_key) == ["q1", "q2", "q10", "unit2-q3", "unit10-q1"]

    def test_natural_key_mixed_leading_digits_do_not_fail(self):
        ids = ["q1", "1q", "a"]
        assert sorted(ids, key=natural_id_key) == ["1q", "a", "q1"]

    def test_natural_key_equal_numbers_then_raw_id_breaks_tie(self):
        assert sorted(["q1", "q01"], key=natural_id_key) == ["q01", "q1"]

    def test_natural_key_when_superscript_digit_then_kept_as_text(self):
        assert sorted(["\u00b2", "a1"], key=natural_id_key) == ["a1", "\u00b2"]

    def test_order_by_id_when_superscript_id_then_no_error(self, make_question):
        questions = [make_question("\u00b2"), make_question("a1")]

        result = order_questions(questions, QuestionOrder.ID, random.Random(0))

        assert [q.id for q in result] == ["a1", "\u00b2"]
