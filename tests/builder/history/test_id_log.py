"""
Unit tests for the question id log and avoid files.
"""

import logging
import random

import pytest

from qbl_toolkit.builder.history import load_avoid_file, load_avoid_files, log_questions
from qbl_toolkit.builder.loading import LoaderError, ParseError, parse_text
from qbl_toolkit.builder.selection import SelectionConfig, select_questions


class TestLogQuestions:
    """Tests for log_questions function."""

    def test_log_writes_one_id_per_line(self, tmp_path):
        # Arrange
        path = tmp_path / "logs" / "midterm.ids"

        # Act
        count = log_questions(["q1", "cap7", "q3"], path)

        # Assert
        assert count == 3
        assert path.read_bytes() == b"q1\ncap7\nq3\n"

    def test_log_replaces_existing_file(self, tmp_path):
        path = tmp_path / "run.ids"
        log_questions(["old1", "old2"], path)

        log_questions(["new"], path)

        assert path.read_text(encoding="utf-8") == "new\n"


class TestLoadAvoidFile:
    """Tests for load_avoid_file and load_avoid_files."""

    def test_load_avoid_skips_blank_and_comment_lines(self, tmp_path):
        path = tmp_path / "avoid.ids"
        path.write_text("% used in 2025\nq1\n\n  q2  \n", encoding="utf-8")

        assert load_avoid_file(path) == {"q1", "q2"}

    def test_load_avoid_when_line_has_several_tokens_then_skipped_with_warning(
        self, tmp_path, caplog
    ):
        path = tmp_path / "avoid.ids"
        path.write_text("q1\nq2 q3\n", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            ids = load_avoid_file(path)

        assert ids == {"q1"}
        assert "not a bare question id" in caplog.text

    def test_load_avoid_when_missing_then_loader_error(self, tmp_path):
        with pytest.raises(LoaderError, match="not found"):
            load_avoid_file(tmp_path / "missing.ids")

    def test_load_avoid_files_unions(self, tmp_path):
        first = tmp_path / "a.ids"
        second = tmp_path / "b.ids"
        first.write_text("q1\nq2\n", encoding="utf-8")
        second.write_text("q2\nq3\n", encoding="utf-8")

        assert load_avoid_files([first, second]) == {"q1", "q2", "q3"}


class TestLogAvoidRoundTrip:
    """Logging a selection and avoiding it next time never repeats questions."""

    def test_log_then_avoid_then_regenerate_has_no_overlap(self, ten_question_pool, tmp_path):
        # Arrange
        path = tmp_path / "first_run.ids"
        first = select_questions(ten_question_pool, SelectionConfig(count=5), random.Random(42))
        log_questions(first.question_ids, path)

        # Act
        avoided = load_avoid_file(path)
        second = select_questions(
            ten_question_pool,
            SelectionConfig(count=5, avoid_ids=avoided),
            random.Random(42),
        )

        # Assert
        assert avoided == set(first.question_ids)
        assert not set(first.question_ids) & set(second.question_ids)
        assert second.question_count == 5
        assert second.is_complete

    def test_log_then_avoid_returns_every_parsed_id(self, tmp_path):
        # Arrange
        bank = parse_text(
            "#q1 First?\n[*] y\n\n#50%off Second?\n[*] y\n\n# Third?\n[*] y\n",
            source="ids.qbl",
        )
        path = tmp_path / "run.ids"

        # Act
        log_questions(bank.question_ids, path)

        # Assert
        assert load_avoid_file(path) == set(bank.question_ids)

    def test_parse_when_id_starts_with_comment_mark_then_rejected(self):
        with pytest.raises(ParseError, match="may not start with '%'"):
            parse_text("#%q1 Stem one?\n[*] y\n", source="ids.qbl")
