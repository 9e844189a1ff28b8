"""
Unit tests for portalocker-backed file access.
"""

import portalocker
import pytest

from qbl_toolkit.common.file_locking import locked_file, locked_read_lines, locked_write_lines


class TestLockedFile:
    """Tests for locked file helpers."""

    def test_write_then_read_lines(self, tmp_path):
        # Arrange
        path = tmp_path / "nested" / "ids.txt"

        # Act
        count = locked_write_lines(path, ["a", "b", "c"])
        lines = locked_read_lines(path)

        # Assert
        assert count == 3
        assert lines == ["a", "b", "c"]

    def test_write_uses_unix_newlines(self, tmp_path):
        path = tmp_path / "ids.txt"
        locked_write_lines(path, ["x", "y"])
        assert path.read_bytes() == b"x\ny\n"

    def test_locked_file_append(self, tmp_path):
        path = tmp_path / "log.txt"
        locked_write_lines(path, ["first"])

        with locked_file(path, "a") as f:
            f.write("second\n")

        assert locked_read_lines(path) == ["first", "second"]

    def test_write_empty_creates_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        assert locked_write_lines(path, []) == 0
        assert path.read_text() == ""

    def test_write_when_locked_elsewhere_then_contents_untouched(self, tmp_path):
        # Arrange
        path = tmp_path / "ids.txt"
        locked_write_lines(path, ["keep"])

        # Act
        with locked_file(path, "r", portalocker.LOCK_SH):
            with pytest.raises(portalocker.LockException):
                with locked_file(path, "w", portalocker.LOCK_EX | portalocker.LOCK_NB):
                    pass

        # Assert
        assert path.read_text() == "keep\n"

    def test_write_replaces_longer_contents(self, tmp_path):
        path = tmp_path / "ids.txt"
        locked_write_lines(path, ["first", "second", "third"])

        locked_write_lines(path, ["x"])

        assert locked_read_lines(path) == ["x"]
