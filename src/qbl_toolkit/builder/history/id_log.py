"""
Module: builder.history.id_log

Purpose:
    Persist the ids of generated questions, and read such logs back as
    avoid files so a later exam does not repeat questions.

File Format:
    One question id per line, UTF-8, "\\n" line endings. When reading,
    blank lines and "%" comment lines are ignored, so a hand-edited
    avoid list may carry notes.

Key Functions:
    - log_questions(): Write chosen ids (exclusive lock)
    - load_avoid_file(): Read one avoid file (shared lock)
    - load_avoid_files(): Union of several avoid files

Dependencies:
    - qbl_toolkit.common.file_locking: portalocker-backed file access

Used By:
    - builder.controller: Logging after ordering, avoid ids before selection
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Set

from qbl_toolkit.builder.loading import LoaderError
from qbl_toolkit.common.file_locking import locked_read_lines, locked_write_lines

logger = logging.getLogger(__name__)

COMMENT_MARK = "%"


def log_questions(question_ids: Iterable[str], path: Path) -> int:
    """
    Write question ids, one per line, replacing the file.

    Args:
        question_ids: Ids in output order
        path: Log file (parent directories are created)

    Returns:
        Number of ids written

    Raises:
        OSError: If the file cannot be written

    Example:
        >>> log_questions(["q1", "q7"], Path("logs/midterm.ids"))
        2
    """
    count = locked_write_lines(path, question_ids)
    logger.info(f"Logged {count} question ids to {path}")
    return count


def load_avoid_file(path: Path) -> Set[str]:
    """
    Read ids to avoid from a log (or any file of bare ids).

    Args:
        path: Avoid file

    Returns:
        Set of ids

    Raises:
        LoaderError: If the file is missing or unreadable
    """
    if not path.is_file():
        raise LoaderError(f"Avoid file not found: {path}")
    try:
        lines = locked_read_lines(path)
    except (OSError, UnicodeDecodeError) as e:
        raise LoaderError(f"Cannot read avoid file {path}: {e}") from e

    ids: Set[str] = set()
    for line_num, line in enumerate(lines, 1):
        entry = line.strip()
        if not entry or entry.startswith(COMMENT_MARK):
            continue
        if len(entry.split()) != 1:
            logger.warning(f"{path}:{line_num}: not a bare question id, skipped: {entry!r}")
            continue
        ids.add(entry)

    logger.debug(f"Read {len(ids)} ids to avoid from {path}")
    return ids


def load_avoid_files(paths: Iterable[Path]) -> Set[str]:
    """
    Union of the ids in several avoid files.

    Args:
        paths: Avoid files

    Returns:
        Every id listed in any file
    """
    avoided: Set[str] = set()
    for path in paths:
        avoided |= load_avoid_file(Path(path))
    if avoided:
        logger.info(f"Avoiding {len(avoided)} previously used questions")
    return avoided
