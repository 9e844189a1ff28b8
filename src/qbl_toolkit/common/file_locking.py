"""
Module: common.file_locking

Purpose:
    Cross-platform file locking for the question id logs. A log written
    by one run is commonly read back as an avoid file by the next, and
    several exam builds may share one log; locking keeps readers from
    seeing a half-written file.
    Uses portalocker for Mac, Windows, and Linux compatibility.

Key Functions:
    - locked_file: Context manager for locked file access
    - locked_write_lines: Replace a file's contents with lines, exclusively locked
    - locked_read_lines: Read a file's lines under a shared lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - builder.history.id_log: Question id logging and avoid files
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Iterable, List

import portalocker

logger = logging.getLogger(__name__)


@contextmanager
def locked_file(
    path: Path,
    mode: str = 'r',
    lock_type: int = portalocker.LOCK_EX,
) -> Generator:
    """
    Context manager for cross-platform locked file access.

    Args:
        path: Path to file.
        mode: File open mode ('r', 'w', 'a', etc.).
        lock_type: Lock type (LOCK_EX for exclusive, LOCK_SH for shared).

    Yields:
        Open file handle with lock held.

    Raises:
        OSError: If the file cannot be opened.

    Example:
        >>> with locked_file(path, 'a') as f:
        ...     f.write('data')
    """
    if 'r' not in mode:
        path.parent.mkdir(parents=True, exist_ok=True)

    # Truncate only once the lock is held
    truncate = mode.startswith('w')
    open_mode = 'a' + mode[1:] if truncate else mode

    with open(path, open_mode, encoding='utf-8', newline='\n') as f:
        portalocker.lock(f, lock_type)
        try:
            if truncate:
                f.seek(0)
                f.truncate()
            yield f
        finally:
            portalocker.unlock(f)


def locked_write_lines(path: Path, lines: Iterable[str]) -> int:
    """
    Replace a file with one entry per line, under an exclusive lock.

    Args:
        path: Path to file.
        lines: Entries to write (without newlines).

    Returns:
        Number of lines written.

    Example:
        >>> locked_write_lines(log_path, ["q1", "q7"])
        2
    """
    count = 0
    with locked_file(path, 'w', portalocker.LOCK_EX) as f:
        for line in lines:
            f.write(f"{line}\n")
            count += 1

    logger.debug(f"Wrote {count} lines to {path.name}")
    return count


def locked_read_lines(path: Path) -> List[str]:
    """
    Read a file's lines (newlines stripped) under a shared lock.

    Args:
        path: Path to file.

    Returns:
        Lines in file order.

    Raises:
        OSError: If the file does not exist or cannot be read.
    """
    with locked_file(path, 'r', portalocker.LOCK_SH) as f:
        return f.read().splitlines()
