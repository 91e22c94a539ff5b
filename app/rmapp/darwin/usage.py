"""Disk usage queries.

Physical size counts allocated 512-byte blocks, which is what Finder
reports as "on disk"; logical size sums apparent file lengths. Symbolic
links are never followed.
"""

import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)

_BLOCK_SIZE = 512


class SizeMode(str, Enum):
    """How the size of a path is measured.

    Attributes:
        PHYSICAL: Allocated blocks on disk.
        LOGICAL: Sum of apparent file sizes.
    """

    PHYSICAL = "physical"
    LOGICAL = "logical"


def _entry_size(st: os.stat_result, mode: SizeMode) -> int:
    if mode == SizeMode.LOGICAL:
        return st.st_size
    blocks = getattr(st, "st_blocks", None)
    if blocks is None:
        return st.st_size
    return blocks * _BLOCK_SIZE


def disk_usage(path: str, mode: SizeMode = SizeMode.PHYSICAL) -> int:
    """Measure the size of a file or directory tree.

    Unreadable entries are skipped. A path that does not exist
    measures 0.

    Args:
        path: Absolute path to measure.
        mode: Physical (allocated) or logical (apparent) size.

    Returns:
        Size in bytes.
    """
    try:
        st = os.lstat(path)
    except OSError:
        return 0

    total = _entry_size(st, mode)
    if not os.path.isdir(path) or os.path.islink(path):
        return total

    for dirpath, dirnames, filenames in os.walk(path, onerror=_log_walk_error):
        for name in dirnames + filenames:
            try:
                total += _entry_size(os.lstat(os.path.join(dirpath, name)), mode)
            except OSError:
                continue
    return total


def _log_walk_error(error: OSError) -> None:
    logger.debug("Cannot measure %s: %s", error.filename, error.strerror)
