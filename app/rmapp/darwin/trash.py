"""Unprivileged move-to-Trash primitive."""

import logging

from send2trash import send2trash

logger = logging.getLogger(__name__)


def move_to_trash(path: str) -> bool:
    """Move a file or directory to the current user's Trash.

    Args:
        path: Absolute path to trash.

    Returns:
        True on success, False if the platform refused the move
        (permission or sandbox denial). False means the caller should
        fall back to a privileged trash.
    """
    try:
        send2trash(path)
    except OSError as e:
        logger.debug("Trash refused for %s: %s", path, e)
        return False
    return True
