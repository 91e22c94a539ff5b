"""Batched privileged removal via AppleScript.

Both operations issue a single ``osascript`` invocation for the whole
batch so the user sees at most one authorization prompt. Neither
reports per-file status; the batch succeeds or fails as a whole.
"""

import logging
import shlex
import subprocess

from rmapp.utils.shell import run_command

logger = logging.getLogger(__name__)

# Authorization dialogs wait for the user
_PRIVILEGED_TIMEOUT = 300.0


def _applescript_string(value: str) -> str:
    """Quote a value as an AppleScript string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_trash_script(paths: list[str]) -> str:
    """Build a Finder script that trashes every path at once.

    Args:
        paths: Absolute paths to trash.

    Returns:
        AppleScript source.
    """
    files = ", ".join(f"POSIX file {_applescript_string(path)}" for path in paths)
    return f'tell application "Finder" to delete {{{files}}}'


def build_delete_script(paths: list[str]) -> str:
    """Build an administrator ``rm -rf`` script covering every path.

    Args:
        paths: Absolute paths to delete.

    Returns:
        AppleScript source.
    """
    command = "rm -rf " + " ".join(shlex.quote(path) for path in paths)
    return f"do shell script {_applescript_string(command)} with administrator privileges"


def _run_osascript(args: list[str], action: str) -> bool:
    try:
        result = run_command(args, timeout=_PRIVILEGED_TIMEOUT)
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.error("Privileged %s could not run: %s", action, e)
        return False

    if not result.success:
        logger.error("Privileged %s failed: %s", action, result.stderr.strip() or result.returncode)
        return False
    return True


def run_privileged_trash(paths: list[str], sudo_user: str | None = None) -> bool:
    """Move paths to the Trash through Finder in one call.

    Args:
        paths: Absolute paths to trash.
        sudo_user: When rmapp itself runs under sudo, the invoking user
            whose Trash should receive the files.

    Returns:
        True if the batch succeeded.
    """
    if not paths:
        return True

    logger.warning("Escalating trash of %d path(s) through Finder", len(paths))
    args = ["osascript", "-e", build_trash_script(paths)]
    if sudo_user:
        args = ["sudo", "-u", sudo_user, *args]
    return _run_osascript(args, "trash")


def run_privileged_delete(paths: list[str]) -> bool:
    """Recursively delete paths with administrator privileges in one call.

    Args:
        paths: Absolute paths to delete.

    Returns:
        True if the batch succeeded.
    """
    if not paths:
        return True

    logger.warning("Escalating deletion of %d path(s) with administrator privileges", len(paths))
    return _run_osascript(["osascript", "-e", build_delete_script(paths)], "delete")
