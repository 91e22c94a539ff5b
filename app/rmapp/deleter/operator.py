"""Concurrent removal of matched paths.

Each path is handled by its own task. Paths the unprivileged operation
cannot touch are marked for escalation and, once every task has joined,
removed in a single privileged batch so the user is prompted for
authorization at most once.
"""

import dataclasses
import logging
import os
import shutil
from concurrent.futures import ThreadPoolExecutor

from rmapp.darwin.privileged import run_privileged_delete, run_privileged_trash
from rmapp.darwin.trash import move_to_trash
from rmapp.darwin.usage import SizeMode, disk_usage
from rmapp.deleter.models import DeletionMode, DeletionOutcome, DeletionReport, DeletionStatus

logger = logging.getLogger(__name__)


class Deleter:
    """Removes paths by trashing or force-deleting them.

    Args:
        mode: Trash (reversible) or force (irreversible) removal.
        size_mode: How the sizes reported as freed are measured.
    """

    def __init__(
        self,
        mode: DeletionMode = DeletionMode.TRASH,
        *,
        size_mode: SizeMode = SizeMode.PHYSICAL,
    ) -> None:
        self._mode = mode
        self._size_mode = size_mode

    @property
    def mode(self) -> DeletionMode:
        """Removal mode of this deleter."""
        return self._mode

    def remove(self, paths: list[str]) -> DeletionReport:
        """Remove every path and account for the space freed.

        Sizes are measured for all paths before anything is removed.
        Per-path failures are isolated; the privileged batch runs at
        most once, after all per-path tasks have finished.

        Args:
            paths: Absolute paths to remove. Repeated paths are handled once.

        Returns:
            DeletionReport with one outcome per distinct path, in input order.
        """
        unique = list(dict.fromkeys(paths))
        if not unique:
            return DeletionReport(mode=self._mode)

        sizes = {path: disk_usage(path, self._size_mode) for path in unique}
        sudo_user = os.environ.get("SUDO_USER") or None

        def handle(path: str) -> DeletionOutcome:
            if not os.path.lexists(path):
                return _skipped(path)
            if self._mode == DeletionMode.FORCE:
                return self._delete_one(path, sizes[path])
            if sudo_user:
                # Root's Trash is the wrong destination under sudo
                return _needs_escalation(path, sizes[path])
            return self._trash_one(path, sizes[path])

        with ThreadPoolExecutor(
            max_workers=len(unique), thread_name_prefix="rmapp-delete"
        ) as executor:
            outcomes = list(executor.map(handle, unique))

        pending = [o.path for o in outcomes if o.status == DeletionStatus.REQUIRES_ESCALATION]
        if not pending:
            return DeletionReport(mode=self._mode, outcomes=outcomes)

        if self._mode == DeletionMode.FORCE:
            batch_ok = run_privileged_delete(pending)
        else:
            batch_ok = run_privileged_trash(pending, sudo_user)

        return DeletionReport(
            mode=self._mode,
            outcomes=[self._settle(o, batch_ok) for o in outcomes],
            escalated=pending,
            escalation_failed=not batch_ok,
        )

    @staticmethod
    def _trash_one(path: str, size: int) -> DeletionOutcome:
        if move_to_trash(path):
            logger.info("Moved %s to Trash", path)
            return DeletionOutcome(path=path, status=DeletionStatus.SUCCEEDED, size_bytes=size)
        if not os.path.lexists(path):
            return _skipped(path)
        return _needs_escalation(path, size)

    @staticmethod
    def _delete_one(path: str, size: int) -> DeletionOutcome:
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.unlink(path)
        except PermissionError:
            return _needs_escalation(path, size)
        except FileNotFoundError:
            return _skipped(path)
        except OSError as e:
            logger.error("%s could not be deleted: %s", path, e)
            return DeletionOutcome(
                path=path,
                status=DeletionStatus.FAILED,
                size_bytes=size,
                error=str(e),
            )
        logger.info("Deleted %s", path)
        return DeletionOutcome(path=path, status=DeletionStatus.SUCCEEDED, size_bytes=size)

    @staticmethod
    def _settle(outcome: DeletionOutcome, batch_ok: bool) -> DeletionOutcome:
        """Resolve an escalated outcome once the privileged batch has run."""
        if outcome.status != DeletionStatus.REQUIRES_ESCALATION:
            return outcome
        if batch_ok:
            return dataclasses.replace(outcome, status=DeletionStatus.SUCCEEDED, escalated=True)
        return dataclasses.replace(
            outcome,
            status=DeletionStatus.FAILED,
            escalated=True,
            error="Privileged operation failed",
        )


def _skipped(path: str) -> DeletionOutcome:
    logger.info("%s does not exist, skipping", path)
    return DeletionOutcome(path=path, status=DeletionStatus.SKIPPED, error="Path does not exist")


def _needs_escalation(path: str, size: int) -> DeletionOutcome:
    return DeletionOutcome(path=path, status=DeletionStatus.REQUIRES_ESCALATION, size_bytes=size)
