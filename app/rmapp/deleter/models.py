"""Deletion domain models.

This module defines the removal modes and the per-path and aggregate
results produced by the Deleter.
"""

from dataclasses import dataclass, field
from enum import Enum


class DeletionMode(str, Enum):
    """How matched paths are removed.

    Attributes:
        TRASH: Reversible move to the user's Trash (default).
        FORCE: Irreversible recursive deletion.
    """

    TRASH = "trash"
    FORCE = "force"


class DeletionStatus(str, Enum):
    """Per-path deletion outcome.

    Attributes:
        SUCCEEDED: Path was trashed or deleted.
        SKIPPED: Path no longer existed when deletion started.
        REQUIRES_ESCALATION: Unprivileged operation was denied; queued for
            the privileged batch.
        FAILED: Path could not be removed.
    """

    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    REQUIRES_ESCALATION = "requires_escalation"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """Result of removing a single path.

    Attributes:
        path: Absolute path that was operated on.
        status: Outcome classification.
        size_bytes: Size measured before any deletion started.
        escalated: Whether the privileged batch handled this path.
        error: Error message for skipped or failed paths.
    """

    path: str
    status: DeletionStatus
    size_bytes: int = 0
    escalated: bool = False
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """Check if the path was removed."""
        return self.status == DeletionStatus.SUCCEEDED


@dataclass(frozen=True, slots=True)
class DeletionReport:
    """Aggregate result of one Deleter run.

    Attributes:
        mode: Mode the paths were removed with.
        outcomes: One outcome per input path, in input order.
        escalated: Paths that were sent to the privileged batch.
        escalation_failed: True if the privileged batch failed outright.
    """

    mode: DeletionMode
    outcomes: list[DeletionOutcome] = field(default_factory=list)
    escalated: list[str] = field(default_factory=list)
    escalation_failed: bool = False

    @property
    def bytes_freed(self) -> int:
        """Total pre-measured size of every successfully removed path."""
        return sum(o.size_bytes for o in self.outcomes if o.succeeded)

    @property
    def show_total(self) -> bool:
        """Whether the "total freed" summary should be reported.

        Suppressed whenever the privileged batch failed, even though
        other paths may have been removed.
        """
        return not self.escalation_failed

    @property
    def failed(self) -> list[DeletionOutcome]:
        """Outcomes of paths that could not be removed."""
        return [o for o in self.outcomes if o.status == DeletionStatus.FAILED]

    @property
    def skipped(self) -> list[DeletionOutcome]:
        """Outcomes of paths that no longer existed."""
        return [o for o in self.outcomes if o.status == DeletionStatus.SKIPPED]
