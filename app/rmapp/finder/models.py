"""Finder domain models.

This module defines the data structures passed between the catalog,
the matcher, the concurrent traversal tasks and the callers that
report on or remove what was found.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from rmapp.darwin.usage import SizeMode

if TYPE_CHECKING:
    from rmapp.core.config import RmappConfig
    from rmapp.finder.catalog import ScanKind
    from rmapp.finder.matcher import NamePattern


class TokenRunPolicy(str, Enum):
    """Where a multi-token app name may match as a token run.

    Attributes:
        RECEIPTS: Only in roots that hold many sibling receipts.
        EVERYWHERE: In every root.
        OFF: Never; only single-token equality is used.
    """

    RECEIPTS = "receipts"
    EVERYWHERE = "everywhere"
    OFF = "off"


@dataclass(frozen=True, slots=True)
class ScanTarget:
    """The application being looked for.

    Attributes:
        app_name: Human application name without the ``.app`` suffix.
        bundle_id: Reverse-DNS bundle identifier, empty if unresolved.
    """

    app_name: str
    bundle_id: str = ""

    def __post_init__(self) -> None:
        """Validate the target after initialization."""
        if not self.app_name.strip():
            msg = "Application name cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ScanContext:
    """Parameters for the traversal of a single catalog root.

    Created once per root and owned by the task walking that root.

    Attributes:
        target: Application being looked for.
        root: Resolved root directory.
        scan_kind: One-level listing or recursive walk.
        max_depth: Deepest directory level that may be descended into.
        domain_hint: Second label of the bundle identifier, lower-cased.
        pattern: Tokenized app name with its precomputed failure table.
        token_runs: Whether token-run matching applies under this root.
        domain_hint_pruning: Whether shallow vendor directories are pruned.
        size_mode: How sizes of matches are measured.
    """

    target: ScanTarget
    root: Path
    scan_kind: ScanKind
    max_depth: int
    domain_hint: str
    pattern: NamePattern
    token_runs: bool = False
    domain_hint_pruning: bool = True
    size_mode: SizeMode = SizeMode.PHYSICAL


@dataclass(frozen=True, slots=True)
class MatchRecord:
    """A filesystem path attributed to the target application.

    Attributes:
        path: Absolute path of the match.
        is_symlink: True if the match is a symbolic link (reporting only).
        size_bytes: Size measured at discovery time.
    """

    path: str
    is_symlink: bool = False
    size_bytes: int = 0


@dataclass(frozen=True, slots=True)
class DiscoveryOptions:
    """Tunable discovery policy.

    Attributes:
        size_mode: How sizes of matches are measured.
        domain_hint_pruning: Prune shallow directories sharing the domain hint.
        token_runs: Scope of token-run matching.
        standard_depth: Max descent depth for ordinary roots.
        preferences_depth: Max descent depth for the preferences root.
    """

    size_mode: SizeMode = SizeMode.PHYSICAL
    domain_hint_pruning: bool = True
    token_runs: TokenRunPolicy = TokenRunPolicy.RECEIPTS
    standard_depth: int = 1
    preferences_depth: int = 2

    @classmethod
    def from_config(cls, config: RmappConfig) -> DiscoveryOptions:
        """Build discovery options from user configuration."""
        return cls(
            size_mode=SizeMode(config.size_mode),
            domain_hint_pruning=config.domain_hint_pruning,
            token_runs=TokenRunPolicy(config.token_runs),
            standard_depth=config.standard_depth,
            preferences_depth=config.preferences_depth,
        )


@dataclass(frozen=True, slots=True)
class DiscoveryResult:
    """Outcome of one discovery run.

    Attributes:
        matches: Deduplicated matches sorted by path.
        skipped_roots: Roots that were missing or could not be opened.
    """

    matches: list[MatchRecord]
    skipped_roots: list[str] = field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        """Matched paths in result order."""
        return [m.path for m in self.matches]

    @property
    def total_size(self) -> int:
        """Sum of the sizes of all matches."""
        return sum(m.size_bytes for m in self.matches)
