"""Concurrent discovery of an application's files.

One traversal task runs per catalog root. Tasks push matches into a
shared queue; a coordinator thread waits for every task and then
enqueues a sentinel so the aggregation loop terminates
deterministically. A failing root never affects its siblings.
"""

import logging
import os
import queue
import threading
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path

from rmapp.darwin.usage import disk_usage
from rmapp.finder.catalog import CatalogEntry, RootCategory, ScanKind
from rmapp.finder.matcher import NamePattern, get_domain_hint, is_match
from rmapp.finder.models import (
    DiscoveryOptions,
    DiscoveryResult,
    MatchRecord,
    ScanContext,
    ScanTarget,
    TokenRunPolicy,
)

logger = logging.getLogger(__name__)

# None marks the end of the stream
MatchQueue = queue.Queue[MatchRecord | None]

# Directories at or above this depth may be pruned by the domain hint
_SHALLOW_DEPTH = 1


class Finder:
    """Finds every path attributable to an application.

    Args:
        catalog: Roots to scan.
        options: Discovery policy. Defaults to DiscoveryOptions().
    """

    def __init__(
        self,
        catalog: Iterable[CatalogEntry],
        options: DiscoveryOptions | None = None,
    ) -> None:
        self._catalog = tuple(catalog)
        self._options = options or DiscoveryOptions()

    def discover(self, target: ScanTarget) -> DiscoveryResult:
        """Scan all catalog roots concurrently for the target.

        Args:
            target: Application name and bundle identifier.

        Returns:
            DiscoveryResult with matches deduplicated by path.
        """
        contexts = self._build_contexts(target)
        if not contexts:
            return DiscoveryResult(matches=[])

        matches: MatchQueue = queue.Queue()
        skipped: list[str] = []
        skipped_lock = threading.Lock()
        found: dict[str, MatchRecord] = {}

        with ThreadPoolExecutor(
            max_workers=len(contexts), thread_name_prefix="rmapp-scan"
        ) as executor:
            futures = {
                executor.submit(self._scan_root, ctx, matches, skipped, skipped_lock): ctx
                for ctx in contexts
            }
            coordinator = threading.Thread(
                target=_close_when_done,
                args=(futures, matches),
                name="rmapp-scan-coordinator",
                daemon=True,
            )
            coordinator.start()

            while (record := matches.get()) is not None:
                found.setdefault(record.path, record)

            coordinator.join()

        logger.debug("Discovery finished with %d unique match(es)", len(found))
        return DiscoveryResult(
            matches=sorted(found.values(), key=lambda m: m.path),
            skipped_roots=sorted(skipped),
        )

    def _build_contexts(self, target: ScanTarget) -> list[ScanContext]:
        """Create one scan context per distinct root.

        Roots are resolved so that aliases of the same directory are
        traversed only once. The name pattern is compiled once and
        shared by every context.
        """
        pattern = NamePattern.compile(target.app_name)
        domain_hint = get_domain_hint(target.bundle_id)
        contexts: list[ScanContext] = []
        seen: set[str] = set()

        for entry in self._catalog:
            resolved = os.path.realpath(entry.path)
            if resolved in seen:
                logger.debug("Root %s aliases an already scheduled root", entry.path)
                continue
            seen.add(resolved)

            max_depth = self._max_depth(entry)
            contexts.append(
                ScanContext(
                    target=target,
                    root=Path(resolved),
                    scan_kind=entry.scan_kind,
                    max_depth=max_depth,
                    domain_hint=domain_hint,
                    pattern=pattern,
                    token_runs=self._token_runs(entry),
                    # Deeper roots such as Preferences are never pruned
                    domain_hint_pruning=(
                        self._options.domain_hint_pruning
                        and max_depth == self._options.standard_depth
                    ),
                    size_mode=self._options.size_mode,
                )
            )
        return contexts

    def _max_depth(self, entry: CatalogEntry) -> int:
        if entry.category == RootCategory.USER_PREFERENCES:
            return self._options.preferences_depth
        return self._options.standard_depth

    def _token_runs(self, entry: CatalogEntry) -> bool:
        policy = self._options.token_runs
        if policy == TokenRunPolicy.EVERYWHERE:
            return True
        if policy == TokenRunPolicy.RECEIPTS:
            return entry.holds_receipts
        return False

    def _scan_root(
        self,
        ctx: ScanContext,
        matches: MatchQueue,
        skipped: list[str],
        skipped_lock: threading.Lock,
    ) -> None:
        """Traverse a single root, pushing matches into the queue."""
        try:
            with os.scandir(ctx.root) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("Skipping root %s: %s", ctx.root, e.strerror or e)
            with skipped_lock:
                skipped.append(str(ctx.root))
            return

        if ctx.scan_kind == ScanKind.LISTING:
            self._match_bundles(entries, ctx, matches)
        else:
            self._match_entries(entries, 1, ctx, matches)

    def _match_bundles(
        self,
        entries: list[os.DirEntry[str]],
        ctx: ScanContext,
        matches: MatchQueue,
    ) -> None:
        """Match the top-level bundles of an applications directory."""
        for entry in entries:
            try:
                symlink = entry.is_symlink()
                if not symlink and not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError as e:
                logger.debug("Cannot inspect %s: %s", entry.path, e.strerror or e)
                continue
            if self._matches(entry.name, ctx):
                self._emit(entry.path, symlink, ctx, matches)

    def _match_entries(
        self,
        entries: list[os.DirEntry[str]],
        depth: int,
        ctx: ScanContext,
        matches: MatchQueue,
    ) -> None:
        """Test directory entries and descend where allowed.

        ``depth`` is the depth of ``entries`` relative to the root
        (immediate children of the root have depth 1).
        """
        for entry in entries:
            try:
                if entry.is_symlink():
                    # Never descended; dangling links are still candidates
                    if self._matches(entry.name, ctx):
                        self._emit(entry.path, True, ctx, matches)
                    continue

                if entry.is_dir(follow_symlinks=False):
                    if self._matches(entry.name, ctx):
                        self._emit(entry.path, False, ctx, matches)
                    elif self._should_descend(entry.name, depth, ctx):
                        self._descend(entry.path, depth + 1, ctx, matches)
                    continue

                if entry.is_file(follow_symlinks=False) and self._matches(entry.name, ctx):
                    self._emit(entry.path, False, ctx, matches)
            except OSError as e:
                logger.debug("Cannot inspect %s: %s", entry.path, e.strerror or e)

    def _descend(self, directory: str, depth: int, ctx: ScanContext, matches: MatchQueue) -> None:
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("Cannot open %s: %s", directory, e.strerror or e)
            return
        self._match_entries(entries, depth, ctx, matches)

    @staticmethod
    def _should_descend(name: str, depth: int, ctx: ScanContext) -> bool:
        """Decide whether a non-matching directory is worth entering."""
        if depth > ctx.max_depth:
            return False
        if (
            ctx.domain_hint_pruning
            and ctx.domain_hint
            and depth <= _SHALLOW_DEPTH
            and ctx.domain_hint in name.lower()
        ):
            logger.debug("Pruned %s (domain hint %r)", name, ctx.domain_hint)
            return False
        return True

    @staticmethod
    def _matches(name: str, ctx: ScanContext) -> bool:
        return is_match(
            name,
            ctx.target.app_name,
            ctx.target.bundle_id,
            pattern=ctx.pattern,
            token_runs=ctx.token_runs,
        )

    @staticmethod
    def _emit(path: str, symlink: bool, ctx: ScanContext, matches: MatchQueue) -> None:
        logger.info("%s found at %s", "Symlink match" if symlink else "Match", path)
        size = disk_usage(path, ctx.size_mode)
        matches.put(MatchRecord(path=path, is_symlink=symlink, size_bytes=size))


def _close_when_done(futures: dict[Future[None], ScanContext], matches: MatchQueue) -> None:
    """Wait for every traversal task, then close the match stream."""
    wait(futures)
    for future, ctx in futures.items():
        error = future.exception()
        if error is not None:
            logger.error("Scan of %s aborted: %s", ctx.root, error)
    matches.put(None)
