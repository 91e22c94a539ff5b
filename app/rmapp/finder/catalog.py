"""Well-known macOS locations applications scatter data into.

The catalog is a static table of roots parameterized by the invoking
user's home directory. It performs no filesystem I/O; roots that do
not exist on a given machine are skipped later by the finder.
"""

import os
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ScanKind(str, Enum):
    """How a root is traversed.

    Attributes:
        LISTING: One-level listing (application bundles are opaque).
        RECURSIVE: Depth-bounded recursive walk.
    """

    LISTING = "listing"
    RECURSIVE = "recursive"


class RootCategory(str, Enum):
    """Semantic category of a catalog root."""

    APPLICATIONS = "applications"
    USER_APPLICATIONS = "user_applications"
    SYSTEM_SUPPORT = "system_support"
    SYSTEM_CRASH_REPORTS = "system_crash_reports"
    SYSTEM_CACHES = "system_caches"
    SYSTEM_EXTENSIONS = "system_extensions"
    SYSTEM_INTERNET_PLUGINS = "system_internet_plugins"
    SYSTEM_LAUNCH_AGENTS = "system_launch_agents"
    SYSTEM_LAUNCH_DAEMONS = "system_launch_daemons"
    SYSTEM_LOGS = "system_logs"
    SYSTEM_HELPER_TOOLS = "system_helper_tools"
    SYSTEM_RECEIPTS = "system_receipts"
    LOCAL_BIN = "local_bin"
    LOCAL_OPT = "local_opt"
    LOCAL_SBIN = "local_sbin"
    LOCAL_SHARE = "local_share"
    LOCAL_VAR = "local_var"
    USER_SUPPORT = "user_support"
    USER_PREFERENCES = "user_preferences"
    USER_CACHES = "user_caches"
    USER_CONTAINERS = "user_containers"
    USER_SAVED_STATE = "user_saved_state"
    USER_HTTP_STORAGES = "user_http_storages"
    USER_GROUP_CONTAINERS = "user_group_containers"
    USER_INTERNET_PLUGINS = "user_internet_plugins"
    USER_LAUNCH_AGENTS = "user_launch_agents"
    USER_LOGS = "user_logs"
    USER_WEBKIT = "user_webkit"
    USER_APPLICATION_SCRIPTS = "user_application_scripts"
    EXTRA = "extra"


# Roots whose entries are opaque bundles
LISTING_CATEGORIES: frozenset[RootCategory] = frozenset(
    {RootCategory.APPLICATIONS, RootCategory.USER_APPLICATIONS}
)

# Roots holding many sibling receipts named after vendor and product
RECEIPT_CATEGORIES: frozenset[RootCategory] = frozenset({RootCategory.SYSTEM_RECEIPTS})

_SYSTEM_ROOTS: tuple[tuple[RootCategory, str], ...] = (
    (RootCategory.APPLICATIONS, "/Applications"),
    (RootCategory.SYSTEM_SUPPORT, "/Library/Application Support"),
    (RootCategory.SYSTEM_CRASH_REPORTS, "/Library/Application Support/CrashReporter"),
    (RootCategory.SYSTEM_CACHES, "/Library/Caches"),
    (RootCategory.SYSTEM_EXTENSIONS, "/Library/Extensions"),
    (RootCategory.SYSTEM_INTERNET_PLUGINS, "/Library/Internet Plug-Ins"),
    (RootCategory.SYSTEM_LAUNCH_AGENTS, "/Library/LaunchAgents"),
    (RootCategory.SYSTEM_LAUNCH_DAEMONS, "/Library/LaunchDaemons"),
    (RootCategory.SYSTEM_LOGS, "/Library/Logs"),
    (RootCategory.SYSTEM_HELPER_TOOLS, "/Library/PrivilegedHelperTools"),
    (RootCategory.SYSTEM_RECEIPTS, "/var/db/receipts"),
    (RootCategory.LOCAL_BIN, "/usr/local/bin"),
    (RootCategory.LOCAL_OPT, "/usr/local/opt"),
    (RootCategory.LOCAL_SBIN, "/usr/local/sbin"),
    (RootCategory.LOCAL_SHARE, "/usr/local/share"),
    (RootCategory.LOCAL_VAR, "/usr/local/var"),
)

# Relative to the user's home directory
_USER_ROOTS: tuple[tuple[RootCategory, str], ...] = (
    (RootCategory.USER_APPLICATIONS, "Applications"),
    (RootCategory.USER_SUPPORT, "Library/Application Support"),
    (RootCategory.USER_PREFERENCES, "Library/Preferences"),
    (RootCategory.USER_CACHES, "Library/Caches"),
    (RootCategory.USER_CONTAINERS, "Library/Containers"),
    (RootCategory.USER_SAVED_STATE, "Library/Saved Application State"),
    (RootCategory.USER_HTTP_STORAGES, "Library/HTTPStorages"),
    (RootCategory.USER_GROUP_CONTAINERS, "Library/Group Containers"),
    (RootCategory.USER_INTERNET_PLUGINS, "Library/Internet Plug-Ins"),
    (RootCategory.USER_LAUNCH_AGENTS, "Library/LaunchAgents"),
    (RootCategory.USER_LOGS, "Library/Logs"),
    (RootCategory.USER_WEBKIT, "Library/WebKit"),
    (RootCategory.USER_APPLICATION_SCRIPTS, "Library/Application Scripts"),
)


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """A single catalog root.

    Attributes:
        category: Semantic category of the root.
        path: Absolute root directory.
    """

    category: RootCategory
    path: Path

    def __post_init__(self) -> None:
        """Validate the entry after initialization."""
        if not self.path.is_absolute():
            msg = f"Catalog root must be absolute: {self.path}"
            raise ValueError(msg)

    @property
    def scan_kind(self) -> ScanKind:
        """Traversal strategy for this root."""
        if self.category in LISTING_CATEGORIES:
            return ScanKind.LISTING
        return ScanKind.RECURSIVE

    @property
    def holds_receipts(self) -> bool:
        """Whether token-run matching is useful under this root."""
        return self.category in RECEIPT_CATEGORIES


def get_user_home() -> Path:
    """Get the home directory of the user rmapp acts for.

    Under ``sudo`` this is the invoking user's home rather than root's,
    so that per-user Library folders of the right account are scanned.

    Returns:
        Absolute home directory path.
    """
    sudo_user = os.environ.get("SUDO_USER")
    if sudo_user:
        expanded = os.path.expanduser(f"~{sudo_user}")
        if not expanded.startswith("~"):
            return Path(expanded)
    return Path.home()


def build_catalog(
    home: Path | None = None,
    extra_roots: Iterable[Path] = (),
) -> tuple[CatalogEntry, ...]:
    """Build the ordered table of roots to scan.

    Args:
        home: Home directory of the current user. Defaults to get_user_home().
        extra_roots: Additional absolute directories scanned recursively.

    Returns:
        Tuple of CatalogEntry in deterministic order: system roots,
        per-user roots, then extra roots.
    """
    user_home = home if home is not None else get_user_home()

    entries = [CatalogEntry(category, Path(path)) for category, path in _SYSTEM_ROOTS]
    entries.extend(CatalogEntry(category, user_home / rel) for category, rel in _USER_ROOTS)
    entries.extend(CatalogEntry(RootCategory.EXTRA, Path(root)) for root in extra_roots)
    return tuple(entries)
