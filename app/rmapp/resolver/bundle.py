"""Resolve an application name to its bundle and bundle identifier.

The identifier is read from Spotlight metadata with ``mdls``. An app
whose bundle cannot be located is fatal for the caller; an app whose
identifier is merely unavailable is not, discovery simply runs without
a domain hint.
"""

import logging
import subprocess
from pathlib import Path

from rmapp.finder.catalog import get_user_home
from rmapp.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

_APP_SUFFIX = ".app"
_BUNDLE_ID_ATTRIBUTE = "kMDItemCFBundleIdentifier"


class ResolverError(Exception):
    """Base exception for application resolution errors."""


class AppNotFoundError(ResolverError):
    """Raised when the application bundle cannot be located."""


def get_dot_app(name: str) -> str:
    """Append the ``.app`` suffix unless already present."""
    if name.endswith(_APP_SUFFIX):
        return name
    return name + _APP_SUFFIX


def normalize_app_name(name: str) -> str:
    """Reduce a bundle name or path to the human application name.

    ``/Applications/Visual Studio Code.app`` and ``Visual Studio Code.app``
    both become ``Visual Studio Code``.
    """
    base = Path(name.rstrip("/")).name if "/" in name else name
    if base.endswith(_APP_SUFFIX):
        base = base[: -len(_APP_SUFFIX)]
    return base.strip()


def extract_quoted_substring(text: str) -> str:
    """Return the first double-quoted value in ``text``.

    Args:
        text: Output such as ``kMDItemCFBundleIdentifier = "org.foo.Bar"``.

    Returns:
        The quoted value, or "" when nothing is quoted (``(null)``).
    """
    parts = text.split('"')
    if len(parts) >= 3:
        return parts[1]
    return ""


def locate_bundle(app: str, home: Path | None = None) -> Path:
    """Find the ``.app`` bundle for an application name or path.

    Args:
        app: Application name, bundle name, or absolute bundle path.
        home: Home directory for ``~/Applications``. Defaults to the
            invoking user's home.

    Returns:
        Absolute path of the bundle.

    Raises:
        AppNotFoundError: If no bundle exists.
    """
    if app.startswith("/"):
        candidates = [Path(get_dot_app(app.rstrip("/")))]
    else:
        bundle = get_dot_app(app)
        user_home = home if home is not None else get_user_home()
        candidates = [Path("/Applications") / bundle, user_home / "Applications" / bundle]

    for candidate in candidates:
        if candidate.is_dir():
            return candidate

    raise AppNotFoundError(f"App {normalize_app_name(app)} not found")


def resolve_bundle_id(bundle: Path) -> str:
    """Read the bundle identifier of an application bundle.

    Args:
        bundle: Absolute path of the ``.app`` bundle.

    Returns:
        The bundle identifier, or "" if the metadata has none.

    Raises:
        AppNotFoundError: If ``mdls`` is unavailable or rejects the bundle.
    """
    if not command_exists("mdls"):
        raise AppNotFoundError("mdls is not available; rmapp requires macOS")

    try:
        result = run_command(["mdls", str(bundle), "-name", _BUNDLE_ID_ATTRIBUTE], timeout=30.0)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise AppNotFoundError(f"Cannot query metadata of {bundle}: {e}") from e

    if not result.success:
        raise AppNotFoundError(f"App {normalize_app_name(str(bundle))} not found")

    bundle_id = extract_quoted_substring(result.stdout)
    if not bundle_id:
        logger.warning("No bundle identifier recorded for %s", bundle)
    return bundle_id
