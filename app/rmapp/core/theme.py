"""Colors for rmapp's terminal output.

Every style has a built-in color. Individual colors can be replaced in
``~/.config/rmapp/theme.toml``::

    [colors]
    path = "#ffcc00"
    size_gb = "#00afaf"

An unreadable or invalid override file is reported as a warning and the
built-in colors are used.
"""

import functools
import logging
import re
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from rmapp.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")

# Size tiers, smallest first; style "size.<tier>" uses color "size_<tier>"
SIZE_TIERS = ("bytes", "kb", "mb", "gb", "tb")


class ThemeColors(BaseModel):
    """Hex colors for every style rmapp prints with."""

    model_config = ConfigDict(extra="forbid")

    # Messages
    muted: str = "#b2bec3"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Tables
    heading: str = "#69B9A1"
    border: str = "#29526d"

    # Matches
    app: str = "#03b971"
    path: str = "#f5b332"
    symlink: str = "#d44ebc"

    size_bytes: str = "#ff5fd7"
    size_kb: str = "#5faf00"
    size_mb: str = "#afd787"
    size_gb: str = "#008080"
    size_tb: str = "#ff0000"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object) -> str:
        """Accept only ``#RGB`` or ``#RRGGBB`` strings."""
        if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value.strip()):
            msg = f"expected a #RGB or #RRGGBB color, got {value!r}"
            raise ValueError(msg)
        return value.strip()


def _read_overrides(path: Path) -> dict[str, object]:
    """Read the ``[colors]`` table of a theme file.

    Returns:
        The table's contents; empty when the file is missing or unusable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] must be a table", path)
        return {}
    return colors


def load_theme(path: Path | None = None) -> ThemeColors:
    """Built-in colors with the user's overrides applied.

    Args:
        path: Override file. Defaults to ~/.config/rmapp/theme.toml.
    """
    overrides = _read_overrides(path or get_theme_path())
    try:
        return ThemeColors.model_validate(overrides)
    except ValidationError as e:
        logger.warning("Ignoring theme overrides: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors) -> Theme:
    """Map theme colors onto the Rich style names used by the CLI."""
    styles = {
        "muted": colors.muted,
        "success": colors.success,
        "warning": colors.warning,
        "error": f"bold {colors.error}",
        "info": colors.info,
        "heading": f"bold {colors.heading}",
        "border": colors.border,
        "app": f"bold {colors.app}",
        "path": colors.path,
        "symlink": colors.symlink,
    }
    for tier in SIZE_TIERS:
        styles[f"size.{tier}"] = getattr(colors, f"size_{tier}")
    styles["size.tb"] = f"bold {colors.size_tb}"
    return Theme(styles)


@functools.cache
def get_theme() -> Theme:
    """The Rich theme for this process, loaded on first use."""
    return get_rich_theme(load_theme())
