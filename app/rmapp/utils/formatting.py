"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console

from rmapp.core.theme import get_theme

_KB = 1 << 10
_MB = 1 << 20
_GB = 1 << 30
_TB = 1 << 40


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def format_size(size_bytes: int) -> str:
    """Format a byte count as a human-readable string.

    Uses binary units with one decimal place; plain bytes are printed
    as an integer.

    Args:
        size_bytes: Number of bytes.

    Returns:
        String such as "512 B", "1.5 KB" or "2.0 GB".
    """
    if size_bytes >= _TB:
        return f"{size_bytes / _TB:.1f} TB"
    if size_bytes >= _GB:
        return f"{size_bytes / _GB:.1f} GB"
    if size_bytes >= _MB:
        return f"{size_bytes / _MB:.1f} MB"
    if size_bytes >= _KB:
        return f"{size_bytes / _KB:.1f} KB"
    return f"{size_bytes} B"


def format_size_markup(size_bytes: int) -> str:
    """Format a byte count with a color tier matching its magnitude."""
    if size_bytes >= _TB:
        style = "size.tb"
    elif size_bytes >= _GB:
        style = "size.gb"
    elif size_bytes >= _MB:
        style = "size.mb"
    elif size_bytes >= _KB:
        style = "size.kb"
    else:
        style = "size.bytes"
    return f"[{style}]{format_size(size_bytes)}[/]"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")
