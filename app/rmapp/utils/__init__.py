"""Utility modules for rmapp.

This module exports commonly used utility functions.
"""

from rmapp.utils.formatting import (
    console,
    err_console,
    format_size,
    print_error,
    print_info,
    print_warning,
)
from rmapp.utils.shell import CommandResult, command_exists, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_warning",
    "run_command",
]
