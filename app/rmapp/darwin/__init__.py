"""macOS platform primitives consumed by the finder and deleter.

Trashing, disk usage measurement, and batched privileged execution.
"""

from rmapp.darwin.privileged import run_privileged_delete, run_privileged_trash
from rmapp.darwin.trash import move_to_trash
from rmapp.darwin.usage import SizeMode, disk_usage

__all__ = [
    "SizeMode",
    "disk_usage",
    "move_to_trash",
    "run_privileged_delete",
    "run_privileged_trash",
]
