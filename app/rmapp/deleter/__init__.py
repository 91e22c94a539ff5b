"""Removal of discovered application files.

This module provides the trash/force Deleter with its batched
privilege-escalation fallback and its result models.
"""

from rmapp.deleter.models import DeletionMode, DeletionOutcome, DeletionReport, DeletionStatus
from rmapp.deleter.operator import Deleter

__all__ = [
    "DeletionMode",
    "DeletionOutcome",
    "DeletionReport",
    "DeletionStatus",
    "Deleter",
]
