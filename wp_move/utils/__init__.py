# wp_move/utils/__init__.py
"""Utility functions for wp-move"""

from .formatting import format_duration
from .output import console, step, success, warning

__all__ = [
    "format_duration",
    "console",
    "step",
    "success",
    "warning",
]
