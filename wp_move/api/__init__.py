# wp_move/api/__init__.py
"""API layer for wp-move"""

from .mover import Mover, push, pull
from .exceptions import (
    WpMoveError,
    ConfigError,
    ConnectivityError,
    PathError,
    RemoteToolNotFound,
    StepFailure,
    SyncFailure,
    DumpFailure,
    ImportFailure,
)

__all__ = [
    # Main classes
    "Mover",

    # Convenience functions
    "push",
    "pull",

    # Exceptions
    "WpMoveError",
    "ConfigError",
    "ConnectivityError",
    "PathError",
    "RemoteToolNotFound",
    "StepFailure",
    "SyncFailure",
    "DumpFailure",
    "ImportFailure",
]
