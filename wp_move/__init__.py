"""wp-move - push and pull WordPress sites between environments.

Synchronizes themes, plugins, uploads and the database between a local
WordPress installation and remote environments reachable over SSH.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Core API
from .api.mover import Mover, push, pull

# Data models
from .models.config import EnvironmentConfig
from .models.result import ExecutionResult, OperationResult, OperationStatus

# Exceptions
from .api.exceptions import (
    WpMoveError,
    ConfigError,
    ConnectivityError,
    PathError,
    RemoteToolNotFound,
    SyncFailure,
    DumpFailure,
    ImportFailure,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main classes
    "Mover",

    # Core API functions
    "push",
    "pull",

    # Data models
    "EnvironmentConfig",
    "ExecutionResult",
    "OperationResult",
    "OperationStatus",

    # Exceptions
    "WpMoveError",
    "ConfigError",
    "ConnectivityError",
    "PathError",
    "RemoteToolNotFound",
    "SyncFailure",
    "DumpFailure",
    "ImportFailure",
]
