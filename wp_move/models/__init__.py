# wp_move/models/__init__.py
"""Data models for wp-move"""

from .config import EnvironmentConfig, DatabaseConfig
from .result import ExecutionResult, OperationResult, OperationStatus
from .steps import SyncStep, DumpArtifact

__all__ = [
    # Configuration models
    "EnvironmentConfig",
    "DatabaseConfig",

    # Result models
    "ExecutionResult",
    "OperationResult",
    "OperationStatus",

    # Step models
    "SyncStep",
    "DumpArtifact",
]
