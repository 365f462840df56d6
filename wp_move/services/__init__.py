# wp_move/services/__init__.py
"""Business logic services for wp-move"""

from .config_service import EnvironmentResolver, find_config_file
from .diagnostics import Diagnostics
from .task_runner import TaskRunner

__all__ = [
    "EnvironmentResolver",
    "find_config_file",
    "Diagnostics",
    "TaskRunner",
]
