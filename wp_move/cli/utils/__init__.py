# wp_move/cli/utils/__init__.py
"""CLI utility functions"""

from .output import (
    format_operation_result,
    format_error,
    format_environments,
    format_table,
)

__all__ = [
    'format_operation_result',
    'format_error',
    'format_environments',
    'format_table',
]
