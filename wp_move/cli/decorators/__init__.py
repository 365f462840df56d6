# wp_move/cli/decorators/__init__.py
"""CLI decorators"""

from .errors import handle_errors
from .options import sync_options

__all__ = [
    'handle_errors',
    'sync_options',
]
