# wp_move/cli/commands/__init__.py
"""CLI commands"""

from . import push
from . import pull
from . import test
from . import dump
from . import envs

__all__ = [
    'push',
    'pull',
    'test',
    'dump',
    'envs',
]
