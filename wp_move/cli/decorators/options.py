"""Shared options for the push and pull commands"""

from functools import wraps
from typing import Callable

import click

from ...constants import SYNC_FOLDERS, DumpRetention


def _flag_name(folder_key: str) -> str:
    return folder_key.replace('-', '_')


def sync_options(direction: str) -> Callable:
    """Decorator adding folder flags, ``--db``, ``--all``, ``--delete``,
    ``--dry-run`` and ``--retention`` to a transfer command

    The folder flags are collapsed into a single ``folders`` keyword
    argument, in catalog order.

    Args:
        direction: Verb used in the help texts ("push" or "pull")
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            kwargs['folders'] = [
                key for key in SYNC_FOLDERS
                if kwargs.pop(_flag_name(key), False)
            ]
            return func(*args, **kwargs)

        options = [
            click.option(f'--{key}', _flag_name(key), is_flag=True,
                         help=f'{direction.capitalize()} wp-content/{key}')
            for key in SYNC_FOLDERS
        ]
        options += [
            click.option('--db', is_flag=True, help=f'{direction.capitalize()} the database'),
            click.option('--all', 'all_', is_flag=True,
                         help=f'{direction.capitalize()} every folder and the database'),
            click.option('--delete', is_flag=True,
                         help='Delete destination files missing from the source'),
            click.option('--dry-run', is_flag=True,
                         help='Preview file changes, simulate every other command'),
            click.option('--retention', type=click.Choice([r.value for r in DumpRetention]),
                         help='Dump files to remove afterwards (default: dump_retention of local)'),
        ]

        decorated = wrapper
        for option in reversed(options):
            decorated = option(decorated)
        return decorated

    return decorator
