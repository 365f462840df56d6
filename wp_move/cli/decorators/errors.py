"""Error handling decorator for CLI commands"""

import sys
from functools import wraps
from typing import Callable

import click

from ..utils.output import format_error
from ...api.exceptions import WpMoveError
from ...utils.output import console


def handle_errors(func: Callable) -> Callable:
    """Decorator that turns wp-move errors into a red panel and exit code 1

    Anything that is not a ``WpMoveError`` propagates to ``main``, which
    reports it as unexpected.

    Args:
        func: Command function to decorate

    Returns:
        Decorated function
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except WpMoveError as e:
            format_error(e)
            ctx = click.get_current_context(silent=True)
            if ctx is not None and ctx.obj is not None and ctx.obj.debug:
                console.print_exception()
            sys.exit(1)

    return wrapper
