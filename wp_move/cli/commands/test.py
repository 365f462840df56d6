# wp_move/cli/commands/test.py
"""Environment diagnostic command"""

import click

from ..decorators import handle_errors
from ..utils.output import format_operation_result
from ...api import Mover
from ...constants import DEFAULT_TEST_ENV
from ...utils.output import console


@click.command()
@click.argument('env', default=DEFAULT_TEST_ENV)
@click.pass_context
@handle_errors
def test(ctx, env):
    """Check that ENV (default: local) is reachable and usable

    Runs, in order and stopping at the first failure: the SSH connection
    (remote environments only), the site URL, the WordPress path and the
    database connection.
    """
    mover = Mover(ctx.obj.config_path)

    console.print(f"[cyan]Testing environment '{env}'[/cyan]")
    result = mover.test(env)
    format_operation_result(result)
