# wp_move/cli/commands/dump.py
"""Database dump command"""

import click

from ..decorators import handle_errors
from ..utils.output import format_operation_result
from ...api import Mover
from ...constants import DEFAULT_DUMP_ENV
from ...utils.output import console


@click.command()
@click.argument('env', default=DEFAULT_DUMP_ENV)
@click.option('--purge', is_flag=True, help='Delete every dump file of ENV instead of creating one')
@click.pass_context
@handle_errors
def dump(ctx, env, purge):
    """Export the database of ENV (default: local) to wp-content/wpcli-move

    Examples:

        # Dump the local database
        wp-move dump

        # Remove all dumps stored on production
        wp-move dump production --purge
    """
    mover = Mover(ctx.obj.config_path)

    action = "Purging dumps of" if purge else "Dumping database of"
    console.print(f"[cyan]{action} '{env}'[/cyan]")
    result = mover.dump(env, purge=purge)
    format_operation_result(result)
