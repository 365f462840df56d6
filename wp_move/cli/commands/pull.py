# wp_move/cli/commands/pull.py
"""Pull command implementation"""

import click

from ..decorators import handle_errors, sync_options
from ..utils.output import format_operation_result
from ...api import Mover
from ...constants import DEFAULT_PULL_ENV, DumpRetention
from ...utils.output import console


@click.command()
@click.argument('env', default=DEFAULT_PULL_ENV)
@sync_options('pull')
@click.pass_context
@handle_errors
def pull(ctx, env, folders, db, all_, delete, dry_run, retention):
    """Pull files and database from ENV (default: staging) into local

    ENV must be reached over SSH. The remote database is exported with
    WP-CLI, downloaded, imported locally and its URLs are replaced by the
    local vhost.

    Examples:

        # Pull uploads only
        wp-move pull production --uploads

        # Pull everything
        wp-move pull staging --all
    """
    mover = Mover(
        ctx.obj.config_path,
        dry_run=dry_run,
        retention=DumpRetention(retention) if retention else None,
    )

    if dry_run:
        console.print("[cyan]Dry run: rsync previews changes, other commands are only printed[/cyan]")

    console.print(f"\n[cyan]Pulling from {env}...[/cyan]")
    result = mover.pull(env, folders=folders, db=db, all_=all_, delete=delete)
    format_operation_result(result)
