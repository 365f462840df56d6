# wp_move/cli/commands/push.py
"""Push command implementation"""

import click

from ..decorators import handle_errors, sync_options
from ..utils.output import format_operation_result
from ...api import Mover
from ...constants import DEFAULT_PUSH_ENV, DumpRetention
from ...utils.output import console


@click.command()
@click.argument('env', default=DEFAULT_PUSH_ENV)
@sync_options('push')
@click.pass_context
@handle_errors
def push(ctx, env, folders, db, all_, delete, dry_run, retention):
    """Push local files and database to ENV (default: staging)

    Folders listed in the environment's 'not_push' setting are skipped
    with a warning, even with --all. The database is exported locally,
    rewritten for the target URL, uploaded with scp and imported
    through the remote WP-CLI.

    Examples:

        # Push themes and plugins
        wp-move push staging --themes --plugins

        # Preview a full push
        wp-move push production --all --dry-run

        # Push the database and drop every dump file afterwards
        wp-move push staging --db --retention all
    """
    mover = Mover(
        ctx.obj.config_path,
        dry_run=dry_run,
        retention=DumpRetention(retention) if retention else None,
    )

    if dry_run:
        console.print("[cyan]Dry run: rsync previews changes, other commands are only printed[/cyan]")

    console.print(f"\n[cyan]Pushing to {env}...[/cyan]")
    result = mover.push(env, folders=folders, db=db, all_=all_, delete=delete)
    format_operation_result(result)
