# wp_move/cli/commands/envs.py
"""List configured environments"""

import click

from ..decorators import handle_errors
from ..utils.output import format_environments
from ...api import Mover


@click.command()
@click.pass_context
@handle_errors
def envs(ctx):
    """Show the environments declared in move.yml"""
    mover = Mover(ctx.obj.config_path)
    resolver = mover.resolver
    format_environments([resolver.resolve(name) for name in resolver.names()])
