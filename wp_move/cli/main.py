# wp_move/cli/main.py
"""Main CLI entry point for wp-move"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..__version__ import get_version
from ..constants import APP_NAME, LOG_FORMAT
from ..utils.output import console

# Import all commands
from .commands import (
    push,
    pull,
    test,
    dump,
    envs,
)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )

    # Adjust third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("pymysql").setLevel(logging.WARNING)


class Context:
    """CLI context object

    Holds global options; the Mover is built by each command because
    only the command knows whether it runs in dry-run mode.
    """

    def __init__(self):
        self.config_path: Optional[Path] = None
        self.verbose: bool = False
        self.debug: bool = False


@click.group(name=APP_NAME)
@click.version_option(get_version(), prog_name=APP_NAME)
@click.option('-c', '--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Path to move.yml (default: search upward from the current directory)')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, config_path, verbose, debug, quiet):
    """wp-move - Push and pull WordPress sites between environments

    Synchronizes themes, plugins, mu-plugins, uploads and the database
    between the local installation and the environments declared in
    move.yml, over SSH.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context()
    ctx.obj.config_path = config_path
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(push.push)
cli.add_command(pull.pull)
cli.add_command(test.test)
cli.add_command(dump.dump)
cli.add_command(envs.envs)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
