"""Mover API for push, pull, dump and test operations"""

from pathlib import Path
from typing import Iterable, Optional, Union

from ..constants import (
    SYNC_FOLDERS,
    DEFAULT_PUSH_ENV,
    DEFAULT_PULL_ENV,
    DEFAULT_DUMP_ENV,
    DEFAULT_TEST_ENV,
    DumpRetention,
)
from ..core.executor import CommandExecutor
from ..models.result import OperationResult
from ..services.config_service import EnvironmentResolver, find_config_file
from ..services.task_runner import TaskRunner
from .exceptions import ConfigError


class Mover:
    """Entry point wiring configuration, executor and task runner

    One instance serves one invocation: the SSH control socket and the
    remote WP-CLI cache live as long as it does.
    """

    def __init__(self,
                 config_path: Optional[Union[str, Path]] = None,
                 dry_run: bool = False,
                 retention: Optional[DumpRetention] = None):
        """
        Initialize mover

        Args:
            config_path: move.yml location, searched from the working directory if omitted
            dry_run: Simulate every command except rsync
            retention: Override the dump retention of the local section

        Raises:
            ConfigError: If no configuration file can be found or loaded
        """
        if config_path is None:
            config_path = find_config_file()
            if config_path is None:
                raise ConfigError(
                    "Configuration file 'move.yml' not found in this directory or any parent. "
                    "Use --config to point to it."
                )

        self.resolver = EnvironmentResolver(config_path)
        # Load now so a broken file fails before anything runs
        self.resolver.load()
        self.executor = CommandExecutor(dry_run=dry_run)
        self.runner = TaskRunner(self.resolver, self.executor, retention=retention)

    @property
    def dry_run(self) -> bool:
        return self.executor.is_dry_run

    def push(self,
             env: str = DEFAULT_PUSH_ENV,
             folders: Iterable[str] = (),
             db: bool = False,
             all_: bool = False,
             delete: bool = False) -> OperationResult:
        """
        Push local state to an environment

        Args:
            env: Target environment
            folders: Folder keys (themes, plugins, mu-plugins, uploads)
            db: Push the database
            all_: Every folder not denied by 'not_push', plus the database
            delete: Delete destination files missing from the source

        Returns:
            OperationResult: Push result
        """
        if all_:
            folders, db = list(SYNC_FOLDERS), True
        return self.runner.push(env, folders, db, delete)

    def pull(self,
             env: str = DEFAULT_PULL_ENV,
             folders: Iterable[str] = (),
             db: bool = False,
             all_: bool = False,
             delete: bool = False) -> OperationResult:
        """
        Pull remote state into the local environment

        Returns:
            OperationResult: Pull result

        Raises:
            ConfigError: If the environment has no SSH target
        """
        if all_:
            folders, db = list(SYNC_FOLDERS), True
        return self.runner.pull(env, folders, db, delete)

    def dump(self, env: str = DEFAULT_DUMP_ENV, purge: bool = False) -> OperationResult:
        return self.runner.dump(env, purge)

    def test(self, env: str = DEFAULT_TEST_ENV) -> OperationResult:
        return self.runner.test(env)


def push(env: str = DEFAULT_PUSH_ENV, config_path: Optional[Union[str, Path]] = None,
         dry_run: bool = False, **options) -> OperationResult:
    """
    Push to an environment

    This is a convenience function that creates a Mover instance
    and performs the push.
    """
    return Mover(config_path, dry_run=dry_run).push(env, **options)


def pull(env: str = DEFAULT_PULL_ENV, config_path: Optional[Union[str, Path]] = None,
         dry_run: bool = False, **options) -> OperationResult:
    """
    Pull from an environment

    This is a convenience function that creates a Mover instance
    and performs the pull.
    """
    return Mover(config_path, dry_run=dry_run).pull(env, **options)
