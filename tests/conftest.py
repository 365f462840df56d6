"""Shared fixtures for tests"""

from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

import pytest
import yaml

from wp_move.core.executor import Command, CommandExecutor
from wp_move.models.result import ExecutionResult
from wp_move.services.config_service import EnvironmentResolver
from wp_move.services.task_runner import TaskRunner

FIXED_MOMENT = datetime(2025, 1, 2, 3, 4, 5)
REMOTE_WP = "/usr/local/bin/wp"


class RecordingExecutor(CommandExecutor):
    """Executor that records commands and answers from a script instead of
    starting processes

    ``ran`` holds every command handed to ``run`` (simulated or not),
    ``spawned`` only those that would have started a process.
    """

    def __init__(self, dry_run: bool = False):
        super().__init__(dry_run=dry_run, pid=4242)
        self.ran: List[Command] = []
        self.spawned: List[Command] = []
        self._script = []

    def script(self, fragment: str, return_code: int = 0, stdout: str = "",
               stderr: str = "", effect: Optional[Callable[[Command], None]] = None) -> None:
        """Answer commands whose display line contains ``fragment``

        The first matching entry wins.
        """
        self._script.append((fragment, return_code, stdout, stderr, effect))

    def run(self, command: Command, capture: bool = False) -> ExecutionResult:
        self.ran.append(command)
        return super().run(command, capture)

    def _spawn(self, command: Command, capture: bool) -> ExecutionResult:
        self.spawned.append(command)
        line = command.display()
        for fragment, return_code, stdout, stderr, effect in self._script:
            if fragment in line:
                if effect:
                    effect(command)
                return ExecutionResult(
                    return_code=return_code,
                    stdout=stdout if capture else None,
                    stderr=stderr if capture or return_code else None,
                )
        return ExecutionResult(return_code=0, stdout="" if capture else None,
                               stderr="" if capture else None)

    def lines(self, spawned_only: bool = True) -> List[str]:
        commands = self.spawned if spawned_only else self.ran
        return [command.display() for command in commands]


@pytest.fixture
def site(tmp_path):
    """A local WordPress root with its wp-content folders"""
    root = tmp_path / "site"
    for folder in ("themes", "plugins", "mu-plugins", "uploads"):
        (root / "wp-content" / folder).mkdir(parents=True)
    (root / "wp-settings.php").write_text("<?php\n")
    return root


@pytest.fixture
def config_data(site):
    """move.yml content with local, ssh and local-to-local environments"""
    return {
        "local": {
            "wp_path": str(site),
            "vhost": "http://site.test",
            "db": {"host": "127.0.0.1", "user": "root", "password": "secret", "name": "wp"},
        },
        "staging": {
            "ssh": "deploy@staging.example.com",
            "wp_path": "/srv/www/staging",
            "vhost": "https://staging.example.com",
            "exclude": [".git", "cache/"],
            "not_push": ["uploads"],
        },
        "production": {
            "ssh": "deploy@example.com",
            "wp_path": "/srv/www/prod",
            "vhost": "https://example.com",
            "php_cli": "/usr/bin/php8.2",
            "wp_cli_path": "/opt/wp-cli/wp",
        },
        "mirror": {
            "wp_path": "/var/www/mirror",
            "vhost": "http://mirror.test",
            "db": {"user": "mirror", "password": "", "name": "mirror"},
        },
    }


@pytest.fixture
def config_file(tmp_path, config_data):
    """move.yml written to disk"""
    path = tmp_path / "move.yml"
    path.write_text(yaml.safe_dump(config_data, sort_keys=False))
    return path


@pytest.fixture
def write_config(tmp_path):
    """Write arbitrary move.yml text and return its path"""
    def _write(content: str, name: str = "move.yml") -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path
    return _write


@pytest.fixture
def resolver(config_file):
    return EnvironmentResolver(config_file)


@pytest.fixture
def make_runner(resolver):
    """Build a TaskRunner on a RecordingExecutor

    The remote WP-CLI probe answers with a path and no dump binary is
    looked up on the host.
    """
    def _make(dry_run: bool = False, retention=None):
        executor = RecordingExecutor(dry_run=dry_run)
        executor.script("command -v wp", stdout=f"{REMOTE_WP}\n")
        runner = TaskRunner(
            resolver,
            executor,
            retention=retention,
            dumper_finder=lambda: None,
            clock=lambda: FIXED_MOMENT,
        )
        return runner, executor
    return _make
