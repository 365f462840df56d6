"""External command execution with dry-run support"""

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from rich.markup import escape

from ..constants import (
    RSYNC,
    RSYNC_DRY_RUN_FLAGS,
    SSH_CONTROL_PATH,
    SSH_CONTROL_PERSIST,
    DRY_RUN_PREFIX,
)
from ..models.result import ExecutionResult
from ..utils.output import console

logger = logging.getLogger(__name__)


@dataclass
class Command:
    """A program and its argument vector

    Attributes:
        program: Executable name or path
        args: Ordered arguments, passed to the process without a shell
        env: Extra environment variables for the child process
    """

    program: str
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)

    @property
    def argv(self) -> List[str]:
        return [self.program] + list(self.args)

    @property
    def is_sync(self) -> bool:
        """Check if this is a file-sync (rsync) invocation"""
        return os.path.basename(self.program) == RSYNC

    def display(self) -> str:
        """Shell-quoted rendering used for logs"""
        prefix = " ".join(f"{key}={shlex.quote(value)}" for key, value in self.env.items())
        line = shlex.join(self.argv)
        return f"{prefix} {line}" if prefix else line

    def __str__(self) -> str:
        return self.display()


class CommandExecutor:
    """Runs commands for real, or simulates them in dry-run mode

    In dry-run mode only rsync is executed, with its own trial-run flags
    added. Every other command is printed and reported as a success without
    being started.
    """

    def __init__(self, dry_run: bool = False, pid: Optional[int] = None):
        """Initialize executor

        Args:
            dry_run: Simulate instead of executing
            pid: Process id used to key the shared SSH control socket
        """
        self._dry_run = dry_run
        socket_path = SSH_CONTROL_PATH.format(pid=pid if pid is not None else os.getpid())
        self.ssh_options: List[str] = [
            "-o", "ControlMaster=auto",
            "-o", f"ControlPath={socket_path}",
            "-o", f"ControlPersist={SSH_CONTROL_PERSIST}",
        ]

    @property
    def is_dry_run(self) -> bool:
        return self._dry_run

    @property
    def ssh_command_string(self) -> str:
        """``ssh`` with the multiplexing options, as rsync ``-e`` expects"""
        return shlex.join(["ssh"] + self.ssh_options)

    def run(self, command: Command, capture: bool = False) -> ExecutionResult:
        """Execute a command

        Args:
            command: Command to run
            capture: Capture stdout/stderr instead of streaming them

        Returns:
            Execution result
        """
        if self._dry_run and not command.is_sync:
            console.print(f"{DRY_RUN_PREFIX}Executing: {escape(command.display())}", highlight=False)
            return ExecutionResult(return_code=0, stdout="" if capture else None,
                                   stderr="" if capture else None, simulated=True)

        if self._dry_run:
            command = self._with_trial_run(command)
            console.print(f"{DRY_RUN_PREFIX}Executing: {escape(command.display())}", highlight=False)
        else:
            console.print(f"Executing: {escape(command.display())}", highlight=False)

        result = self._spawn(command, capture)
        logger.debug("Exit code %s for %s", result.return_code, command.program)
        return result

    def _with_trial_run(self, command: Command) -> Command:
        """Add rsync's own dry-run flags"""
        args = list(command.args)
        for flag in reversed(RSYNC_DRY_RUN_FLAGS):
            if flag not in args:
                args.insert(0, flag)
        return Command(command.program, args, dict(command.env))

    def _spawn(self, command: Command, capture: bool) -> ExecutionResult:
        """Start the process and wait for it"""
        env = None
        if command.env:
            env = os.environ.copy()
            env.update(command.env)

        try:
            completed = subprocess.run(
                command.argv,
                env=env,
                capture_output=capture,
                text=True,
            )
        except FileNotFoundError as e:
            logger.debug("Program not found: %s", command.program)
            return ExecutionResult(return_code=127, stdout="" if capture else None, stderr=str(e))

        if capture:
            return ExecutionResult(
                return_code=completed.returncode,
                stdout=completed.stdout,
                stderr=completed.stderr,
            )
        return ExecutionResult(return_code=completed.returncode)
