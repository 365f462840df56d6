"""Remote WP-CLI resolution and SSH command building"""

import logging
import shlex
from typing import Dict, List, Optional

from .executor import Command, CommandExecutor
from ..api.exceptions import RemoteToolNotFound
from ..constants import SSH, WP_CLI
from ..models.config import EnvironmentConfig
from ..models.result import ExecutionResult

logger = logging.getLogger(__name__)


class RemoteCommandResolver:
    """Builds and runs commands on SSH targets

    The WP-CLI binary path of every SSH target is discovered once and kept
    for the lifetime of this resolver.
    """

    def __init__(self, executor: CommandExecutor, cache: Optional[Dict[str, str]] = None):
        """Initialize resolver

        Args:
            executor: Executor used for every remote call
            cache: Optional pre-filled ssh_target -> wp path mapping
        """
        self.executor = executor
        self._tool_cache: Dict[str, str] = cache if cache is not None else {}

    @property
    def tool_cache(self) -> Dict[str, str]:
        return dict(self._tool_cache)

    def ssh_command(self, ssh_target: str, remote_command: str,
                    extra_options: Optional[List[str]] = None) -> Command:
        """Wrap a remote shell line in an ssh invocation

        The remote line is passed as a single argument; ssh hands it to the
        remote shell verbatim.
        """
        args = list(self.executor.ssh_options)
        if extra_options:
            args.extend(extra_options)
        args.extend([ssh_target, remote_command])
        return Command(SSH, args)

    def execute_remote(self, ssh_target: str, remote_command: str, capture: bool = False,
                       extra_options: Optional[List[str]] = None) -> ExecutionResult:
        """Run a shell line on the remote host"""
        command = self.ssh_command(ssh_target, remote_command, extra_options)
        return self.executor.run(command, capture=capture)

    def resolve_remote_tool_path(self, ssh_target: str) -> str:
        """Find the WP-CLI binary on the remote PATH

        Raises:
            RemoteToolNotFound: If ``command -v wp`` finds nothing
        """
        if ssh_target in self._tool_cache:
            return self._tool_cache[ssh_target]

        result = self.execute_remote(ssh_target, f"command -v {WP_CLI}", capture=True)

        if result.simulated:
            # Dry run: the probe did not actually reach the host
            return WP_CLI

        path = (result.stdout or "").strip().splitlines()
        if not result.ok or not path:
            raise RemoteToolNotFound(ssh_target)

        self._tool_cache[ssh_target] = path[0].strip()
        logger.debug("Resolved WP-CLI on %s: %s", ssh_target, self._tool_cache[ssh_target])
        return self._tool_cache[ssh_target]

    def build_invocation(self, env_conf: EnvironmentConfig, ssh_target: str) -> str:
        """Shell fragment that starts WP-CLI on the remote host"""
        if env_conf.wp_cli_path:
            tool = env_conf.wp_cli_path
        else:
            tool = self.resolve_remote_tool_path(ssh_target)

        if env_conf.php_cli:
            return f"{shlex.quote(env_conf.php_cli)} {shlex.quote(tool)}"
        return shlex.quote(tool)

    def wp(self, env_conf: EnvironmentConfig, *args: str) -> str:
        """Full remote WP-CLI line for an environment

        Example:
            ``wp(conf, "db", "check")`` gives
            ``/usr/bin/wp --path=/srv/www db check --allow-root``
        """
        invocation = self.build_invocation(env_conf, env_conf.ssh_target)
        parts = [f"--path={env_conf.wp_path}"] + list(args) + ["--allow-root"]
        return f"{invocation} {shlex.join(parts)}"
