"""Environment diagnostics behind ``wp-move test``"""

import logging
import shlex
from pathlib import Path
from typing import List

import pymysql
import requests

from ..api.exceptions import ConnectivityError, PathError
from ..constants import (
    SSH_CONNECT_TIMEOUT,
    HTTP_TIMEOUT,
    DB_CONNECT_TIMEOUT,
    WP_MARKER_FILE,
)
from ..core.remote import RemoteCommandResolver
from ..models.config import EnvironmentConfig
from ..utils.output import step, success

logger = logging.getLogger(__name__)


class DiagnosticCheck:
    """Base class for diagnostic checks

    ``run`` raises on failure and returns the confirmation message.
    """

    name = ""

    def __init__(self, env_conf: EnvironmentConfig, remote: RemoteCommandResolver):
        self.env_conf = env_conf
        self.remote = remote

    def describe(self) -> str:
        raise NotImplementedError

    def run(self) -> str:
        raise NotImplementedError


class SshConnectionCheck(DiagnosticCheck):
    """Remote host answers over SSH"""

    name = "ssh"

    def describe(self) -> str:
        return f"Testing SSH connection: {self.env_conf.ssh_target}"

    def run(self) -> str:
        ssh = self.env_conf.ssh_target
        result = self.remote.execute_remote(
            ssh, "echo 1", capture=True,
            extra_options=["-o", f"ConnectTimeout={SSH_CONNECT_TIMEOUT}"]
        )
        if not result.ok:
            message = f"Failed to connect via SSH to {ssh}."
            if result.stderr:
                message += f" {result.stderr.strip()}"
            raise ConnectivityError(message)
        return "SSH connection successful."


class VhostCheck(DiagnosticCheck):
    """Site URL answers with a 2xx status"""

    name = "vhost"

    def describe(self) -> str:
        return f"Testing URL (vhost): {self.env_conf.vhost}"

    def run(self) -> str:
        vhost = self.env_conf.vhost
        try:
            response = requests.get(vhost, timeout=HTTP_TIMEOUT)
        except requests.exceptions.RequestException as e:
            raise ConnectivityError(f"Failed to connect to {vhost}. Error: {e}") from e

        if 200 <= response.status_code < 300:
            return f"URL is accessible (Code: {response.status_code})."
        raise ConnectivityError(f"URL returned an error code: {response.status_code}.")


class WordPressPathCheck(DiagnosticCheck):
    """wp-settings.php exists under wp_path"""

    name = "path"

    def describe(self) -> str:
        return f"Testing WordPress path: {self.env_conf.wp_path}"

    def run(self) -> str:
        path = self.env_conf.wp_path

        if self.env_conf.is_remote:
            probe = (
                f"cd {shlex.quote(path)} && [ -f {WP_MARKER_FILE} ] && echo 1 || echo 0"
            )
            result = self.remote.execute_remote(self.env_conf.ssh_target, probe, capture=True)
            if (result.stdout or "").strip() != "1":
                message = f"Remote path '{path}' does not exist or is not a WordPress installation."
                if result.stderr:
                    message += f" {result.stderr.strip()}"
                raise PathError(message)
            return "Remote path is a valid WordPress installation."

        root = Path(path).expanduser()
        if root.is_dir() and (root / WP_MARKER_FILE).is_file():
            return "Local path is a valid WordPress installation."
        raise PathError(f"Local path '{path}' does not exist or is not a WordPress installation.")


class DatabaseCheck(DiagnosticCheck):
    """Database accepts connections"""

    name = "db"

    def describe(self) -> str:
        return "Testing database connection."

    def run(self) -> str:
        if self.env_conf.is_remote:
            command = self.remote.wp(self.env_conf, "db", "check")
            result = self.remote.execute_remote(self.env_conf.ssh_target, command)
            if not result.ok:
                raise ConnectivityError(
                    f"Database check failed on {self.env_conf.ssh_target} (exit code {result.return_code})."
                )
            return "Remote database connection successful."

        db = self.env_conf.db
        try:
            connection = pymysql.connect(
                host=db.host,
                user=db.user,
                password=db.password,
                database=db.name,
                connect_timeout=DB_CONNECT_TIMEOUT,
            )
        except pymysql.MySQLError as e:
            raise ConnectivityError(f"Failed to connect to local database: {e}") from e
        connection.close()
        return "Local database connection successful."


class Diagnostics:
    """Ordered, fail-fast checks for one environment"""

    def __init__(self, env_conf: EnvironmentConfig, remote: RemoteCommandResolver):
        self.env_conf = env_conf
        self.checks: List[DiagnosticCheck] = []

        if env_conf.is_remote:
            self.checks.append(SshConnectionCheck(env_conf, remote))
        self.checks.extend([
            VhostCheck(env_conf, remote),
            WordPressPathCheck(env_conf, remote),
            DatabaseCheck(env_conf, remote),
        ])

    def run(self) -> List[str]:
        """Run every check in order

        Returns:
            Names of the checks that passed

        Raises:
            ConnectivityError, PathError: On the first failing check
        """
        passed = []
        for number, check in enumerate(self.checks, start=1):
            step(f"{number}. {check.describe()}")
            success(check.run())
            passed.append(check.name)
        return passed
