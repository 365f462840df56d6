"""Push, pull, dump and test pipelines"""

import logging
import shlex
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple, Type

from .config_service import EnvironmentResolver
from .diagnostics import Diagnostics
from ..api.exceptions import (
    ConfigError,
    StepFailure,
    SyncFailure,
    DumpFailure,
    ImportFailure,
)
from ..constants import (
    SYNC_FOLDERS,
    RSYNC,
    RSYNC_BASE_FLAGS,
    SCP,
    WP_CLI,
    DUMP_PREFIX_PUSH_EXPORT,
    DUMP_PREFIX_PUSH_PROCESSED,
    DUMP_PREFIX_PULL,
    DumpRetention,
    SyncDirection,
)
from ..core.dumper import find_dumper, dumper_env
from ..core.executor import Command, CommandExecutor
from ..core.path_resolver import (
    LocalPaths,
    remote_path,
    remote_dump_dir,
    remote_dump_artifact,
)
from ..core.remote import RemoteCommandResolver
from ..models.config import EnvironmentConfig
from ..models.result import ExecutionResult, OperationResult, OperationStatus
from ..models.steps import DumpArtifact, SyncStep, dump_filename
from ..utils.output import step, warning

logger = logging.getLogger(__name__)


def plan_push(env_conf: EnvironmentConfig,
              folders: Iterable[str]) -> Tuple[List[SyncStep], List[str]]:
    """Split requested folders into sync steps and denied folders

    Steps follow catalog order whatever the request order.

    Returns:
        (steps, denied folder keys)
    """
    requested = _validate_folders(folders)
    steps, denied = [], []
    for key in requested:
        if env_conf.is_denied(key):
            denied.append(key)
        else:
            steps.append(SyncStep(key, SyncDirection.PUSH))
    return steps, denied


def plan_pull(folders: Iterable[str]) -> List[SyncStep]:
    return [SyncStep(key, SyncDirection.PULL) for key in _validate_folders(folders)]


def _validate_folders(folders: Iterable[str]) -> List[str]:
    folders = set(folders)
    unknown = folders - set(SYNC_FOLDERS)
    if unknown:
        raise ConfigError(f"Unknown folder(s): {', '.join(sorted(unknown))}")
    return [key for key in SYNC_FOLDERS if key in folders]


class TaskRunner:
    """Turns move.yml environments into ordered external commands

    Every step must succeed before the next one starts; the first failure
    raises and nothing already done is rolled back.
    """

    def __init__(
        self,
        resolver: EnvironmentResolver,
        executor: CommandExecutor,
        local_paths: Optional[LocalPaths] = None,
        remote: Optional[RemoteCommandResolver] = None,
        retention: Optional[DumpRetention] = None,
        dumper_finder: Callable[[], Optional[str]] = find_dumper,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize task runner

        Args:
            resolver: Environment lookup
            executor: Command executor (carries the dry-run flag)
            local_paths: Local WordPress roots, derived from the local section if omitted
            remote: Remote command resolver, created on top of the executor if omitted
            retention: Dump retention, the local section's setting if omitted
            dumper_finder: Returns the mysqldump path for local exports
            clock: Source of dump timestamps
        """
        self.resolver = resolver
        self.executor = executor
        self.local_conf = resolver.get_local()
        self.local_paths = local_paths or LocalPaths.from_env(self.local_conf)
        self.remote = remote or RemoteCommandResolver(executor)
        self.retention = retention or self.local_conf.dump_retention
        self._dumper_finder = dumper_finder
        self._dumper_path: Optional[str] = None
        self._dumper_checked = False
        self._clock = clock

    @property
    def dry_run(self) -> bool:
        return self.executor.is_dry_run

    # --- Operations ---

    def push(self, env: str, folders: Iterable[str], sync_db: bool,
             delete: bool = False) -> OperationResult:
        """Push local files and/or database to an environment"""
        env_conf = self.resolver.resolve(env)
        result = OperationResult("push", env, dry_run=self.dry_run)

        steps, denied = plan_push(env_conf, folders)
        for key in denied:
            message = f"The '{key}' directory is in the 'not_push' list for the '{env}' environment. Skipping."
            warning(message)
            result.add_warning(message)

        if sync_db and not env_conf.is_remote:
            raise ConfigError(f"Pushing the database requires an 'ssh' target for the '{env}' environment.")

        if not steps and not sync_db:
            return result.complete(
                OperationStatus.SKIPPED,
                "Nothing to push. Specify a component to sync (e.g. --db, --themes) or check 'not_push' in move.yml."
            )

        step(f"Pushing to environment: {env}" + (" (dry run)" if self.dry_run else ""))

        for sync_step in steps:
            self._sync(sync_step, env_conf, delete)
            result.add_step(f"sync {sync_step.folder_key}")

        if sync_db:
            self._push_database(env_conf, result)

        return result.complete(OperationStatus.SUCCESS, "Push completed.")

    def pull(self, env: str, folders: Iterable[str], sync_db: bool,
             delete: bool = False) -> OperationResult:
        """Pull files and/or database from an environment"""
        env_conf = self.resolver.resolve(env)
        if not env_conf.is_remote:
            raise ConfigError(f"The 'pull' command requires an 'ssh' configuration for the '{env}' environment.")

        result = OperationResult("pull", env, dry_run=self.dry_run)
        steps = plan_pull(folders)

        if not steps and not sync_db:
            return result.complete(
                OperationStatus.SKIPPED,
                "Nothing to pull. Specify a component to sync (e.g. --db, --uploads)."
            )

        step(f"Pulling from environment: {env}" + (" (dry run)" if self.dry_run else ""))

        for sync_step in steps:
            self._sync(sync_step, env_conf, delete)
            result.add_step(f"sync {sync_step.folder_key}")

        if sync_db:
            self._pull_database(env_conf, result)

        return result.complete(OperationStatus.SUCCESS, "Pull completed.")

    def dump(self, env: str, purge: bool = False) -> OperationResult:
        """Export an environment's database, or purge its dump directory"""
        env_conf = self.resolver.resolve(env)
        result = OperationResult("dump", env, dry_run=self.dry_run)

        if purge:
            self._purge_dumps(env_conf)
            result.add_step("purge")
            return result.complete(OperationStatus.SUCCESS, f"Dump directory for environment '{env}' purged.")

        step(f"Creating a dump for environment: {env}")
        moment = self._clock()

        if env_conf.is_remote:
            artifact = remote_dump_artifact(env_conf, dump_filename(env, moment))
            self._check(
                self.remote.execute_remote(env_conf.ssh_target, f"mkdir -p {shlex.quote(artifact.directory)}"),
                DumpFailure,
                f"Failed to create remote directory for dump: {artifact.directory}."
            )
            export = self.remote.wp(env_conf, "db", "export", artifact.path)
            exit_result = self.remote.execute_remote(env_conf.ssh_target, export)
        else:
            artifact = self.local_paths.dump_artifact(env, moment)
            self._ensure_local_dump_dir()
            exit_result = self.executor.run(self._local_wp("db", "export", artifact.path))

        self._check(exit_result, DumpFailure, f"Failed to create dump for environment '{env}'.")
        result.add_step("export")
        result.artifacts.append(str(artifact))
        return result.complete(OperationStatus.SUCCESS, f"Dump for environment '{env}' created: {artifact}")

    def test(self, env: str) -> OperationResult:
        """Check SSH, vhost, WordPress path and database of an environment"""
        env_conf = self.resolver.resolve(env)
        result = OperationResult("test", env, dry_run=self.dry_run)
        step(f"Testing environment: {env}")

        diagnostics = Diagnostics(env_conf, self.remote)
        for label in diagnostics.run():
            result.add_step(label)

        return result.complete(OperationStatus.SUCCESS, f"All tests for environment '{env}' passed.")

    # --- Files ---

    def build_sync_command(self, sync_step: SyncStep, env_conf: EnvironmentConfig,
                           delete: bool) -> Command:
        """rsync invocation for one folder

        ``--delete`` is only added on request; dry-run flags are added by
        the executor.
        """
        args = list(RSYNC_BASE_FLAGS)
        if delete:
            args.append("--delete")
        if not self.dry_run:
            args.append("--progress")
        args.extend(["-e", self.executor.ssh_command_string])
        args.extend(f"--exclude={pattern}" for pattern in env_conf.exclude)

        local = str(self.local_paths.resolve(sync_step.relative_path))
        if env_conf.is_remote:
            target = f"{env_conf.ssh_target}:{remote_path(env_conf, sync_step.relative_path)}"
        else:
            target = str(Path(env_conf.wp_path) / sync_step.relative_path)

        if sync_step.direction == SyncDirection.PULL:
            args.extend([f"{target}/", local])
        else:
            args.extend([f"{local}/", target])
        return Command(RSYNC, args)

    def _sync(self, sync_step: SyncStep, env_conf: EnvironmentConfig, delete: bool) -> None:
        step(f"Sync ({sync_step.direction.value}) {sync_step.relative_path}")

        if sync_step.direction == SyncDirection.PULL:
            destination = self.local_paths.resolve(sync_step.relative_path)
            if not destination.is_dir() and not self.dry_run:
                destination.mkdir(mode=0o755, parents=True, exist_ok=True)

        command = self.build_sync_command(sync_step, env_conf, delete)
        self._check(
            self.executor.run(command),
            SyncFailure,
            f"Failed to sync '{sync_step.folder_key}' ({sync_step.direction.value})."
        )

    # --- Database ---

    def _push_database(self, env_conf: EnvironmentConfig, result: OperationResult) -> None:
        ssh = env_conf.ssh_target
        # Fail before touching anything if WP-CLI is missing remotely
        self.remote.build_invocation(env_conf, ssh)

        moment = self._clock()
        export = self.local_paths.dump_artifact(DUMP_PREFIX_PUSH_EXPORT, moment)
        processed = DumpArtifact(
            export.directory,
            DUMP_PREFIX_PUSH_PROCESSED + export.filename[len(DUMP_PREFIX_PUSH_EXPORT):]
        )
        remote_file = remote_dump_artifact(env_conf, processed.filename)
        self._ensure_local_dump_dir()

        step("Exporting local database...")
        exit_result = self.executor.run(self._local_wp("db", "export", export.path))
        if not self.dry_run and (not exit_result.ok or not Path(export.path).exists()):
            raise DumpFailure(
                f"Failed to export local database. Dump file could not be created at: {export.path}.",
                exit_result.return_code
            )
        result.add_step("export local database")

        step(f"Replacing {self.local_conf.vhost} with {env_conf.vhost} locally...")
        self._check(
            self.executor.run(self._local_wp(
                "search-replace", self.local_conf.vhost, env_conf.vhost,
                "--all-tables", "--skip-columns=guid", f"--export={processed.path}"
            )),
            DumpFailure,
            "Failed to run search-replace on the local dump."
        )
        result.add_step("search-replace")

        self._check(
            self.remote.execute_remote(ssh, f"mkdir -p {shlex.quote(remote_file.directory)}"),
            SyncFailure,
            f"Failed to create remote directory for dump: {remote_file.directory}."
        )

        step("Transferring dump file...")
        self._check(
            self.executor.run(self._scp(processed.scp_location, remote_file.scp_location)),
            SyncFailure,
            "Failed to transfer dump file to remote server."
        )
        result.add_step("transfer dump")

        step("Importing database on remote...")
        self._check(
            self.remote.execute_remote(ssh, self.remote.wp(env_conf, "db", "import", remote_file.path)),
            ImportFailure,
            "Failed to import database on remote server."
        )
        result.add_step("import remote database")
        result.artifacts.append(str(remote_file))

        fix_urls = " && ".join(
            self.remote.wp(env_conf, "option", "update", option, env_conf.vhost)
            for option in ("home", "siteurl")
        )
        if self.remote.execute_remote(ssh, fix_urls).ok:
            result.add_step("update site url")
        else:
            message = f"Database imported, but 'home'/'siteurl' could not be set to {env_conf.vhost}."
            warning(message)
            result.add_warning(message)

        local_files = [export, processed]
        self._apply_retention(local_files, remote_file, result)

    def _pull_database(self, env_conf: EnvironmentConfig, result: OperationResult) -> None:
        ssh = env_conf.ssh_target
        moment = self._clock()
        local_file = self.local_paths.dump_artifact(DUMP_PREFIX_PULL, moment)
        remote_file = remote_dump_artifact(env_conf, local_file.filename)

        step("Exporting remote database...")
        self._check(
            self.remote.execute_remote(ssh, f"mkdir -p {shlex.quote(remote_file.directory)}"),
            SyncFailure,
            f"Failed to create remote directory for dump: {remote_file.directory}."
        )
        self._check(
            self.remote.execute_remote(ssh, self.remote.wp(env_conf, "db", "export", remote_file.path)),
            DumpFailure,
            "Failed to export remote database."
        )
        result.add_step("export remote database")

        step("Pulling dump file...")
        self._ensure_local_dump_dir()
        self._check(
            self.executor.run(self._scp(remote_file.scp_location, local_file.scp_location)),
            SyncFailure,
            "Failed to pull dump file from remote server."
        )
        result.add_step("transfer dump")

        step("Importing and running search-replace locally...")
        self._check(
            self.executor.run(self._local_wp("db", "import", local_file.path)),
            ImportFailure,
            "Failed to import database locally."
        )
        result.add_step("import local database")

        self._check(
            self.executor.run(self._local_wp(
                "search-replace", env_conf.vhost, self.local_conf.vhost,
                "--all-tables", "--skip-columns=guid"
            )),
            ImportFailure,
            "Failed to run search-replace locally."
        )
        result.add_step("search-replace")
        result.artifacts.append(str(local_file))

        self._apply_retention([local_file], remote_file, result)

    def _purge_dumps(self, env_conf: EnvironmentConfig) -> None:
        step(f"Purging dumps for environment: {env_conf.name}")
        if env_conf.is_remote:
            pattern = f"rm -f {shlex.quote(remote_dump_dir(env_conf))}/*.sql"
            exit_result = self.remote.execute_remote(env_conf.ssh_target, pattern)
        else:
            pattern = f"rm -f {shlex.quote(str(self.local_paths.dump_dir))}/*.sql"
            exit_result = self.executor.run(Command("sh", ["-c", pattern]))
        self._check(exit_result, DumpFailure, f"Failed to purge dumps for environment '{env_conf.name}'.")

    def _apply_retention(self, local_files: List[DumpArtifact], remote_file: DumpArtifact,
                         result: OperationResult) -> None:
        """Delete transferred dumps according to the retention policy

        Best effort: failures become warnings.
        """
        if self.retention == DumpRetention.KEEP:
            result.artifacts.extend(str(artifact) for artifact in local_files)
            return

        for artifact in local_files:
            if self.dry_run:
                step(f"Would delete {artifact.path}")
                continue
            try:
                Path(artifact.path).unlink(missing_ok=True)
            except OSError as e:
                message = f"Could not delete {artifact.path}: {e}"
                warning(message)
                result.add_warning(message)

        if self.retention == DumpRetention.ALL:
            cleanup = self.remote.execute_remote(remote_file.ssh_target, f"rm -f {shlex.quote(remote_file.path)}")
            if not cleanup.ok:
                message = f"Could not delete remote dump {remote_file}"
                warning(message)
                result.add_warning(message)

        result.add_step("cleanup dumps")

    # --- Helpers ---

    def _check(self, exit_result: ExecutionResult, error: Type[StepFailure], message: str) -> None:
        if not exit_result.ok:
            detail = f" {exit_result.stderr.strip()}" if exit_result.stderr else ""
            raise error(f"{message} See output above for details.{detail}", exit_result.return_code)

    def _ensure_local_dump_dir(self) -> None:
        if not self.dry_run:
            self.local_paths.dump_dir.mkdir(mode=0o755, parents=True, exist_ok=True)

    def _local_wp(self, *args: str) -> Command:
        """Local WP-CLI call on the WordPress root"""
        if self.local_conf.wp_cli_path:
            argv = [self.local_conf.wp_cli_path]
        else:
            argv = [WP_CLI]
        if self.local_conf.php_cli:
            argv.insert(0, self.local_conf.php_cli)

        argv.extend([f"--path={self.local_paths.abspath}"] + list(args) + ["--allow-root"])
        return Command(argv[0], argv[1:], env=dumper_env(self._dumper()))

    def _dumper(self) -> Optional[str]:
        if not self._dumper_checked:
            self._dumper_path = self._dumper_finder()
            self._dumper_checked = True
        return self._dumper_path

    def _scp(self, source: str, destination: str) -> Command:
        return Command(SCP, list(self.executor.ssh_options) + [source, destination])
