"""Path resolution for local and remote WordPress installations"""

import posixpath
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..constants import WP_CONTENT_DIR, DUMP_DIR_NAME
from ..models.config import EnvironmentConfig
from ..models.steps import DumpArtifact, dump_filename


@dataclass(frozen=True)
class LocalPaths:
    """Filesystem roots of the local WordPress installation

    Attributes:
        abspath: WordPress root (the directory holding wp-settings.php)
        content_dir: wp-content directory, usually ``<abspath>/wp-content``
    """

    abspath: Path
    content_dir: Path

    @classmethod
    def from_env(cls, local_conf: EnvironmentConfig) -> 'LocalPaths':
        """Build from the ``local`` section of move.yml"""
        abspath = Path(local_conf.wp_path).expanduser()
        if local_conf.content_dir:
            content_dir = Path(local_conf.content_dir).expanduser()
        else:
            content_dir = abspath / WP_CONTENT_DIR
        return cls(abspath=abspath, content_dir=content_dir)

    @property
    def dump_dir(self) -> Path:
        """Directory where local dumps are written"""
        return self.content_dir / DUMP_DIR_NAME

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve a path relative to the WordPress root

        Args:
            path: Path to resolve (can be relative or absolute)

        Returns:
            Absolute path
        """
        path = Path(path)
        if path.is_absolute():
            return path
        return self.abspath / path

    def dump_artifact(self, prefix: str, moment: Optional[datetime] = None) -> DumpArtifact:
        """Get a fresh local dump artifact

        Names are second-granular. When a file with the same name is already
        present a numeric suffix is appended so an earlier dump is never
        overwritten.
        """
        filename = dump_filename(prefix, moment)
        stem = filename[:-len(".sql")]
        counter = 1
        while (self.dump_dir / filename).exists():
            filename = f"{stem}_{counter}.sql"
            counter += 1
        return DumpArtifact(directory=str(self.dump_dir), filename=filename)


def remote_path(env_conf: EnvironmentConfig, *parts: str) -> str:
    """Join parts onto a remote WordPress root (always POSIX)"""
    return posixpath.join(env_conf.wp_path.rstrip("/") or "/", *parts)


def remote_dump_dir(env_conf: EnvironmentConfig) -> str:
    """Dump directory of a remote environment"""
    return remote_path(env_conf, WP_CONTENT_DIR, DUMP_DIR_NAME)


def remote_dump_artifact(env_conf: EnvironmentConfig, filename: str) -> DumpArtifact:
    return DumpArtifact(
        directory=remote_dump_dir(env_conf),
        filename=filename,
        ssh_target=env_conf.ssh_target,
    )
