"""Step and artifact models used by the task runner"""

import posixpath
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..constants import SYNC_FOLDERS, DUMP_TIMESTAMP_FORMAT, SyncDirection


@dataclass(frozen=True)
class SyncStep:
    """One folder to mirror in one direction"""

    folder_key: str
    direction: SyncDirection

    def __post_init__(self):
        if self.folder_key not in SYNC_FOLDERS:
            raise ValueError(f"Unknown folder: {self.folder_key}")

    @property
    def relative_path(self) -> str:
        """Folder path relative to the WordPress root"""
        return SYNC_FOLDERS[self.folder_key]


@dataclass(frozen=True)
class DumpArtifact:
    """A timestamped SQL file, local or remote"""

    directory: str
    filename: str
    ssh_target: Optional[str] = None

    @property
    def is_remote(self) -> bool:
        return self.ssh_target is not None

    @property
    def path(self) -> str:
        if self.is_remote:
            return posixpath.join(self.directory, self.filename)
        return str(Path(self.directory) / self.filename)

    @property
    def scp_location(self) -> str:
        """Location as understood by scp"""
        if self.is_remote:
            return f"{self.ssh_target}:{self.path}"
        return self.path

    def __str__(self) -> str:
        return self.scp_location


def dump_filename(prefix: str, moment: Optional[datetime] = None) -> str:
    """Build a second-granular dump file name like ``staging_20250101_120000.sql``"""
    moment = moment or datetime.now()
    return f"{prefix}_{moment.strftime(DUMP_TIMESTAMP_FORMAT)}.sql"
