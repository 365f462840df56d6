"""Locate mysqldump / mariadb-dump for local WP-CLI exports"""

import logging
import os
import shutil
from typing import Callable, Dict, List, Optional

from ..constants import DUMPER_BINARIES, DUMPER_FALLBACK_PATHS, DUMPER_ENV_VAR

logger = logging.getLogger(__name__)


def _is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def find_dumper(
    binaries: List[str] = None,
    fallback_paths: List[str] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
    is_executable: Callable[[str], bool] = _is_executable,
) -> Optional[str]:
    """Find a database dump binary

    Looks on PATH first, then at well-known install locations (distribution
    packages, /usr/local, MAMP).

    Returns:
        Absolute path or None when nothing was found
    """
    for binary in binaries or DUMPER_BINARIES:
        path = which(binary)
        if path and is_executable(path):
            logger.debug("Found %s on PATH: %s", binary, path)
            return path

    for path in fallback_paths or DUMPER_FALLBACK_PATHS:
        if is_executable(path):
            logger.debug("Using fallback dumper: %s", path)
            return path

    logger.debug("No dump binary found, leaving it to WP-CLI")
    return None


def dumper_env(dumper_path: Optional[str]) -> Dict[str, str]:
    """Environment variables telling WP-CLI which dumper to use"""
    if not dumper_path:
        return {}
    return {DUMPER_ENV_VAR: dumper_path}
