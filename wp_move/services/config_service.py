"""move.yml loading and environment lookup"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from ..api.exceptions import ConfigError
from ..constants import CONFIG_FILE_NAME, LOCAL_ENV, ENV_CONFIG_PATH
from ..models.config import EnvironmentConfig

logger = logging.getLogger(__name__)


class EnvironmentResolver:
    """Typed access to the environments declared in move.yml

    The file is parsed and validated once, on first access. Every section
    must be a valid environment; a broken ``prod`` section fails a ``push
    staging`` too.
    """

    def __init__(self, config_path: Union[str, Path]):
        """Initialize resolver

        Args:
            config_path: Path to move.yml
        """
        self.config_path = Path(config_path)
        self._environments: Optional[Dict[str, EnvironmentConfig]] = None

    @property
    def environments(self) -> Dict[str, EnvironmentConfig]:
        """All environments (lazy load)"""
        if self._environments is None:
            self.load()
        return self._environments

    def load(self) -> Dict[str, EnvironmentConfig]:
        """Load and validate the configuration file

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        if not self.config_path.is_file():
            raise ConfigError(f"Configuration file '{self.config_path}' not found!")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise ConfigError(f"Cannot read {self.config_path}: {e}") from e

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing {self.config_path.name}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_path.name} must contain a mapping of environments")

        if LOCAL_ENV not in data:
            raise ConfigError(f"The '{LOCAL_ENV}' section is missing in {self.config_path.name}.")

        environments = {}
        for name, section in data.items():
            try:
                environments[str(name)] = EnvironmentConfig.from_dict(str(name), section)
            except ValueError as e:
                raise ConfigError(f"Invalid {self.config_path.name}: {e}") from e

        logger.debug("Loaded %d environment(s) from %s", len(environments), self.config_path)
        self._environments = environments
        return environments

    def resolve(self, name: str) -> EnvironmentConfig:
        """Get the configuration of an environment

        Raises:
            ConfigError: If the environment is not defined
        """
        env_conf = self.environments.get(name)
        if env_conf is None:
            raise ConfigError(f"Environment '{name}' is not defined in {self.config_path.name}.")
        return env_conf

    def get_local(self) -> EnvironmentConfig:
        return self.environments[LOCAL_ENV]

    def names(self) -> List[str]:
        return list(self.environments)


def find_config_file(start_path: Optional[Path] = None) -> Optional[Path]:
    """Find move.yml

    The ``WP_MOVE_CONFIG`` environment variable wins; otherwise each
    directory from ``start_path`` up to the filesystem root is checked.

    Returns:
        Path to move.yml or None if not found
    """
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path).expanduser()

    current = Path(start_path).resolve() if start_path else Path.cwd()

    while True:
        candidate = current / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent
