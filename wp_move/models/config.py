"""Configuration data models"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, FrozenSet

from ..constants import (
    ENV_KEYS,
    DB_KEYS,
    DEFAULT_DB_HOST,
    SYNC_FOLDERS,
    DumpRetention,
)


@dataclass(frozen=True)
class DatabaseConfig:
    """Direct database credentials, only used for local environments"""

    user: str
    password: str
    name: str
    host: str = DEFAULT_DB_HOST

    @classmethod
    def from_dict(cls, env_name: str, data: Dict[str, Any]) -> 'DatabaseConfig':
        """Create from dictionary"""
        if not isinstance(data, dict):
            raise ValueError(f"'{env_name}.db' must be a mapping")

        unknown = set(data) - DB_KEYS
        if unknown:
            raise ValueError(f"Unknown key(s) in '{env_name}.db': {', '.join(sorted(unknown))}")

        missing = [key for key in ("user", "name") if not data.get(key)]
        if missing:
            raise ValueError(f"'{env_name}.db' requires: {', '.join(missing)}")

        return cls(
            user=str(data["user"]),
            password="" if data.get("password") is None else str(data["password"]),
            name=str(data["name"]),
            host=str(data.get("host") or DEFAULT_DB_HOST),
        )


@dataclass(frozen=True)
class EnvironmentConfig:
    """One deployment target declared in move.yml"""

    name: str
    wp_path: str
    vhost: str
    ssh_target: Optional[str] = None
    exclude: List[str] = field(default_factory=list)
    not_push: FrozenSet[str] = frozenset()
    db: Optional[DatabaseConfig] = None
    php_cli: Optional[str] = None
    wp_cli_path: Optional[str] = None

    # Local section only
    content_dir: Optional[str] = None
    dump_retention: DumpRetention = DumpRetention.KEEP

    @property
    def is_remote(self) -> bool:
        """Check if the environment is reached over SSH"""
        return bool(self.ssh_target)

    def is_denied(self, folder_key: str) -> bool:
        """Check if a folder may not be pushed to this environment"""
        return folder_key in self.not_push

    def get_display_info(self) -> str:
        """Get display information for the environment"""
        if self.is_remote:
            return f"{self.ssh_target}:{self.wp_path}"
        return self.wp_path

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> 'EnvironmentConfig':
        """Create from a move.yml section

        Raises:
            ValueError: If the section is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Section '{name}' must be a mapping")

        unknown = set(data) - ENV_KEYS
        if unknown:
            raise ValueError(f"Unknown key(s) in '{name}': {', '.join(sorted(unknown))}")

        missing = [key for key in ("wp_path", "vhost") if not data.get(key)]
        if missing:
            raise ValueError(f"Section '{name}' requires: {', '.join(missing)}")

        if data.get("ssh") and data.get("ssh_target"):
            raise ValueError(f"Section '{name}' defines both 'ssh' and 'ssh_target'")
        ssh_target = data.get("ssh_target") or data.get("ssh") or None

        exclude = data.get("exclude") or []
        if not isinstance(exclude, list):
            raise ValueError(f"'{name}.exclude' must be a list")

        not_push = data.get("not_push") or []
        if not isinstance(not_push, list):
            raise ValueError(f"'{name}.not_push' must be a list")
        invalid = [key for key in not_push if key not in SYNC_FOLDERS]
        if invalid:
            raise ValueError(
                f"'{name}.not_push' has unknown folder(s): {', '.join(map(str, invalid))} "
                f"(expected {', '.join(SYNC_FOLDERS)})"
            )

        db = None
        if not ssh_target:
            if "db" not in data:
                raise ValueError(f"Section '{name}' has no 'ssh' target and needs 'db' credentials")
            db = DatabaseConfig.from_dict(name, data["db"])

        try:
            retention = DumpRetention(data.get("dump_retention", DumpRetention.KEEP.value))
        except ValueError:
            choices = ", ".join(r.value for r in DumpRetention)
            raise ValueError(f"'{name}.dump_retention' must be one of: {choices}")

        return cls(
            name=name,
            wp_path=str(data["wp_path"]),
            vhost=str(data["vhost"]),
            ssh_target=str(ssh_target) if ssh_target else None,
            exclude=[str(item) for item in exclude],
            not_push=frozenset(not_push),
            db=db,
            php_cli=data.get("php_cli"),
            wp_cli_path=data.get("wp_cli_path"),
            content_dir=data.get("content_dir"),
            dump_retention=retention,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, without credentials"""
        data = {
            "name": self.name,
            "wp_path": self.wp_path,
            "vhost": self.vhost,
        }
        if self.ssh_target:
            data["ssh"] = self.ssh_target
        if self.exclude:
            data["exclude"] = list(self.exclude)
        if self.not_push:
            data["not_push"] = sorted(self.not_push)
        if self.db:
            data["db"] = {"host": self.db.host, "name": self.db.name, "user": self.db.user}
        if self.php_cli:
            data["php_cli"] = self.php_cli
        if self.wp_cli_path:
            data["wp_cli_path"] = self.wp_cli_path
        return data
