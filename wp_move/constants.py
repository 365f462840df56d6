"""Global constants for wp-move"""

from enum import Enum

APP_NAME = "wp-move"
LOG_FORMAT = "%(message)s"

# Configuration
CONFIG_FILE_NAME = "move.yml"
LOCAL_ENV = "local"
DEFAULT_PUSH_ENV = "staging"
DEFAULT_PULL_ENV = "staging"
DEFAULT_TEST_ENV = "local"
DEFAULT_DUMP_ENV = "local"

# Keys accepted in an environment section of move.yml
ENV_KEYS = {
    "ssh", "ssh_target", "wp_path", "vhost", "exclude", "not_push", "db",
    "php_cli", "wp_cli_path", "content_dir", "dump_retention",
}
DB_KEYS = {"host", "user", "password", "name"}
DEFAULT_DB_HOST = "localhost"

# WordPress layout
WP_CONTENT_DIR = "wp-content"
WP_MARKER_FILE = "wp-settings.php"
DUMP_DIR_NAME = "wpcli-move"

# Folder catalog, in sync order
SYNC_FOLDERS = {
    "themes": "wp-content/themes",
    "plugins": "wp-content/plugins",
    "mu-plugins": "wp-content/mu-plugins",
    "uploads": "wp-content/uploads",
}

# Dump file names
DUMP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
DUMP_PREFIX_PUSH_EXPORT = "local"
DUMP_PREFIX_PUSH_PROCESSED = "processed"
DUMP_PREFIX_PULL = "wp_move_remote"

# External tools
WP_CLI = "wp"
RSYNC = "rsync"
SSH = "ssh"
SCP = "scp"
RSYNC_BASE_FLAGS = ["-avz"]
RSYNC_DRY_RUN_FLAGS = ["--dry-run", "--itemize-changes"]
SSH_CONTROL_PATH = "/tmp/wp-move-ssh-{pid}"
SSH_CONTROL_PERSIST = "60s"
SSH_CONNECT_TIMEOUT = 5  # seconds

# Dumper discovery
DUMPER_BINARIES = ["mysqldump", "mariadb-dump"]
DUMPER_FALLBACK_PATHS = [
    "/usr/bin/mysqldump",
    "/usr/local/bin/mysqldump",
    "/usr/bin/mariadb-dump",
    "/usr/local/bin/mariadb-dump",
    "/Applications/MAMP/Library/bin/mysqldump",
]
DUMPER_ENV_VAR = "MYSQLDUMP_PATH"

# Probes
HTTP_TIMEOUT = 10  # seconds
DB_CONNECT_TIMEOUT = 5  # seconds

# Environment variables
ENV_CONFIG_PATH = "WP_MOVE_CONFIG"


class SyncDirection(Enum):
    PUSH = "push"
    PULL = "pull"


class DumpRetention(Enum):
    """What to delete once a database transfer succeeded"""
    KEEP = "keep"
    LOCAL = "local"
    ALL = "all"


# Error codes
class ErrorCode:
    CONFIG_ERROR = "WM001"
    CONNECTIVITY_ERROR = "WM002"
    PATH_ERROR = "WM003"
    REMOTE_TOOL_NOT_FOUND = "WM004"
    SYNC_FAILURE = "WM005"
    DUMP_FAILURE = "WM006"
    IMPORT_FAILURE = "WM007"


# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
DRY_RUN_PREFIX = "[cyan][Dry Run][/cyan] "
