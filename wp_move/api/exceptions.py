"""Exception definitions for wp-move"""

from ..constants import ErrorCode


class WpMoveError(Exception):
    """Base exception for wp-move"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(WpMoveError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_ERROR)


class ConnectivityError(WpMoveError):
    """SSH, HTTP or database endpoint unreachable"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONNECTIVITY_ERROR)


class PathError(WpMoveError):
    """Target path is not a WordPress installation"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.PATH_ERROR)


class RemoteToolNotFound(WpMoveError):
    """WP-CLI could not be found on the remote PATH"""

    def __init__(self, ssh_target: str):
        message = f"WP-CLI not found on the PATH of {ssh_target}. Set 'wp_cli_path' for this environment."
        super().__init__(message, ErrorCode.REMOTE_TOOL_NOT_FOUND)
        self.ssh_target = ssh_target


class StepFailure(WpMoveError):
    """An external command returned a non-zero exit code"""

    def __init__(self, message: str, return_code: int = None, error_code: str = None):
        super().__init__(message, error_code)
        self.return_code = return_code


class SyncFailure(StepFailure):
    """File transfer error (rsync, scp, remote mkdir)"""

    def __init__(self, message: str, return_code: int = None):
        super().__init__(message, return_code, ErrorCode.SYNC_FAILURE)


class DumpFailure(StepFailure):
    """Database export error"""

    def __init__(self, message: str, return_code: int = None):
        super().__init__(message, return_code, ErrorCode.DUMP_FAILURE)


class ImportFailure(StepFailure):
    """Database import or search-replace error"""

    def __init__(self, message: str, return_code: int = None):
        super().__init__(message, return_code, ErrorCode.IMPORT_FAILURE)
