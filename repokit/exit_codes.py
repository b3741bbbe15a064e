"""
Standard exit codes and error types for repokit.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional, Sequence

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
CONFIG_ERROR = 66        # Configuration file error (tool or git config)
PERMISSION_ERROR = 67    # Insufficient permissions
DATA_ERROR = 70          # Data format or validation error
PROCESS_ERROR = 72       # git subprocess failed to start or exited non-zero
FILESYSTEM_ERROR = 73    # Directory, file or symlink creation failed
MISSING_SOURCE = 74      # Objects repository to attach does not exist
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': FILESYSTEM_ERROR,
    'FileExistsError': FILESYSTEM_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'JSONDecodeError': DATA_ERROR,
    'ConfigIOError': CONFIG_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class BootstrapError(CommandError):
    """Base class for failures while bootstrapping a repository."""


class ProcessExecutionError(BootstrapError):
    """Raised when git cannot be started or exits non-zero."""
    def __init__(
        self,
        message: str,
        args: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message, PROCESS_ERROR)
        self.cmd = list(args)
        self.returncode = returncode
        self.stderr = stderr


class FilesystemError(BootstrapError):
    """Raised when a directory, file or symlink cannot be created or probed."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, FILESYSTEM_ERROR)
        self.path = path


class RepositoryNotFoundError(FilesystemError):
    """Raised when a repository directory expected on disk is absent."""


class HookInstallError(FilesystemError):
    """Raised when a hook symlink cannot be created."""
    def __init__(self, message: str, hook_name: str, path: Optional[str] = None):
        super().__init__(message, path)
        self.hook_name = hook_name


class MissingSourceRepositoryError(BootstrapError):
    """Raised when attaching to an objects repository that does not exist."""
    def __init__(self, path: str):
        super().__init__(f"attach a non-exist repo: {path}", MISSING_SOURCE)
        self.path = path


class ConfigIOError(BootstrapError):
    """Raised when a git config file cannot be read, parsed or written."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, CONFIG_ERROR)
        self.path = path
