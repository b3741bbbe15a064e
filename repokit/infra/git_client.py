"""
Git client infrastructure for repokit.

Provides a narrow abstraction over git command execution.
All git invocations go through this client, making them:
- Easy to replace with a fake in tests
- Consistent in error handling
- Isolated from bootstrap logic
"""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union
import logging

from ..exit_codes import ProcessExecutionError

logger = logging.getLogger(__name__)


@dataclass
class GitResult:
    """Result of a git invocation."""
    returncode: int
    stdout: str = ""
    stderr: str = ""
    args: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class GitClient:
    """
    Abstraction over git commands.

    Example:
        client = GitClient()
        client.init_bare("/srv/project-objects/foo.git")
    """

    def __init__(self, binary: str = "git", timeout: Optional[float] = None):
        """
        Initialize GitClient.

        Args:
            binary: git executable name or path
            timeout: Command timeout in seconds (None waits for git to exit)
        """
        self.binary = binary
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: dict) -> "GitClient":
        general = config.get("general", {})
        return cls(
            binary=general.get("git_binary") or "git",
            timeout=general.get("git_timeout"),
        )

    def run(self, args: Sequence[str], cwd: Optional[Union[str, Path]] = None) -> GitResult:
        """
        Run git with the given arguments.

        Standard input is closed. Failure to start git or a timeout raises
        ProcessExecutionError; a non-zero exit is reported in the result.
        """
        cmd = [self.binary] + [str(a) for a in args]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ProcessExecutionError(
                f"git command timed out after {self.timeout}s: {' '.join(cmd)}",
                args=cmd,
            ) from e
        except OSError as e:
            raise ProcessExecutionError(
                f"fail to run {self.binary}: {e}", args=cmd
            ) from e

        return GitResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            args=cmd,
        )

    def init_bare(self, path: Union[str, Path]) -> GitResult:
        """Create (or reinitialize) a bare repository skeleton at path."""
        result = self.run(["init", "-q", "--bare", str(path)])
        if not result.ok:
            raise ProcessExecutionError(
                f"git init failed for {path} (exit {result.returncode}): {result.stderr.strip()}",
                args=result.args,
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return result
