"""
Hook installation service for repokit.

Hooks are never copied: each recognized hook name in a repository's
hooks directory is a symlink to the centrally maintained script, so
updates to the central copy apply everywhere at once.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..config import load_config
from ..domain import Repository
from ..exit_codes import FilesystemError, HookInstallError

logger = logging.getLogger(__name__)

DEFAULT_HOOKS = ("commit-msg", "pre-auto-gc")


class HookInstaller:
    """
    Links the recognized hooks into a repository's hooks directory.

    Example:
        installer = HookInstaller(config={'hooks': {'directory': '/central/hooks'}})
        installer.install(Repository('/srv/objects/foo.git', is_bare=True))
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        hook_names: Optional[Sequence[str]] = None,
        hooks_dir: Optional[Path] = None,
    ):
        """
        Initialize HookInstaller.

        Args:
            config: Configuration dict (loads default if None)
            hook_names: Hook registry override
            hooks_dir: Hook source directory override
        """
        self.config = config if config is not None else load_config()
        self._hook_names = tuple(hook_names) if hook_names is not None else None
        self._hooks_dir = Path(hooks_dir) if hooks_dir is not None else None

    def hook_names(self) -> List[str]:
        if self._hook_names is not None:
            return list(self._hook_names)
        names = self.config.get('hooks', {}).get('names')
        if isinstance(names, str):
            names = [n.strip() for n in names.split(',') if n.strip()]
        return list(names) if names else list(DEFAULT_HOOKS)

    def resolve_hooks_dir(self) -> Path:
        """Locate the canonical hook scripts directory."""
        hooks_dir = self._hooks_dir
        if hooks_dir is None:
            configured = self.config.get('hooks', {}).get('directory') or ''
            if not configured:
                raise FilesystemError("fail to get hook path: hooks.directory is not configured")
            hooks_dir = Path(os.path.expanduser(configured))
        if not hooks_dir.is_dir():
            raise FilesystemError(
                f"fail to get hook path: {hooks_dir} is not a directory", str(hooks_dir)
            )
        return hooks_dir.absolute()

    def install(self, repo: Repository) -> List[Path]:
        """
        Symlink every registered hook into repo's hooks directory.

        Returns:
            Links created by this call

        Raises:
            HookInstallError: naming the first hook that could not be linked;
                links created earlier in the call are removed first
        """
        hooks_dir = self.resolve_hooks_dir()
        created: List[Path] = []

        for name in self.hook_names():
            source = hooks_dir / name
            target = repo.hooks_dir / name

            if target.is_symlink() and os.readlink(target) == str(source):
                logger.debug(f"Hook {name} already linked in {repo.hooks_dir}")
                continue

            try:
                os.symlink(source, target)
            except OSError as e:
                self._undo(created)
                raise HookInstallError(
                    f"fail to set link for hook {name}: {e}", name, str(target)
                ) from e
            created.append(target)
            logger.debug(f"Linked hook {target} -> {source}")

        return created

    def _undo(self, created: List[Path]) -> None:
        for link in reversed(created):
            try:
                link.unlink()
            except OSError as e:
                logger.warning(f"Could not remove hook link {link}: {e}")
