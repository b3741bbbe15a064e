"""
Repository bootstrap service for repokit.

Creates git directories with ``git init --bare``, completes partially
created layouts, and builds git directories that share an objects
repository through symlinks.

Repository lifecycle:
    unbootstrapped -> physically initialized (git init)
                   -> structurally complete (init_missing)
                   -> linked (init_by_link, optional)
                   -> config ready (core/remote keys written)
"""

import logging
import os
from typing import Callable, Dict, List, Optional

from ..domain import Repository
from ..exit_codes import (
    FilesystemError, MissingSourceRepositoryError, RepositoryNotFoundError,
)
from ..infra import GitClient, GitConfig
from .link_service import AttachResult, ObjectStoreLinker

logger = logging.getLogger(__name__)

REQUIRED_DIRS = ("hooks", "branches", "info", "refs")

REQUIRED_FILES = {
    "description": "Repository: {name}, path: {git_dir}\n",
    "config": "[core]\n\trepositoryformatversion = 0\n",
    "HEAD": "ref: refs/heads/master\n",
}


def normalize_remote_url(url: str) -> str:
    """Make sure a remote URL ends with '.git'."""
    if not url.endswith(".git"):
        url += ".git"
    return url


def render_required_files(repo: Repository) -> Dict[str, str]:
    return {
        name: template.format(name=repo.name, git_dir=repo.git_dir)
        for name, template in REQUIRED_FILES.items()
    }


class RepositoryBootstrapper:
    """
    Orchestrates creation and completion of git directories.

    Example:
        bootstrapper = RepositoryBootstrapper()
        objects = Repository("/srv/objects/foo.git", is_bare=True)
        project = Repository("/work/foo/.git", name="foo")
        bootstrapper.init(objects)
        bootstrapper.init_by_link(project, "origin", "https://example.com/foo", objects)
    """

    def __init__(
        self,
        git: Optional[GitClient] = None,
        linker: Optional[ObjectStoreLinker] = None,
        config_loader: Callable[..., GitConfig] = GitConfig.load,
    ):
        self.git = git or GitClient()
        self.linker = linker or ObjectStoreLinker()
        self.config_loader = config_loader

    def init(
        self,
        repo: Repository,
        remote_name: str = "",
        remote_url: str = "",
        reference_dir: str = "",
    ) -> GitConfig:
        """
        Run git init on repo and write its core/remote configuration.

        Raises:
            ProcessExecutionError: git failed
            ConfigIOError: config could not be read or written
            FilesystemError: alternates could not be written
        """
        logger.debug(f"Initializing {repo.git_dir}")
        self.git.init_bare(repo.git_dir)

        cfg = self.config_loader(repo.config_file)
        self._apply_core_settings(repo, cfg)

        if remote_name and remote_url:
            remote_url = normalize_remote_url(remote_url)
            key = f"remote.{remote_name}.url"
            if cfg.get(key) != remote_url:
                cfg.set(key, remote_url)
                logger.debug(f"Set {key} = {remote_url}")

        cfg.save()

        if reference_dir:
            self._set_alternates(repo, reference_dir)

        return cfg

    def init_missing(self, repo: Repository) -> List[str]:
        """
        Create any required directory or file missing from repo.

        Existing entries are never touched.

        Returns:
            Names of the entries created

        Raises:
            RepositoryNotFoundError: repo.git_dir does not exist
        """
        if not repo.exists():
            raise RepositoryNotFoundError(
                f"repository not found: {repo.git_dir}", str(repo.git_dir)
            )

        created = []
        for name in REQUIRED_DIRS:
            path = repo.git_dir / name
            if os.path.lexists(path):
                continue
            try:
                path.mkdir(parents=True, mode=0o755)
            except OSError as e:
                raise FilesystemError(f"fail to create {path}: {e}", str(path)) from e
            created.append(name)

        for name, content in render_required_files(repo).items():
            path = repo.git_dir / name
            if os.path.lexists(path):
                continue
            try:
                path.write_text(content)
            except OSError as e:
                raise FilesystemError(f"fail to create {path}: {e}", str(path)) from e
            created.append(name)

        if created:
            logger.debug(f"Completed {repo.git_dir}: created {', '.join(created)}")

        if not repo.is_bare:
            cfg = self.config_loader(repo.config_file)
            self._apply_core_settings(repo, cfg)
            cfg.save()

        return created

    def init_by_link(
        self,
        repo: Repository,
        remote_name: str,
        remote_url: str,
        source_repo: Repository,
    ) -> AttachResult:
        """
        Create repo as a git dir sharing source_repo's objects, hooks and info.

        Raises:
            MissingSourceRepositoryError: source_repo does not exist
            FilesystemError: a directory or link could not be created
            ProcessExecutionError, ConfigIOError: from init; links made by
                this call are removed first
        """
        if not source_repo.exists():
            raise MissingSourceRepositoryError(str(source_repo.git_dir))
        self.init_missing(source_repo)

        if repo.same_dir(source_repo):
            logger.debug(f"{repo.git_dir} is its own objects repository, nothing to link")
            return AttachResult(
                source_dir=source_repo.git_dir,
                target_dir=repo.git_dir,
                self_link=True,
            )

        result = self.linker.attach(source_repo.git_dir, repo.git_dir)
        logger.info(
            f"Attached {repo.git_dir} to {source_repo.git_dir} "
            f"({', '.join(result.linked_items) or 'nothing linked'})"
        )

        try:
            self.init(repo, remote_name, remote_url)
        except Exception:
            self.linker.rollback(result)
            raise

        return result

    def _apply_core_settings(self, repo: Repository, cfg: GitConfig) -> None:
        if repo.is_bare:
            return
        cfg.unset("core.bare")
        cfg.set("core.logAllRefUpdates", "true")

    def _set_alternates(self, repo: Repository, reference_dir: str) -> None:
        """Record reference_dir's object store in objects/info/alternates."""
        objects = os.path.join(os.path.abspath(os.path.expanduser(reference_dir)), "objects")
        path = repo.alternates_file
        try:
            if path.exists() and path.read_text().strip() == objects:
                return
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(objects + "\n")
        except OSError as e:
            raise FilesystemError(f"fail to write alternates {path}: {e}", str(path)) from e
        logger.debug(f"Set alternates of {repo.git_dir} to {objects}")
