"""
Project service for repokit.

Decides how a project's git directory is created: directly with
``git init``, or attached to a shared objects repository.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config import load_config
from ..domain import Project
from ..infra import GitClient
from .bootstrap_service import RepositoryBootstrapper
from .hook_service import HookInstaller
from .link_service import AttachResult

logger = logging.getLogger(__name__)


@dataclass
class ProjectInitResult:
    """What git_init did for a project."""
    project: Project
    shared: bool = False
    objects_initialized: bool = False
    objects_completed: List[str] = field(default_factory=list)
    hooks_linked: List[str] = field(default_factory=list)
    attach: Optional[AttachResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'project': self.project.name,
            'git_dir': str(self.project.git_dir),
            'shared': self.shared,
            'objects_git_dir': str(self.project.objects_git_dir) if self.shared else None,
            'objects_initialized': self.objects_initialized,
            'objects_completed': self.objects_completed,
            'hooks_linked': self.hooks_linked,
            'attach': self.attach.to_dict() if self.attach else None,
        }


class ProjectService:
    """
    Service for initializing project git directories.

    Example:
        service = ProjectService()
        project = Project(
            name="foo",
            git_dir="/work/foo/.git",
            remote_url="https://example.com/foo",
            objects_git_dir="/srv/objects/foo.git",
        )
        service.git_init(project)
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        bootstrapper: Optional[RepositoryBootstrapper] = None,
        hook_installer: Optional[HookInstaller] = None,
    ):
        """
        Initialize ProjectService.

        Args:
            config: Configuration dict (loads default if None)
            bootstrapper: Repository bootstrapper (built from config if None)
            hook_installer: Hook installer (built from config if None)
        """
        self.config = config if config is not None else load_config()
        self.bootstrapper = bootstrapper or RepositoryBootstrapper(
            git=GitClient.from_config(self.config)
        )
        self.hook_installer = hook_installer or HookInstaller(config=self.config)

    def git_init(self, project: Project) -> ProjectInitResult:
        """
        Create the project's git directory.

        With a distinct objects repository configured, the objects repository
        is initialized and completed, gets the hooks, and the project git dir
        is linked into it. Otherwise git init runs on the project git dir.
        """
        result = ProjectInitResult(project=project)
        objects_repo = project.objects_repository

        if objects_repo is not None and project.shares_objects:
            result.shared = True
            if not objects_repo.is_git_dir():
                self.bootstrapper.init(objects_repo)
                result.objects_initialized = True
            result.objects_completed = self.bootstrapper.init_missing(objects_repo)
            result.hooks_linked = [
                link.name for link in self.hook_installer.install(objects_repo)
            ]
            result.attach = self.bootstrapper.init_by_link(
                project.repository,
                project.remote_name,
                project.remote_url,
                objects_repo,
            )
        else:
            self.bootstrapper.init(
                project.repository,
                project.remote_name,
                project.remote_url,
                project.reference_dir,
            )

        logger.info(f"Initialized git dir for {project.name} at {project.git_dir}")
        return result

    def is_repo_initialized(self, project: Project) -> bool:
        objects_repo = project.objects_repository
        if objects_repo is not None and not objects_repo.is_git_dir():
            return False
        return project.repository.is_git_dir()
