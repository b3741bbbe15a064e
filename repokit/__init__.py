"""
repokit - Bootstrap git directories for multi-repository checkouts.

repokit creates the git directory of each project checkout. Checkouts of
the same upstream can share a single object store: the project git dir
holds relative symlinks into a central objects repository, while its
config (remotes, core settings) stays its own.

Quick Start:
    from repokit import Project, ProjectService

    project = Project(
        name="foo",
        git_dir="~/work/foo/.git",
        remote_url="https://example.com/foo",
        objects_git_dir="~/.repokit/project-objects/foo.git",
    )
    ProjectService().git_init(project)

Lower-level pieces:
    RepositoryBootstrapper - init, init_missing, init_by_link
    ObjectStoreLinker - symlinks the attachable items
    HookInstaller - symlinks central hook scripts
    GitClient / GitConfig - git subprocess and config file access
"""

__version__ = "0.1.0"

from .domain import Repository, Project

from .services import (
    RepositoryBootstrapper,
    ObjectStoreLinker,
    HookInstaller,
    ProjectService,
    normalize_remote_url,
)

from .infra import GitClient, GitConfig

from .exit_codes import (
    BootstrapError,
    ProcessExecutionError,
    FilesystemError,
    RepositoryNotFoundError,
    HookInstallError,
    MissingSourceRepositoryError,
    ConfigIOError,
)

from .config import load_config, save_config

__all__ = [
    "__version__",
    # Domain objects
    "Repository",
    "Project",
    # Services
    "RepositoryBootstrapper",
    "ObjectStoreLinker",
    "HookInstaller",
    "ProjectService",
    "normalize_remote_url",
    # Infrastructure
    "GitClient",
    "GitConfig",
    # Errors
    "BootstrapError",
    "ProcessExecutionError",
    "FilesystemError",
    "RepositoryNotFoundError",
    "HookInstallError",
    "MissingSourceRepositoryError",
    "ConfigIOError",
    # Configuration
    "load_config",
    "save_config",
]
