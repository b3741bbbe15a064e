"""
Service layer for repokit.

Contains the bootstrap logic that orchestrates domain objects and infrastructure:
- RepositoryBootstrapper: git init, layout completion, init by link
- ObjectStoreLinker: Symlinks shared object store entries
- HookInstaller: Symlinks central hook scripts
- ProjectService: Chooses between shared and direct initialization

Services are the primary API for commands to use.
"""

from .bootstrap_service import RepositoryBootstrapper, normalize_remote_url
from .link_service import ObjectStoreLinker, AttachResult, ATTACHABLE_ITEMS
from .hook_service import HookInstaller, DEFAULT_HOOKS
from .project_service import ProjectService, ProjectInitResult

__all__ = [
    'RepositoryBootstrapper',
    'normalize_remote_url',
    'ObjectStoreLinker',
    'AttachResult',
    'ATTACHABLE_ITEMS',
    'HookInstaller',
    'DEFAULT_HOOKS',
    'ProjectService',
    'ProjectInitResult',
]
