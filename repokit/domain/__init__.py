"""
Domain layer for repokit.

Contains plain domain objects with no side effects beyond path probes:
- Repository: One git directory on disk
- Project: A logical checkout owning a Repository, optionally sharing
  objects with a separate objects Repository
"""

from .repository import Repository, Project

__all__ = [
    'Repository',
    'Project',
]
