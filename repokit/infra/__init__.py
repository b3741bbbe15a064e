"""
Infrastructure layer for repokit.

Contains abstractions for external systems:
- GitClient: git subprocess execution
- GitConfig: git config file persistence

These provide clean interfaces that can be faked for testing.
"""

from .git_client import GitClient, GitResult
from .git_config import GitConfig

__all__ = [
    'GitClient',
    'GitResult',
    'GitConfig',
]
