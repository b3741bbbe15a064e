"""
Repository and Project domain objects for repokit.

A Repository is a git directory (usually bare, or the .git directory of a
checkout). A Project owns exactly one Repository and may reference a
separate objects Repository whose object store it shares.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass
class Repository:
    """A git directory managed by repokit."""
    git_dir: Path
    name: str = ""
    is_bare: bool = False
    remote_name: str = "origin"

    def __post_init__(self):
        self.git_dir = Path(self.git_dir).expanduser()
        if not self.name:
            self.name = self.git_dir.name

    @property
    def config_file(self) -> Path:
        return self.git_dir / "config"

    @property
    def hooks_dir(self) -> Path:
        return self.git_dir / "hooks"

    @property
    def objects_dir(self) -> Path:
        return self.git_dir / "objects"

    @property
    def alternates_file(self) -> Path:
        return self.objects_dir / "info" / "alternates"

    def exists(self) -> bool:
        return self.git_dir.exists()

    def is_git_dir(self) -> bool:
        """True when the directory looks like an initialized git directory."""
        return (
            (self.git_dir / "HEAD").is_file()
            and self.objects_dir.is_dir()
            and (self.git_dir / "refs").is_dir()
        )

    def same_dir(self, other: "Repository") -> bool:
        """Compare git directories after resolving symlinks and '..'."""
        return self.git_dir.resolve() == other.git_dir.resolve()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'git_dir': str(self.git_dir),
            'is_bare': self.is_bare,
            'remote_name': self.remote_name,
        }


@dataclass
class Project:
    """
    A logical checkout.

    ``objects_git_dir`` points at the shared objects repository. Leaving it
    unset, or pointing it at ``git_dir`` itself, disables sharing.
    """
    name: str
    git_dir: Path
    remote_name: str = "origin"
    remote_url: str = ""
    objects_git_dir: Optional[Path] = None
    reference_dir: str = ""
    is_bare: bool = False

    def __post_init__(self):
        self.git_dir = Path(self.git_dir).expanduser()
        if self.objects_git_dir:
            self.objects_git_dir = Path(self.objects_git_dir).expanduser()
        else:
            self.objects_git_dir = None

    @property
    def repository(self) -> Repository:
        return Repository(
            git_dir=self.git_dir,
            name=self.name,
            is_bare=self.is_bare,
            remote_name=self.remote_name,
        )

    @property
    def objects_repository(self) -> Optional[Repository]:
        if self.objects_git_dir is None:
            return None
        # Objects repositories only hold history, never a worktree
        return Repository(git_dir=self.objects_git_dir, name=self.name, is_bare=True)

    @property
    def shares_objects(self) -> bool:
        objects_repo = self.objects_repository
        if objects_repo is None:
            return False
        return not objects_repo.same_dir(self.repository)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'git_dir': str(self.git_dir),
            'remote_name': self.remote_name,
            'remote_url': self.remote_url,
            'objects_git_dir': str(self.objects_git_dir) if self.objects_git_dir else None,
            'reference_dir': self.reference_dir,
            'is_bare': self.is_bare,
        }
