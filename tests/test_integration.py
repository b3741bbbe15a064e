"""
Integration tests running the real git binary.
"""

import os
import shutil
import subprocess

import pytest

from repokit.domain import Project, Repository
from repokit.infra import GitClient, GitConfig
from repokit.services import ProjectService, RepositoryBootstrapper

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(*args, cwd=None):
    return subprocess.run(
        ["git"] + list(args), cwd=cwd, capture_output=True, text=True, check=True,
    ).stdout.strip()


class TestRealGit:
    """Bootstrap against real git."""

    def test_init_non_bare(self, tmp_path):
        repo = Repository(tmp_path / "proj" / ".git", name="proj")

        RepositoryBootstrapper(git=GitClient()).init(repo, "origin", "https://example.com/proj")

        assert repo.is_git_dir()
        assert _git("--git-dir", str(repo.git_dir), "config", "remote.origin.url") == \
            "https://example.com/proj.git"
        assert _git("--git-dir", str(repo.git_dir), "config", "core.logAllRefUpdates") == "true"
        cfg = GitConfig.load(repo.config_file)
        assert cfg.has("core.bare") is False

    def test_init_twice_same_contents(self, tmp_path):
        repo = Repository(tmp_path / "proj" / ".git", name="proj")
        bootstrapper = RepositoryBootstrapper(git=GitClient())

        bootstrapper.init(repo, "origin", "https://example.com/proj")
        first = repo.config_file.read_text()
        bootstrapper.init(repo, "origin", "https://example.com/proj")

        assert repo.config_file.read_text() == first

    def test_shared_objects_are_visible(self, tmp_path, central_hooks):
        objects_dir = tmp_path / "objects" / "proj.git"
        service = ProjectService(config={'hooks': {'directory': str(central_hooks), 'names': ['commit-msg']}})
        first = Project(name="proj", git_dir=tmp_path / "a" / ".git", objects_git_dir=objects_dir)
        second = Project(name="proj", git_dir=tmp_path / "b" / ".git", objects_git_dir=objects_dir)
        service.git_init(first)
        service.git_init(second)

        blob = subprocess.run(
            ["git", "--git-dir", str(first.git_dir), "hash-object", "-w", "--stdin"],
            input="shared content\n", capture_output=True, text=True, check=True,
        ).stdout.strip()

        assert _git("--git-dir", str(second.git_dir), "cat-file", "-p", blob) == "shared content"
        assert os.path.islink(second.git_dir / "objects")
        assert service.is_repo_initialized(second)
