"""
Shared fixtures for repokit tests.
"""

import os
from pathlib import Path

import pytest

from repokit.infra import GitClient, GitResult


class FakeGitClient(GitClient):
    """
    Stands in for git. ``init --bare`` lays out a skeleton the way git does,
    including forcing ``core.bare = true`` into the config.
    """

    def __init__(self, returncode: int = 0):
        super().__init__()
        self.returncode = returncode
        self.calls = []

    def run(self, args, cwd=None):
        args = [str(a) for a in args]
        self.calls.append(args)
        if self.returncode != 0:
            return GitResult(returncode=self.returncode, stderr="fatal: boom", args=["git"] + args)
        if args[:3] == ["init", "-q", "--bare"]:
            self._init(Path(args[3]))
        return GitResult(returncode=0, args=["git"] + args)

    def _init(self, git_dir: Path) -> None:
        for sub in ("objects/info", "objects/pack", "refs/heads", "refs/tags", "hooks", "info"):
            os.makedirs(git_dir / sub, exist_ok=True)
        if not os.path.lexists(git_dir / "HEAD"):
            (git_dir / "HEAD").write_text("ref: refs/heads/master\n")
        if not os.path.lexists(git_dir / "description"):
            (git_dir / "description").write_text("Unnamed repository\n")
        config = git_dir / "config"
        text = config.read_text() if config.exists() else "[core]\n\trepositoryformatversion = 0\n"
        if "bare = true" not in text:
            text = text.replace("[core]\n", "[core]\n\tbare = true\n", 1)
        config.write_text(text)


@pytest.fixture
def fake_git():
    return FakeGitClient()


@pytest.fixture
def failing_git():
    return FakeGitClient(returncode=128)


@pytest.fixture
def central_hooks(tmp_path):
    """A central hooks directory with two scripts."""
    hooks = tmp_path / "central" / "hooks"
    hooks.mkdir(parents=True)
    for name in ("pre-commit", "commit-msg"):
        script = hooks / name
        script.write_text("#!/bin/sh\nexit 0\n")
        script.chmod(0o755)
    return hooks
