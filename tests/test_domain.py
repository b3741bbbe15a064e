"""
Tests for repokit domain objects.
"""

from pathlib import Path

from repokit.domain import Project, Repository


class TestRepository:
    """Tests for Repository."""

    def test_paths(self):
        repo = Repository("/srv/objs.git")
        assert repo.git_dir == Path("/srv/objs.git")
        assert repo.config_file == Path("/srv/objs.git/config")
        assert repo.hooks_dir == Path("/srv/objs.git/hooks")
        assert repo.alternates_file == Path("/srv/objs.git/objects/info/alternates")

    def test_default_name(self):
        assert Repository("/srv/objs.git").name == "objs.git"
        assert Repository("/srv/objs.git", name="objs").name == "objs"

    def test_is_git_dir(self, tmp_path):
        repo = Repository(tmp_path / "r.git")
        assert repo.exists() is False
        assert repo.is_git_dir() is False

        (repo.git_dir / "refs").mkdir(parents=True)
        (repo.git_dir / "HEAD").write_text("ref: refs/heads/master\n")
        assert repo.is_git_dir() is False

        (repo.git_dir / "objects").mkdir()
        assert repo.is_git_dir() is True

    def test_same_dir_resolves(self, tmp_path):
        (tmp_path / "a").mkdir()
        assert Repository(tmp_path / "a").same_dir(Repository(tmp_path / "b" / ".." / "a"))
        assert not Repository(tmp_path / "a").same_dir(Repository(tmp_path / "b"))

    def test_to_dict(self):
        data = Repository("/srv/objs.git", is_bare=True).to_dict()
        assert data == {
            'name': 'objs.git',
            'git_dir': '/srv/objs.git',
            'is_bare': True,
            'remote_name': 'origin',
        }


class TestProject:
    """Tests for Project."""

    def test_no_objects_repository(self):
        project = Project(name="p", git_dir="/w/p/.git")
        assert project.objects_repository is None
        assert project.shares_objects is False

    def test_empty_objects_dir_means_no_sharing(self):
        project = Project(name="p", git_dir="/w/p/.git", objects_git_dir="")
        assert project.objects_git_dir is None

    def test_objects_repository_is_bare(self):
        project = Project(name="p", git_dir="/w/p/.git", objects_git_dir="/o/p.git")
        objects = project.objects_repository
        assert objects.git_dir == Path("/o/p.git")
        assert objects.is_bare is True
        assert project.shares_objects is True

    def test_same_path_does_not_share(self):
        project = Project(name="p", git_dir="/w/p/.git", objects_git_dir="/w/p/.git")
        assert project.shares_objects is False

    def test_repository_carries_project_settings(self):
        project = Project(name="p", git_dir="/w/p/.git", remote_name="upstream", is_bare=True)
        repo = project.repository
        assert repo.name == "p"
        assert repo.remote_name == "upstream"
        assert repo.is_bare is True
