"""
Tests for the git config file store.
"""

import os
import stat

import pytest

from repokit.exit_codes import ConfigIOError
from repokit.infra.git_config import GitConfig, split_key


SAMPLE = """\
[core]
\trepositoryformatversion = 0
\tfilemode = true
\tbare = true
[remote "origin"]
\turl = https://example.com/repo.git
\tfetch = +refs/heads/*:refs/remotes/origin/*
# a comment
[branch "master"]
\tremote = origin ; trailing comment
"""


class TestSplitKey:
    """Tests for dotted key splitting."""

    def test_two_part_key(self):
        assert split_key("core.bare") == ("core", None, "bare")

    def test_subsection_keeps_case(self):
        assert split_key("Remote.Origin.URL") == ("remote", "Origin", "url")

    def test_dotted_subsection(self):
        assert split_key("url.https://x.org/.insteadOf") == ("url", "https://x.org/", "insteadof")

    def test_invalid_key(self):
        with pytest.raises(ValueError):
            split_key("core")


class TestGitConfigRead:
    """Tests for loading and querying config files."""

    @pytest.fixture
    def config_file(self, tmp_path):
        path = tmp_path / "config"
        path.write_text(SAMPLE)
        return path

    def test_missing_file_is_empty(self, tmp_path):
        cfg = GitConfig.load(tmp_path / "nope")
        assert cfg.get("core.bare") is None
        assert cfg.to_text() == ""

    def test_get_values(self, config_file):
        cfg = GitConfig.load(config_file)
        assert cfg.get("core.repositoryformatversion") == "0"
        assert cfg.get("remote.origin.url") == "https://example.com/repo.git"
        assert cfg.get("branch.master.remote") == "origin"

    def test_names_are_case_insensitive(self, config_file):
        cfg = GitConfig.load(config_file)
        assert cfg.get("CORE.Bare") == "true"

    def test_subsection_is_case_sensitive(self, config_file):
        cfg = GitConfig.load(config_file)
        assert cfg.get("remote.ORIGIN.url") is None

    def test_get_bool(self, config_file):
        cfg = GitConfig.load(config_file)
        assert cfg.get_bool("core.bare") is True
        assert cfg.get_bool("core.logAllRefUpdates") is False
        assert cfg.get_bool("core.logAllRefUpdates", default=True) is True

    def test_bare_variable_means_true(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("[core]\n\tbare\n")
        cfg = GitConfig.load(path)
        assert cfg.get("core.bare") == "true"
        assert cfg.get_bool("core.bare") is True

    def test_quoted_value_with_escapes(self, tmp_path):
        path = tmp_path / "config"
        path.write_text('[alias]\n\tsay = "echo \\"hi\\" # not a comment"\n')
        cfg = GitConfig.load(path)
        assert cfg.get("alias.say") == 'echo "hi" # not a comment'

    def test_legacy_subsection_syntax(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("[remote.Origin]\n\turl = x\n")
        cfg = GitConfig.load(path)
        assert cfg.get("remote.origin.url") == "x"

    def test_bad_file_raises_config_error(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("[core\n\tbare = true\n")
        with pytest.raises(ConfigIOError):
            GitConfig.load(path)

    def test_key_before_section_raises(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("bare = true\n")
        with pytest.raises(ConfigIOError):
            GitConfig.load(path)

    def test_bad_boolean_raises(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("[core]\n\tbare = maybe\n")
        with pytest.raises(ConfigIOError):
            GitConfig.load(path).get_bool("core.bare")


class TestGitConfigWrite:
    """Tests for mutating and saving config files."""

    def test_set_new_section_and_save(self, tmp_path):
        path = tmp_path / "config"
        cfg = GitConfig.load(path)
        cfg.set("remote.origin.url", "https://example.com/repo.git")
        assert cfg.save() is True

        assert path.read_text() == '[remote "origin"]\n\turl = https://example.com/repo.git\n'

    def test_set_replaces_existing_value(self, tmp_path):
        path = tmp_path / "config"
        path.write_text(SAMPLE)
        cfg = GitConfig.load(path)
        cfg.set("remote.origin.url", "https://example.com/other.git")
        cfg.save()

        reloaded = GitConfig.load(path)
        assert reloaded.get("remote.origin.url") == "https://example.com/other.git"
        assert reloaded.get("remote.origin.fetch") == "+refs/heads/*:refs/remotes/origin/*"

    def test_set_same_value_is_not_dirty(self, tmp_path):
        path = tmp_path / "config"
        path.write_text(SAMPLE)
        cfg = GitConfig.load(path)
        cfg.set("core.bare", "true")
        assert cfg.dirty is False
        assert cfg.save() is False

    def test_unset(self, tmp_path):
        path = tmp_path / "config"
        path.write_text(SAMPLE)
        cfg = GitConfig.load(path)
        assert cfg.unset("core.bare") is True
        assert cfg.unset("core.bare") is False
        cfg.save()

        reloaded = GitConfig.load(path)
        assert reloaded.has("core.bare") is False
        assert reloaded.get("core.filemode") == "true"

    def test_values_round_trip_through_quoting(self, tmp_path):
        path = tmp_path / "config"
        cfg = GitConfig.load(path)
        cfg.set("user.name", "  padded ; name  ")
        cfg.set("alias.q", 'say "x"\\y')
        cfg.save()

        reloaded = GitConfig.load(path)
        assert reloaded.get("user.name") == "  padded ; name  "
        assert reloaded.get("alias.q") == 'say "x"\\y'

    def test_save_keeps_file_mode(self, tmp_path):
        path = tmp_path / "config"
        path.write_text(SAMPLE)
        os.chmod(path, 0o640)
        cfg = GitConfig.load(path)
        cfg.set("core.bare", "false")
        cfg.save()

        assert stat.S_IMODE(path.stat().st_mode) == 0o640
        assert not [p for p in tmp_path.iterdir() if p.name.endswith(".tmp")]

    def test_save_into_missing_directory_raises(self, tmp_path):
        cfg = GitConfig(tmp_path / "missing" / "config")
        cfg.set("core.bare", "true")
        with pytest.raises(ConfigIOError):
            cfg.save()
