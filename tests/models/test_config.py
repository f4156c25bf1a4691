"""Tests for configuration loading."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml

from repoherd.models.config import HerdConfig
from repoherd.vcs.base import VCSKind


class TestHerdConfig:
    """Tests for the configuration model."""

    def test_defaults(self) -> None:
        config = HerdConfig()

        assert config.roots == [Path("~/repoherd").expanduser()]
        assert config.default_host == "github.com"
        assert config.default_user is None
        assert config.vcs_overrides == {}

    def test_roots_expanded_and_absolute(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(temp_dir)

        config = HerdConfig(roots=["relative", "~/src"])

        assert config.roots[0] == temp_dir / "relative"
        assert config.roots[1] == Path("~/src").expanduser()
        assert all(root.is_absolute() for root in config.roots)

    def test_single_root_string(self, temp_dir: Path) -> None:
        config = HerdConfig(roots=str(temp_dir))

        assert config.roots == [temp_dir]
        assert config.primary_root == temp_dir

    def test_invalid_override_rejected(self) -> None:
        with pytest.raises(ValueError):
            HerdConfig(vcs_overrides={"https://example.com/": "perforce"})


@pytest.mark.usefixtures("clean_env")
class TestHerdConfigLoad:
    """Tests for layered loading from YAML and environment."""

    def test_from_yaml(self, temp_dir: Path) -> None:
        path = temp_dir / "config.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "roots": [str(temp_dir / "a"), str(temp_dir / "b")],
                    "default_host": "gitlab.com",
                    "default_user": "someone",
                    "vcs_overrides": {"https://svn.example.org/": "svn"},
                }
            )
        )

        config = HerdConfig.from_yaml(path)

        assert config.roots == [temp_dir / "a", temp_dir / "b"]
        assert config.default_host == "gitlab.com"
        assert config.default_user == "someone"
        assert config.vcs_overrides == {"https://svn.example.org/": VCSKind.SUBVERSION}

    def test_empty_yaml(self, temp_dir: Path) -> None:
        path = temp_dir / "config.yaml"
        path.write_text("")

        assert HerdConfig.from_yaml(path).default_host == "github.com"

    def test_missing_file_uses_defaults(self) -> None:
        config = HerdConfig.load()

        assert config.default_host == "github.com"
        assert config.default_user is None

    def test_environment_wins_over_file(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = temp_dir / "config.yaml"
        path.write_text(yaml.safe_dump({"roots": [str(temp_dir / "file")], "default_user": "file"}))
        monkeypatch.setenv(
            "REPOHERD_ROOT", os.pathsep.join([str(temp_dir / "one"), str(temp_dir / "two")])
        )
        monkeypatch.setenv("REPOHERD_HOST", "example.com")
        monkeypatch.setenv("GITHUB_USER", "env-user")

        config = HerdConfig.load(path)

        assert config.roots == [temp_dir / "one", temp_dir / "two"]
        assert config.default_host == "example.com"
        assert config.default_user == "env-user"

    def test_config_path_from_environment(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = temp_dir / "custom.yaml"
        path.write_text(yaml.safe_dump({"default_host": "git.example.org"}))
        monkeypatch.setenv("REPOHERD_CONFIG", str(path))

        assert HerdConfig.load().default_host == "git.example.org"

    def test_repoherd_user_preferred(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_USER", "github-user")
        monkeypatch.setenv("REPOHERD_USER", "herd-user")

        assert HerdConfig.load().default_user == "herd-user"
