"""Tests for the get orchestrator."""

from __future__ import annotations

from pathlib import Path

import pytest

from repoherd.exceptions import (
    ExternalCommandFailedError,
    LocalDirectoryError,
    UnresolvedReferenceError,
)
from repoherd.getter import Getter
from repoherd.models.config import HerdConfig
from repoherd.models.options import GetAction, GetOptions
from repoherd.vcs import BackendRegistry, VCSKind
from tests.fakes import FakeBackend, FakeRunner

REFERENCE = "motemen/ghq-test-repo"
URL = "https://github.com/motemen/ghq-test-repo"


@pytest.fixture
def backends(fake_backend) -> dict[VCSKind, FakeBackend]:
    return {kind: fake_backend(kind) for kind in VCSKind}


@pytest.fixture
def getter(herd_config: HerdConfig, backends: dict[VCSKind, FakeBackend]) -> Getter:
    return Getter(herd_config, BackendRegistry(overrides=backends))


@pytest.fixture
def repo_dir(root_dir: Path) -> Path:
    return root_dir / "github.com" / "motemen" / "ghq-test-repo"


@pytest.mark.mock
class TestGet:
    """Scenarios for a single reference."""

    @pytest.mark.asyncio
    async def test_simple(self, getter: Getter, backends, repo_dir: Path) -> None:
        result = await getter.get(REFERENCE)

        git = backends[VCSKind.GIT]
        assert len(git.cloned) == 1
        options = git.cloned[0]
        assert options.url == URL
        assert options.dir == repo_dir
        assert options.shallow is False
        assert options.branch == ""
        assert result.action == GetAction.CLONED
        assert result.vcs == VCSKind.GIT
        assert result.local_dir == repo_dir

    @pytest.mark.asyncio
    async def test_private(self, getter: Getter, backends, repo_dir: Path) -> None:
        await getter.get(REFERENCE, GetOptions(private=True))

        options = backends[VCSKind.GIT].cloned[0]
        assert options.url == "ssh://git@github.com/motemen/ghq-test-repo"
        assert options.dir == repo_dir
        assert options.shallow is False

    @pytest.mark.asyncio
    async def test_already_cloned_with_update(self, getter: Getter, backends, repo_dir: Path) -> None:
        (repo_dir / ".git").mkdir(parents=True)

        result = await getter.get(REFERENCE, GetOptions(update=True, silent=True))

        git = backends[VCSKind.GIT]
        assert git.cloned == []
        assert len(git.updated) == 1
        assert git.updated[0].dir == repo_dir
        assert git.updated[0].url is None
        assert git.updated[0].silent is True
        assert result.action == GetAction.UPDATED

    @pytest.mark.asyncio
    async def test_already_cloned_without_update(self, getter: Getter, backends, repo_dir: Path) -> None:
        (repo_dir / ".git").mkdir(parents=True)

        result = await getter.get(REFERENCE)

        assert backends[VCSKind.GIT].cloned == []
        assert backends[VCSKind.GIT].updated == []
        assert result.action == GetAction.SKIPPED

    @pytest.mark.asyncio
    async def test_update_uses_identified_backend(self, getter: Getter, backends, repo_dir: Path) -> None:
        (repo_dir / ".hg").mkdir(parents=True)

        result = await getter.get(REFERENCE, GetOptions(update=True))

        assert len(backends[VCSKind.MERCURIAL].updated) == 1
        assert backends[VCSKind.GIT].updated == []
        assert result.vcs == VCSKind.MERCURIAL

    @pytest.mark.asyncio
    async def test_partial_directory_is_cloned_again(self, getter: Getter, backends, repo_dir: Path) -> None:
        repo_dir.mkdir(parents=True)
        (repo_dir / "leftover.txt").write_text("from an interrupted clone")

        result = await getter.get(REFERENCE, GetOptions(update=True))

        assert len(backends[VCSKind.GIT].cloned) == 1
        assert result.action == GetAction.CLONED

    @pytest.mark.asyncio
    async def test_shallow(self, getter: Getter, backends, repo_dir: Path) -> None:
        await getter.get(REFERENCE, GetOptions(shallow=True))

        options = backends[VCSKind.GIT].cloned[0]
        assert options.url == URL
        assert options.dir == repo_dir
        assert options.shallow is True

    @pytest.mark.asyncio
    async def test_specific_branch(self, getter: Getter, backends, repo_dir: Path) -> None:
        await getter.get(REFERENCE, GetOptions(shallow=True, branch="hello"))

        options = backends[VCSKind.GIT].cloned[0]
        assert options.url == URL
        assert options.dir == repo_dir
        assert options.branch == "hello"

    @pytest.mark.asyncio
    async def test_dot_slash(self, getter: Getter, backends, root_dir: Path) -> None:
        cwd = root_dir / "github.com" / "motemen"
        cwd.mkdir(parents=True)

        await getter.get("./ghq-test-repo", GetOptions(update=True), cwd=cwd)

        options = backends[VCSKind.GIT].cloned[0]
        assert options.url == URL
        assert options.dir == cwd / "ghq-test-repo"

    @pytest.mark.asyncio
    async def test_dot_dot_slash(self, getter: Getter, backends, root_dir: Path) -> None:
        cwd = root_dir / "github.com" / "motemen" / "ghq-test-repo"
        cwd.mkdir(parents=True)

        await getter.get("../ghq-another-test-repo", GetOptions(update=True), cwd=cwd)

        options = backends[VCSKind.GIT].cloned[0]
        assert options.url == "https://github.com/motemen/ghq-another-test-repo"
        assert options.dir == root_dir / "github.com" / "motemen" / "ghq-another-test-repo"

    @pytest.mark.asyncio
    async def test_backend_selected_from_url(self, getter: Getter, backends) -> None:
        result = await getter.get("svn://svn.example.com/project")

        assert len(backends[VCSKind.SUBVERSION].cloned) == 1
        assert backends[VCSKind.GIT].cloned == []
        assert result.vcs == VCSKind.SUBVERSION

    @pytest.mark.asyncio
    async def test_vcs_option_forces_backend(self, getter: Getter, backends) -> None:
        await getter.get(REFERENCE, GetOptions(vcs=VCSKind.MERCURIAL))

        assert backends[VCSKind.MERCURIAL].cloned[0].url == URL
        assert backends[VCSKind.GIT].cloned == []

    @pytest.mark.asyncio
    async def test_vcs_prefix_wins_over_option(self, getter: Getter, backends) -> None:
        await getter.get("git-svn+https://svn.example.com/p", GetOptions(vcs=VCSKind.MERCURIAL))

        options = backends[VCSKind.GIT_SUBVERSION].cloned[0]
        assert options.url == "https://svn.example.com/p"
        assert backends[VCSKind.MERCURIAL].cloned == []

    @pytest.mark.asyncio
    async def test_failure_is_not_retried_or_replaced(self, herd_config: HerdConfig, backends) -> None:
        error = ExternalCommandFailedError(["git", "clone"], 128, backend="git")
        backends[VCSKind.GIT] = FakeBackend(VCSKind.GIT, error=error)
        getter = Getter(herd_config, BackendRegistry(overrides=backends))

        with pytest.raises(ExternalCommandFailedError) as exc_info:
            await getter.get(REFERENCE)

        assert exc_info.value is error
        assert len(backends[VCSKind.GIT].cloned) == 1
        assert all(not b.cloned for k, b in backends.items() if k != VCSKind.GIT)

    @pytest.mark.asyncio
    async def test_unresolved_reference(self, getter: Getter, temp_dir: Path) -> None:
        with pytest.raises(UnresolvedReferenceError):
            await getter.get("./nowhere", cwd=temp_dir)


@pytest.mark.mock
class TestGetMany:
    """Scenarios for several references at once."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("parallel", [False, True])
    async def test_results_in_input_order(self, getter: Getter, backends, parallel: bool) -> None:
        results = await getter.get_many(
            ["motemen/one", "motemen/two", "./bad"], parallel=parallel, cwd=Path("/")
        )

        assert [r.reference for r in results[:2]] == ["motemen/one", "motemen/two"]
        assert all(r.action == GetAction.CLONED for r in results[:2])
        assert isinstance(results[2], UnresolvedReferenceError)
        assert len(backends[VCSKind.GIT].cloned) == 2

    @pytest.mark.asyncio
    async def test_same_directory_runs_once_then_skips(
        self, herd_config: HerdConfig, backends, repo_dir: Path
    ) -> None:
        class CloningBackend(FakeBackend):
            async def clone(self, options):
                await super().clone(options)
                (options.dir / ".git").mkdir(parents=True)

        backends[VCSKind.GIT] = CloningBackend(VCSKind.GIT)
        getter = Getter(herd_config, BackendRegistry(overrides=backends))

        results = await getter.get_many(
            [REFERENCE, f"https://github.com/{REFERENCE}"], parallel=True
        )

        assert [r.action for r in results] == [GetAction.CLONED, GetAction.SKIPPED]
        assert len(backends[VCSKind.GIT].cloned) == 1

    @pytest.mark.asyncio
    async def test_failures_returned_in_place(
        self, herd_config: HerdConfig, backends, fake_backend
    ) -> None:
        error = ExternalCommandFailedError(["hg", "clone"], 255, backend="hg")
        backends[VCSKind.MERCURIAL] = fake_backend(VCSKind.MERCURIAL, error=error)
        getter = Getter(herd_config, BackendRegistry(overrides=backends))

        results = await getter.get_many(["hg+https://example.com/a", "motemen/b"])

        assert results[0] is error
        assert results[1].action == GetAction.CLONED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("parallel", [False, True])
    async def test_unwritable_directory_does_not_stop_batch(
        self, herd_config: HerdConfig, root_dir: Path, parallel: bool
    ) -> None:
        (root_dir / "example.com").write_text("not a directory")
        runner = FakeRunner()
        getter = Getter(herd_config, BackendRegistry(runner=runner))

        results = await getter.get_many(
            ["motemen/a", "example.com/o/r", "motemen/b"], parallel=parallel
        )

        assert results[0].action == GetAction.CLONED
        assert isinstance(results[1], LocalDirectoryError)
        assert results[1].backend == "git"
        assert results[1].path == root_dir / "example.com" / "o"
        assert results[2].action == GetAction.CLONED
        cloned = sorted(call[0][2] for call in runner.calls)
        assert cloned == ["https://github.com/motemen/a", "https://github.com/motemen/b"]

    @pytest.mark.asyncio
    async def test_invalid_port_does_not_stop_batch(self, getter: Getter, backends) -> None:
        results = await getter.get_many(
            ["https://github.com:abc/o/r", "motemen/b"], GetOptions(private=True)
        )

        assert isinstance(results[0], UnresolvedReferenceError)
        assert results[1].url == "ssh://git@github.com/motemen/b"
        assert len(backends[VCSKind.GIT].cloned) == 1
