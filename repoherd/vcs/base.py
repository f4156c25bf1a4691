"""Base VCS backend interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from repoherd.exceptions import LocalDirectoryError, UnsupportedVCSError
from repoherd.vcs.runner import CommandRunner

if TYPE_CHECKING:
    from repoherd.models.options import CloneOptions


class VCSKind(str, Enum):
    """Supported version control systems."""

    GIT = "git"
    SUBVERSION = "svn"
    GIT_SUBVERSION = "git-svn"
    MERCURIAL = "hg"
    DARCS = "darcs"
    BAZAAR = "bzr"
    FOSSIL = "fossil"
    CVS = "cvs"


class VCSBackend(ABC):
    """Abstract base class for VCS backends.

    Backends hold no per-operation state; everything comes in through
    ``CloneOptions``.
    """

    kind: VCSKind

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner = runner or CommandRunner()

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    async def clone(self, options: CloneOptions) -> None:
        """Create a new working copy of ``options.url`` at ``options.dir``."""
        ...

    @abstractmethod
    async def update(self, options: CloneOptions) -> None:
        """Bring the working copy at ``options.dir`` up to date."""
        ...

    def _require_url(self, options: CloneOptions) -> str:
        if not options.url:
            raise ValueError(f"{self.name}: clone requires a URL")
        return options.url

    def _reject_branch(self, options: CloneOptions) -> None:
        if options.branch:
            raise UnsupportedVCSError(
                self.name, "clone", f"cloning a specific branch ({options.branch!r}) is not supported"
            )

    def _prepare_parent(self, options: CloneOptions) -> None:
        self._make_dir(options.dir.parent)

    def _make_dir(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LocalDirectoryError(self.name, "clone", path, e.strerror or str(e)) from e

    async def _run(
        self,
        cmd: Sequence[str],
        options: CloneOptions,
        cwd: Path | None = None,
    ) -> None:
        await self.runner.run(cmd, cwd=cwd, silent=options.silent, backend=self.name)
