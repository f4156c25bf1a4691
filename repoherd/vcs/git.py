"""Git and git-svn backends."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from repoherd.vcs.base import VCSBackend, VCSKind
from repoherd.vcs.subversion import branch_url

if TYPE_CHECKING:
    from repoherd.models.options import CloneOptions

logger = logging.getLogger(__name__)


class GitBackend(VCSBackend):
    """Plain git.

    A requested branch gives a single-branch clone; shallow only applies
    to default-branch clones. Updates are fast-forward only.
    """

    kind = VCSKind.GIT

    async def clone(self, options: CloneOptions) -> None:
        url = self._require_url(options)
        cmd = ["git", "clone"]
        if options.branch:
            cmd.extend(["--branch", options.branch, "--single-branch"])
        elif options.shallow:
            cmd.extend(["--depth", "1"])
        cmd.extend([url, str(options.dir)])

        self._prepare_parent(options)
        logger.debug(f"Git clone command: {cmd}")
        await self._run(cmd, options)

    async def update(self, options: CloneOptions) -> None:
        await self._run(["git", "pull", "--ff-only"], options, cwd=options.dir)


class GitSubversionBackend(VCSBackend):
    """git-svn bridge.

    Always fetches full history, so shallow is ignored. Updates rebase
    against upstream.
    """

    kind = VCSKind.GIT_SUBVERSION

    async def clone(self, options: CloneOptions) -> None:
        url = self._require_url(options)
        if options.branch:
            url = branch_url(url, options.branch)
        if options.shallow:
            logger.debug("git-svn ignores shallow clones")

        self._prepare_parent(options)
        await self._run(["git", "svn", "clone", url, str(options.dir)], options)

    async def update(self, options: CloneOptions) -> None:
        await self._run(["git", "svn", "rebase"], options, cwd=options.dir)
