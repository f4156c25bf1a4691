"""Subversion backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

from repoherd.vcs.base import VCSBackend, VCSKind

if TYPE_CHECKING:
    from repoherd.models.options import CloneOptions


def branch_url(url: str, branch: str) -> str:
    """Conventional Subversion branch location under a repository URL."""
    return f"{url.rstrip('/')}/branches/{branch}"


class SubversionBackend(VCSBackend):
    """Subversion checkout and update."""

    kind = VCSKind.SUBVERSION

    async def clone(self, options: CloneOptions) -> None:
        url = self._require_url(options)
        # Branch rewrite happens before the depth flag is considered
        if options.branch:
            url = branch_url(url, options.branch)

        cmd = ["svn", "checkout"]
        if options.shallow:
            cmd.extend(["--depth", "1"])
        cmd.extend([url, str(options.dir)])

        self._prepare_parent(options)
        await self._run(cmd, options)

    async def update(self, options: CloneOptions) -> None:
        await self._run(["svn", "update"], options, cwd=options.dir)
