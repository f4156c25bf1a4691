"""Darcs backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

from repoherd.vcs.base import VCSBackend, VCSKind

if TYPE_CHECKING:
    from repoherd.models.options import CloneOptions


class DarcsBackend(VCSBackend):
    """Darcs get and pull. Shallow maps to a lazy fetch; branches are refused."""

    kind = VCSKind.DARCS

    async def clone(self, options: CloneOptions) -> None:
        url = self._require_url(options)
        self._reject_branch(options)

        cmd = ["darcs", "get"]
        if options.shallow:
            cmd.append("--lazy")
        cmd.extend([url, str(options.dir)])

        self._prepare_parent(options)
        await self._run(cmd, options)

    async def update(self, options: CloneOptions) -> None:
        await self._run(["darcs", "pull"], options, cwd=options.dir)
