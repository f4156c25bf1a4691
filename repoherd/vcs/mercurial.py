"""Mercurial backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from repoherd.vcs.base import VCSBackend, VCSKind

if TYPE_CHECKING:
    from repoherd.models.options import CloneOptions

logger = logging.getLogger(__name__)


class MercurialBackend(VCSBackend):
    """Mercurial clone and pull-with-update."""

    kind = VCSKind.MERCURIAL

    async def clone(self, options: CloneOptions) -> None:
        url = self._require_url(options)
        cmd = ["hg", "clone"]
        if options.branch:
            cmd.extend(["--branch", options.branch])
        if options.shallow:
            logger.debug("Mercurial has no shallow clone, fetching full history")
        cmd.extend([url, str(options.dir)])

        self._prepare_parent(options)
        await self._run(cmd, options)

    async def update(self, options: CloneOptions) -> None:
        await self._run(["hg", "pull", "--update"], options, cwd=options.dir)
