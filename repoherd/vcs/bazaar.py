"""Bazaar backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from repoherd.vcs.base import VCSBackend, VCSKind

if TYPE_CHECKING:
    from repoherd.models.options import CloneOptions

logger = logging.getLogger(__name__)


class BazaarBackend(VCSBackend):
    """Bazaar branch and overwriting pull."""

    kind = VCSKind.BAZAAR

    async def clone(self, options: CloneOptions) -> None:
        url = self._require_url(options)
        self._reject_branch(options)
        if options.shallow:
            logger.debug("Bazaar ignores shallow clones")

        self._prepare_parent(options)
        await self._run(["bzr", "branch", url, str(options.dir)], options)

    async def update(self, options: CloneOptions) -> None:
        # Local history is replaced by upstream
        await self._run(["bzr", "pull", "--overwrite"], options, cwd=options.dir)
