"""Fossil backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from repoherd.exceptions import ExternalCommandFailedError
from repoherd.vcs.base import VCSBackend, VCSKind

if TYPE_CHECKING:
    from repoherd.models.options import CloneOptions

logger = logging.getLogger(__name__)

FOSSIL_REPO_NAME = ".fossil"


class FossilBackend(VCSBackend):
    """Fossil clone into a repository file, then open it as a checkout.

    All commands run inside the working copy directory. The repository
    file doubles as a checkout marker, so it is removed again when the
    open step fails.
    """

    kind = VCSKind.FOSSIL

    async def clone(self, options: CloneOptions) -> None:
        url = self._require_url(options)
        self._reject_branch(options)

        self._make_dir(options.dir)
        await self._run(["fossil", "clone", url, FOSSIL_REPO_NAME], options, cwd=options.dir)
        try:
            await self._run(["fossil", "open", FOSSIL_REPO_NAME], options, cwd=options.dir)
        except ExternalCommandFailedError:
            logger.debug(f"Removing {FOSSIL_REPO_NAME} after failed open in {options.dir}")
            (options.dir / FOSSIL_REPO_NAME).unlink(missing_ok=True)
            raise

    async def update(self, options: CloneOptions) -> None:
        # Autosync pulls from the remote the checkout was cloned from
        await self._run(["fossil", "update"], options, cwd=options.dir)
