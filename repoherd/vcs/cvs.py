"""Placeholder backend for CVS working copies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from repoherd.exceptions import UnsupportedVCSError
from repoherd.vcs.base import VCSBackend, VCSKind

if TYPE_CHECKING:
    from repoherd.models.options import CloneOptions


class CVSBackend(VCSBackend):
    """Recognizes CVS checkouts so they fail loudly instead of being re-cloned."""

    kind = VCSKind.CVS

    async def clone(self, options: CloneOptions) -> None:
        raise UnsupportedVCSError(self.name, "clone", "CVS is not supported")

    async def update(self, options: CloneOptions) -> None:
        raise UnsupportedVCSError(self.name, "update", "CVS is not supported")
