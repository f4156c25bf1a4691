"""Mapping between remote URLs and paths under the local roots."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

from repoherd.exceptions import AmbiguousLocalPathError
from repoherd.models.config import HerdConfig
from repoherd.models.remote import RemoteReference
from repoherd.vcs.base import VCSKind
from repoherd.vcs.registry import BackendRegistry

logger = logging.getLogger(__name__)


@dataclass
class LocalRepository:
    """A working copy found under one of the roots."""

    root: Path
    path: Path
    vcs: VCSKind

    @property
    def relative_path(self) -> str:
        """Path below the root, with forward slashes."""
        return self.path.relative_to(self.root).as_posix()


class LocalPathMapper:
    """Computes the canonical local path for a remote and finds existing clones."""

    def __init__(self, config: HerdConfig, registry: BackendRegistry | None = None) -> None:
        self.config = config
        self.registry = registry or BackendRegistry()

    def checked_roots(self, roots: Sequence[Path] | None = None) -> list[Path]:
        """Validate a root list; the configured roots are used when none is given."""
        roots = list(self.config.roots if roots is None else roots)
        if not roots:
            raise AmbiguousLocalPathError("No local repository roots configured")

        seen: set[Path] = set()
        checked = []
        for root in roots:
            if not root.is_absolute():
                raise AmbiguousLocalPathError(f"Root is not absolute: {root}", roots)
            normalized = Path(os.path.normpath(root))
            if normalized in seen:
                raise AmbiguousLocalPathError(f"Root listed more than once: {root}", roots)
            seen.add(normalized)
            checked.append(normalized)
        return checked

    def map_to_local(
        self,
        remote: RemoteReference,
        roots: Sequence[Path] | None = None,
    ) -> Path:
        """Local path for a remote: ``root/host/path...``.

        An existing working copy under any root wins; otherwise the
        first root is used.
        """
        roots = self.checked_roots(roots)
        segments = [remote.host, *remote.path_segments]

        for root in roots:
            candidate = root.joinpath(*segments)
            if self.registry.identify_kind(candidate) is not None:
                logger.debug(f"Existing working copy for {remote.url} at {candidate}")
                return candidate

        return roots[0].joinpath(*segments)

    def root_for(self, path: Path) -> Path | None:
        """Deepest configured root containing ``path``."""
        path = Path(os.path.normpath(path))
        containing = [
            root for root in self.checked_roots() if path == root or root in path.parents
        ]
        if not containing:
            return None
        return max(containing, key=lambda root: len(root.parts))

    def walk(self) -> Iterator[LocalRepository]:
        """Yield every working copy under every root, in sorted order.

        The walk does not descend into a working copy once found, and does
        not follow symlinked directories.
        """
        for root in self.checked_roots():
            if root.is_dir():
                yield from self._walk_dir(root, root)

    def _walk_dir(self, root: Path, directory: Path) -> Iterator[LocalRepository]:
        try:
            entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
        except OSError as e:
            logger.warning(f"Cannot read {directory}: {e}")
            return

        for entry in entries:
            if not entry.is_dir(follow_symlinks=False):
                continue
            path = Path(entry.path)
            kind = self.registry.identify_kind(path)
            if kind is not None:
                yield LocalRepository(root=root, path=path, vcs=kind)
            elif not entry.name.startswith("."):
                yield from self._walk_dir(root, path)
