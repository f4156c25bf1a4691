"""Get orchestrator - resolve a reference, then clone or update it."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Sequence

from repoherd.exceptions import RepoHerdError
from repoherd.local_path import LocalPathMapper
from repoherd.models.config import HerdConfig
from repoherd.models.options import CloneOptions, GetAction, GetOptions, GetResult
from repoherd.models.remote import RemoteReference
from repoherd.resolver import ReferenceResolver
from repoherd.vcs.registry import BackendRegistry

logger = logging.getLogger(__name__)


class Getter:
    """Clones new references and updates existing working copies.

    A directory that already holds a working copy is never cloned over:
    it is updated when requested and skipped otherwise. A partial
    directory without a marker counts as absent.
    """

    def __init__(
        self,
        config: HerdConfig,
        registry: BackendRegistry | None = None,
    ) -> None:
        self.config = config
        self.registry = registry or BackendRegistry(vcs_overrides=config.vcs_overrides)
        self.mapper = LocalPathMapper(config, self.registry)
        self.resolver = ReferenceResolver(config, self.mapper)

    def plan(
        self,
        reference: str,
        options: GetOptions,
        cwd: Path | None = None,
    ) -> tuple[RemoteReference, Path]:
        """Resolve a reference and apply the private (SSH) rewrite."""
        remote, local_dir = self.resolver.resolve(reference, cwd)
        if options.private:
            remote = remote.to_ssh()
            logger.debug(f"Using SSH remote {remote.url}")
        return remote, local_dir

    async def get(
        self,
        reference: str,
        options: GetOptions | None = None,
        cwd: Path | None = None,
    ) -> GetResult:
        """Clone or update a single reference.

        Raises:
            RepoHerdError: Resolution or backend failures, unchanged
        """
        options = options or GetOptions()
        remote, local_dir = self.plan(reference, options, cwd)
        return await self._execute(reference, remote, local_dir, options)

    async def get_many(
        self,
        references: Sequence[str],
        options: GetOptions | None = None,
        *,
        parallel: bool = False,
        cwd: Path | None = None,
    ) -> list[GetResult | RepoHerdError]:
        """Get several references, returning results in input order.

        References that map to the same local directory always run one
        after another; with ``parallel`` distinct directories run
        concurrently. Failures are returned in place of results.
        """
        options = options or GetOptions()
        results: list[GetResult | RepoHerdError | None] = [None] * len(references)
        groups: dict[Path, list[tuple[int, RemoteReference]]] = {}

        for index, reference in enumerate(references):
            try:
                remote, local_dir = self.plan(reference, options, cwd)
            except RepoHerdError as e:
                results[index] = e
                continue
            groups.setdefault(local_dir, []).append((index, remote))

        async def run_group(local_dir: Path, members: list[tuple[int, RemoteReference]]) -> None:
            for index, remote in members:
                try:
                    results[index] = await self._execute(
                        references[index], remote, local_dir, options
                    )
                except RepoHerdError as e:
                    logger.debug(f"{references[index]} failed: {e}")
                    results[index] = e

        if parallel:
            await asyncio.gather(*(run_group(d, m) for d, m in groups.items()))
        else:
            for local_dir, members in groups.items():
                await run_group(local_dir, members)

        return results  # type: ignore[return-value]

    async def _execute(
        self,
        reference: str,
        remote: RemoteReference,
        local_dir: Path,
        options: GetOptions,
    ) -> GetResult:
        backend = self.registry.identify(local_dir)

        if backend is not None:
            if not options.update:
                logger.info(f"Exists: {local_dir}")
                action = GetAction.SKIPPED
            else:
                logger.info(f"Updating {local_dir} ({backend.name})")
                await backend.update(CloneOptions(dir=local_dir, silent=options.silent))
                action = GetAction.UPDATED
        else:
            kind = remote.vcs or options.vcs
            backend = self.registry.backend(kind) if kind else self.registry.select_for_url(remote.url)
            logger.info(f"Cloning {remote.url} -> {local_dir} ({backend.name})")
            await backend.clone(
                CloneOptions(
                    url=remote.url,
                    dir=local_dir,
                    shallow=options.shallow,
                    branch=options.branch,
                    silent=options.silent,
                )
            )
            action = GetAction.CLONED

        return GetResult(
            reference=reference,
            url=remote.url,
            local_dir=local_dir,
            vcs=backend.kind,
            action=action,
        )
