"""Turn user-supplied references into remote URLs and local paths.

Accepted forms:
- absolute URLs, optionally with a ``<vcs>+`` prefix (``git-svn+https://...``)
- scp-style addresses (``git@github.com:owner/repo``)
- shorthands (``repo``, ``owner/repo``, ``host/owner/repo``)
- dot-paths relative to the working directory (``./repo``, ``../other``)

Nothing here touches the network.
"""

from __future__ import annotations

import configparser
import logging
import os
import re
from pathlib import Path

from repoherd.exceptions import UnresolvedReferenceError
from repoherd.local_path import LocalPathMapper
from repoherd.models.config import HerdConfig
from repoherd.models.remote import RemoteReference
from repoherd.vcs.base import VCSKind
from repoherd.vcs.registry import BackendRegistry, split_vcs_prefix

logger = logging.getLogger(__name__)

_URL_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_SCP_RE = re.compile(r"^(?P<user>[^@/\s]+)@(?P<host>[^:/\s]+):(?P<path>[^/].*)$")


def read_remote_url(path: Path, kind: VCSKind) -> str | None:
    """Remote recorded in a working copy's metadata, if it can be read offline.

    Supports git (``remote.origin.url``) and Mercurial (``paths.default``).
    """
    if kind in (VCSKind.GIT, VCSKind.GIT_SUBVERSION):
        config_file, section, key = path / ".git" / "config", 'remote "origin"', "url"
    elif kind == VCSKind.MERCURIAL:
        config_file, section, key = path / ".hg" / "hgrc", "paths", "default"
    else:
        return None

    if not config_file.is_file():
        return None

    parser = configparser.ConfigParser(strict=False, interpolation=None)
    try:
        parser.read(config_file, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError) as e:
        logger.warning(f"Cannot parse {config_file}: {e}")
        return None
    return parser.get(section, key, fallback=None)


class ReferenceResolver:
    """Resolves references against a configuration.

    Args:
        config: Roots and shorthand defaults
        mapper: Local path mapper; built from ``config`` when omitted
    """

    def __init__(
        self,
        config: HerdConfig,
        mapper: LocalPathMapper | None = None,
    ) -> None:
        self.config = config
        self.mapper = mapper or LocalPathMapper(config)

    @property
    def registry(self) -> BackendRegistry:
        return self.mapper.registry

    def resolve(self, reference: str, cwd: Path | None = None) -> tuple[RemoteReference, Path]:
        """Resolve a reference to its remote and its local directory."""
        raw = reference.strip()
        if not raw:
            raise UnresolvedReferenceError(reference, "empty reference")

        if _is_dot_path(raw):
            return self._resolve_dot_path(raw, cwd or Path.cwd())

        remote = self.to_remote(raw)
        local_dir = self.mapper.map_to_local(remote)
        logger.debug(f"Resolved {reference!r} to {remote.url} at {local_dir}")
        return remote, local_dir

    def to_remote(self, reference: str) -> RemoteReference:
        """Expand a URL, scp-style address or shorthand into a remote reference."""
        raw = reference.strip()

        if _URL_RE.match(raw):
            vcs, url = split_vcs_prefix(raw)
            return self._remote(reference, url.rstrip("/"), vcs)

        scp = _SCP_RE.match(raw)
        if scp:
            url = f"ssh://{scp.group('user')}@{scp.group('host')}/{scp.group('path')}"
            return self._remote(reference, url.rstrip("/"), None)

        segments = [segment for segment in raw.split("/") if segment]
        if not segments:
            raise UnresolvedReferenceError(reference, "empty reference")

        if len(segments) > 1 and "." in segments[0]:
            return self._remote(reference, "https://" + "/".join(segments), None)

        if len(segments) == 1:
            if not self.config.default_user:
                raise UnresolvedReferenceError(
                    reference, "no owner given and no default user configured"
                )
            segments.insert(0, self.config.default_user)

        return self._remote(
            reference, f"https://{self.config.default_host}/" + "/".join(segments), None
        )

    def _remote(self, reference: str, url: str, vcs: VCSKind | None) -> RemoteReference:
        try:
            return RemoteReference(url=url, vcs=vcs)
        except ValueError as e:
            raise UnresolvedReferenceError(reference, f"not a usable URL: {url}") from e

    def _resolve_dot_path(self, reference: str, cwd: Path) -> tuple[RemoteReference, Path]:
        local_dir = Path(os.path.normpath(cwd / reference))

        kind = self.registry.identify_kind(local_dir)
        if kind is not None:
            url = read_remote_url(local_dir, kind)
            if url:
                logger.debug(f"Read remote {url} from {local_dir}")
                return self.to_remote(url), local_dir

        root = self.mapper.root_for(local_dir)
        if root is None or root == local_dir:
            raise UnresolvedReferenceError(
                reference,
                f"{local_dir} is not a working copy with a known remote "
                "and is not under any configured root",
            )

        url = "https://" + local_dir.relative_to(root).as_posix()
        logger.debug(f"Guessed remote {url} for {local_dir} under root {root}")
        return self._remote(reference, url, None), local_dir


def _is_dot_path(reference: str) -> bool:
    first = re.split(r"[\\/]", reference, maxsplit=1)[0]
    return first in (".", "..")
