"""Backend registry: classify existing working copies and pick backends for new clones."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from urllib.parse import urlsplit

from repoherd.vcs.base import VCSBackend, VCSKind
from repoherd.vcs.bazaar import BazaarBackend
from repoherd.vcs.cvs import CVSBackend
from repoherd.vcs.darcs import DarcsBackend
from repoherd.vcs.fossil import FOSSIL_REPO_NAME, FossilBackend
from repoherd.vcs.git import GitBackend, GitSubversionBackend
from repoherd.vcs.mercurial import MercurialBackend
from repoherd.vcs.runner import CommandRunner
from repoherd.vcs.subversion import SubversionBackend

logger = logging.getLogger(__name__)

# Checked in order; .git/svn must precede .git
MARKERS: tuple[tuple[str, VCSKind], ...] = (
    (".git/svn", VCSKind.GIT_SUBVERSION),
    (".git", VCSKind.GIT),
    (".svn", VCSKind.SUBVERSION),
    (".hg", VCSKind.MERCURIAL),
    ("_darcs", VCSKind.DARCS),
    (".fslckout", VCSKind.FOSSIL),
    ("_FOSSIL_", VCSKind.FOSSIL),
    (FOSSIL_REPO_NAME, VCSKind.FOSSIL),
    (".bzr", VCSKind.BAZAAR),
    ("CVS", VCSKind.CVS),
)

# "<vcs>+<scheme>://" forms; svn+ssh and git+ssh are real schemes, not prefixes
SCHEME_PREFIXES: dict[str, VCSKind] = {
    "git-svn": VCSKind.GIT_SUBVERSION,
    "hg": VCSKind.MERCURIAL,
    "darcs": VCSKind.DARCS,
    "bzr": VCSKind.BAZAAR,
    "fossil": VCSKind.FOSSIL,
}

SVN_SCHEMES = ("svn", "svn+ssh")

# (host pattern, path prefix, kind)
HOST_RULES: tuple[tuple[str, str, VCSKind], ...] = (
    (r".*\.googlecode\.com", "/svn", VCSKind.SUBVERSION),
    (r"svn\.code\.sf\.net", "", VCSKind.SUBVERSION),
    (r".*\.svn\.sourceforge\.net", "", VCSKind.SUBVERSION),
    (r"svn\.apache\.org", "", VCSKind.SUBVERSION),
    (r"hub\.darcs\.net", "", VCSKind.DARCS),
)

_PREFIX_RE = re.compile(r"^(?P<vcs>[a-z-]+)\+(?P<url>[a-zA-Z][a-zA-Z0-9+.-]*://.+)$")

BACKEND_CLASSES: dict[VCSKind, type[VCSBackend]] = {
    VCSKind.GIT: GitBackend,
    VCSKind.SUBVERSION: SubversionBackend,
    VCSKind.GIT_SUBVERSION: GitSubversionBackend,
    VCSKind.MERCURIAL: MercurialBackend,
    VCSKind.DARCS: DarcsBackend,
    VCSKind.BAZAAR: BazaarBackend,
    VCSKind.FOSSIL: FossilBackend,
    VCSKind.CVS: CVSBackend,
}


def split_vcs_prefix(url: str) -> tuple[VCSKind | None, str]:
    """Separate an explicit ``<vcs>+`` prefix from a URL.

    Examples:
        >>> split_vcs_prefix("git-svn+https://example.com/repo")
        (<VCSKind.GIT_SUBVERSION: 'git-svn'>, 'https://example.com/repo')
        >>> split_vcs_prefix("svn+ssh://example.com/repo")
        (None, 'svn+ssh://example.com/repo')
    """
    match = _PREFIX_RE.match(url)
    if match and match.group("vcs") in SCHEME_PREFIXES:
        return SCHEME_PREFIXES[match.group("vcs")], match.group("url")
    return None, url


class BackendRegistry:
    """Static tables mapping markers and URLs to backends.

    Args:
        runner: Command runner shared by the built-in backends
        overrides: Backend instances to use instead of the built-in ones
        vcs_overrides: URL prefix -> kind, consulted before the host rules
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        overrides: dict[VCSKind, VCSBackend] | None = None,
        vcs_overrides: dict[str, VCSKind] | None = None,
    ) -> None:
        self.runner = runner or CommandRunner()
        self._backends: dict[VCSKind, VCSBackend] = {
            kind: backend_class(self.runner) for kind, backend_class in BACKEND_CLASSES.items()
        }
        if overrides:
            self._backends.update(overrides)
        self.vcs_overrides = dict(vcs_overrides or {})

    def backend(self, kind: VCSKind) -> VCSBackend:
        """Get the backend registered for a kind."""
        return self._backends[kind]

    def identify_kind(self, path: Path) -> VCSKind | None:
        """Kind of the working copy at ``path``, or None if there is none."""
        if not path.is_dir():
            return None
        for marker, kind in MARKERS:
            if (path / marker).exists():
                logger.debug(f"Found {marker} in {path}: {kind.value}")
                return kind
        return None

    def identify(self, path: Path) -> VCSBackend | None:
        """Backend owning the working copy at ``path``, or None."""
        kind = self.identify_kind(path)
        return self._backends[kind] if kind is not None else None

    def select_kind_for_url(self, url: str) -> VCSKind:
        """Choose a kind for a new clone from the URL alone."""
        explicit, url = split_vcs_prefix(url)
        if explicit is not None:
            return explicit

        matching = [prefix for prefix in self.vcs_overrides if url.startswith(prefix)]
        if matching:
            return self.vcs_overrides[max(matching, key=len)]

        parts = urlsplit(url)
        if parts.scheme in SVN_SCHEMES:
            return VCSKind.SUBVERSION

        host = (parts.hostname or "").lower()
        for pattern, path_prefix, kind in HOST_RULES:
            if re.fullmatch(pattern, host) and parts.path.startswith(path_prefix):
                return kind

        return VCSKind.GIT

    def select_for_url(self, url: str) -> VCSBackend:
        """Backend for a new clone of ``url``."""
        kind = self.select_kind_for_url(url)
        logger.debug(f"Selected {kind.value} for {url}")
        return self._backends[kind]
