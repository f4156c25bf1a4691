"""VCS backends and the registry that dispatches to them."""

from repoherd.vcs.base import VCSBackend, VCSKind
from repoherd.vcs.bazaar import BazaarBackend
from repoherd.vcs.cvs import CVSBackend
from repoherd.vcs.darcs import DarcsBackend
from repoherd.vcs.fossil import FossilBackend
from repoherd.vcs.git import GitBackend, GitSubversionBackend
from repoherd.vcs.mercurial import MercurialBackend
from repoherd.vcs.registry import BackendRegistry, split_vcs_prefix
from repoherd.vcs.runner import CommandRunner
from repoherd.vcs.subversion import SubversionBackend

__all__ = [
    "VCSBackend",
    "VCSKind",
    "CommandRunner",
    "BackendRegistry",
    "split_vcs_prefix",
    # Backends
    "GitBackend",
    "GitSubversionBackend",
    "SubversionBackend",
    "MercurialBackend",
    "DarcsBackend",
    "BazaarBackend",
    "FossilBackend",
    "CVSBackend",
]
