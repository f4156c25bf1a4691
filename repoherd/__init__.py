"""repoherd - clone and update remote repositories into a predictable local tree."""

from repoherd.getter import Getter
from repoherd.models import GetOptions, GetResult, HerdConfig, RemoteReference
from repoherd.vcs import BackendRegistry, VCSKind

__version__ = "0.1.0"
__all__ = [
    "Getter",
    "GetOptions",
    "GetResult",
    "HerdConfig",
    "RemoteReference",
    "BackendRegistry",
    "VCSKind",
]
